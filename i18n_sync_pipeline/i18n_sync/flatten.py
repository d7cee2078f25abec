# i18n_sync/flatten.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Tuple, Union


@dataclass(frozen=True)
class Leaf:
    text: str


@dataclass(frozen=True)
class Node:
    children: Dict[str, "TranslationValue"] = field(default_factory=dict)


TranslationValue = Union[Leaf, Node]
Path = Tuple[str, ...]


@dataclass(frozen=True)
class FlatEntry:
    key: str
    value: str


def to_translation_value(raw: Any) -> TranslationValue:
    """
    Convert parsed JSON into Leaf/Node. Anything that is neither a string nor
    an object is dropped; schema checks happen when the file is read.
    """
    if isinstance(raw, str):
        return Leaf(raw)
    children: Dict[str, TranslationValue] = {}
    if isinstance(raw, dict):
        for k, v in raw.items():
            if isinstance(v, (str, dict)):
                children[k] = to_translation_value(v)
    return Node(children)


def iter_leaves(value: TranslationValue, path: Path = ()) -> Iterator[Tuple[Path, str]]:
    if isinstance(value, Leaf):
        if path:
            yield path, value.text
        return
    for key, child in value.children.items():
        yield from iter_leaves(child, path + (key,))


def flatten_keys_with_values(value: TranslationValue, namespace: str) -> List[FlatEntry]:
    """
    One FlatEntry per string leaf, keyed `<namespace>.<dot.path>`, in the
    insertion order of the source objects.
    """
    return [FlatEntry(f"{namespace}.{'.'.join(path)}", text) for path, text in iter_leaves(value)]


def flatten_content(raw: Any, namespace: str) -> List[FlatEntry]:
    return flatten_keys_with_values(to_translation_value(raw), namespace)


def leaf_paths(raw: Any) -> List[Tuple[Path, str]]:
    return list(iter_leaves(to_translation_value(raw)))


def has_path(doc: Any, path: Path) -> bool:
    node = doc
    for part in path:
        if not isinstance(node, dict) or part not in node:
            return False
        node = node[part]
    return True


def set_path(doc: Dict[str, Any], path: Path, value: str) -> None:
    node = doc
    for part in path[:-1]:
        child = node.get(part)
        if not isinstance(child, dict):
            child = node[part] = {}
        node = child
    node[path[-1]] = value


def namespace_of(file_name: str) -> str:
    return file_name[:-len(".json")] if file_name.endswith(".json") else file_name
