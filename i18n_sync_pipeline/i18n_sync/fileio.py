# i18n_sync/fileio.py
from __future__ import annotations
import json
import os
from typing import Any, Dict, List, Optional

from .errors import TranslationFileError
from .formatting import FormatOptions, format_text

# --------- raw filesystem ---------

def read_dir(path: str) -> List[str]:
    return sorted(os.listdir(path))

def read_file(path: str) -> str:
    # utf-8-sig drops a leading BOM some editors add
    with open(path, "r", encoding="utf-8-sig") as f:
        return f.read()

def write_file(path: str, text: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(text)

def mkdir(path: str, recursive: bool = True) -> None:
    if recursive:
        os.makedirs(path, exist_ok=True)
    elif not os.path.isdir(path):
        os.mkdir(path)

# --------- translation files ---------

def _check_schema(data: Any, path: str, where: str = "") -> None:
    if not isinstance(data, dict):
        raise TranslationFileError(path, f"{where or 'root'} must be an object")
    for k, v in data.items():
        if isinstance(v, dict):
            _check_schema(v, path, f"{where}.{k}" if where else k)
        elif not isinstance(v, str):
            raise TranslationFileError(path, f"value of '{where + '.' if where else ''}{k}' must be a string or object")

def read_json(path: str) -> Dict[str, Any]:
    """Read a translation file; undecodable bytes, malformed JSON or non-string leaves raise TranslationFileError."""
    try:
        text = read_file(path)
    except UnicodeDecodeError as e:
        raise TranslationFileError(path, f"not valid UTF-8 ({e})") from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise TranslationFileError(path, str(e)) from e
    _check_schema(data, path)
    return data

def read_json_or_empty(path: str) -> Dict[str, Any]:
    if not os.path.isfile(path):
        return {}
    return read_json(path)

def write_json(path: str, content: Dict[str, Any], options: Optional[FormatOptions] = None) -> None:
    text = format_text(json.dumps(content, ensure_ascii=False), options, parser="json")
    write_file(path, text)

def list_json_files(path: str, create: bool = True) -> List[str]:
    """JSON files in `path`; a missing directory is created and reads as empty."""
    try:
        names = read_dir(path)
    except FileNotFoundError:
        if create:
            mkdir(path, recursive=True)
        return []
    return [n for n in names if n.endswith(".json") and os.path.isfile(os.path.join(path, n))]

def list_locale_dirs(translations_path: str) -> List[str]:
    try:
        names = read_dir(translations_path)
    except FileNotFoundError:
        mkdir(translations_path, recursive=True)
        return []
    return [n for n in names if os.path.isdir(os.path.join(translations_path, n))]
