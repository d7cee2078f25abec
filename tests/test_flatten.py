from i18n_sync.flatten import (
    FlatEntry, Leaf, Node, flatten_content, flatten_keys_with_values, has_path,
    leaf_paths, namespace_of, set_path, to_translation_value,
)


def test_flattens_nested_objects_in_insertion_order():
    content = {"title": "Title", "form": {"email": "Email", "errors": {"required": "Required"}}, "ok": "OK"}

    entries = flatten_content(content, "main")

    assert entries == [
        FlatEntry("main.title", "Title"),
        FlatEntry("main.form.email", "Email"),
        FlatEntry("main.form.errors.required", "Required"),
        FlatEntry("main.ok", "OK"),
    ]


def test_flattening_is_deterministic():
    content = {"b": {"y": "Y", "x": "X"}, "a": "A"}

    assert flatten_content(content, "ns") == flatten_content(content, "ns")


def test_key_set_does_not_depend_on_key_order():
    first = flatten_content({"a": "A", "b": {"c": "C"}}, "ns")
    second = flatten_content({"b": {"c": "C"}, "a": "A"}, "ns")

    assert sorted(first, key=lambda e: e.key) == sorted(second, key=lambda e: e.key)


def test_non_string_leaves_are_skipped():
    content = {"count": 3, "flag": True, "items": ["a"], "none": None, "text": "Text"}

    assert flatten_content(content, "main") == [FlatEntry("main.text", "Text")]


def test_tagged_variant_structure():
    value = to_translation_value({"a": "A", "b": {"c": "C"}})

    assert value == Node({"a": Leaf("A"), "b": Node({"c": Leaf("C")})})
    assert flatten_keys_with_values(value, "x") == [FlatEntry("x.a", "A"), FlatEntry("x.b.c", "C")]


def test_empty_object_yields_nothing():
    assert flatten_content({}, "main") == []
    assert flatten_content({"group": {}}, "main") == []


def test_path_helpers():
    doc = {"a": {"b": "B"}, "c": "C"}

    assert leaf_paths(doc) == [(("a", "b"), "B"), (("c",), "C")]
    assert has_path(doc, ("a", "b"))
    assert not has_path(doc, ("a", "x"))
    assert not has_path(doc, ("c", "d"))

    set_path(doc, ("a", "d"), "D")
    set_path(doc, ("e", "f"), "F")
    assert doc == {"a": {"b": "B", "d": "D"}, "c": "C", "e": {"f": "F"}}


def test_namespace_of():
    assert namespace_of("main.json") == "main"
    assert namespace_of("common.errors.json") == "common.errors"
