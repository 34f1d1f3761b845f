from __future__ import annotations

from dataclasses import dataclass

import pytest

from jsonstore.document import (
    MISSING,
    get_path,
    has_path,
    lookup,
    merge_documents,
    remove_path,
    set_path,
    to_document,
)
from jsonstore.errors import StoreTypeError


def test_set_path_creates_and_overwrites_intermediates():
    doc = {"a": "scalar"}
    out = set_path(doc, "a.b.c", 1)
    assert out is doc
    assert doc == {"a": {"b": {"c": 1}}}


def test_set_path_at_root_replaces_document():
    assert set_path({"a": 1}, None, [1, 2]) == [1, 2]
    assert set_path("scalar", "k", "v") == {"k": "v"}


def test_set_path_through_list_requires_index():
    doc = {"items": [{"n": 1}]}
    set_path(doc, "items.0.n", 2)
    assert doc == {"items": [{"n": 2}]}

    with pytest.raises(StoreTypeError) as exc:
        set_path(doc, "items.5.n", 3)
    assert exc.value.path == "items"
    assert doc == {"items": [{"n": 2}]}


def test_lookup_distinguishes_null_from_missing():
    doc = {"a": None}
    assert lookup(doc, "a") is None
    assert lookup(doc, "b") is MISSING
    assert has_path(doc, "a") is True
    assert has_path(doc, "a.b") is False
    assert get_path(doc, "b", "d") == "d"


def test_numeric_segment_on_mapping_is_a_key():
    doc = {"0": "zero", "list": ["x"]}
    assert get_path(doc, "0") == "zero"
    assert get_path(doc, "list.0") == "x"
    assert get_path(doc, "list.-1") is None


def test_remove_path_from_mapping_and_list():
    doc = {"a": {"b": 1}, "l": [1, 2, 3]}
    assert remove_path(doc, "a.b") == 1
    assert remove_path(doc, "l.1") == 2
    assert remove_path(doc, "a.zzz") is MISSING
    assert remove_path(doc, None) is MISSING
    assert doc == {"a": {}, "l": [1, 3]}


def test_merge_documents_mappings_recurse_lists_replace():
    base = {"a": {"x": 1, "y": 2}, "tags": ["d1", "d2"], "keep": True}
    override = {"a": {"y": 20, "z": 30}, "tags": ["p"]}
    merged = merge_documents(base, override)

    assert merged == {"a": {"x": 1, "y": 20, "z": 30}, "tags": ["p"], "keep": True}
    merged["a"]["x"] = 99
    assert base["a"]["x"] == 1


def test_merge_documents_non_mapping_override_wins():
    assert merge_documents({"a": 1}, [1]) == [1]
    assert merge_documents([1, 2], [5]) == [5]


def test_to_document_normalizes_native_values():
    @dataclass
    class Point:
        x: int
        y: int

    doc = to_document({"p": Point(1, 2), "t": (1, 2)})
    assert doc == {"p": {"x": 1, "y": 2}, "t": [1, 2]}


def test_to_document_copies_containers():
    source = {"a": [1]}
    doc = to_document(source)
    doc["a"].append(2)
    assert source == {"a": [1]}
