"""
JSON document model and dot-path helpers.

A document is a plain JSON value tree:

    None | bool | int | float | str | list[Document] | dict[str, Document]

Paths are dot-delimited keys ("profile.name"). A segment that meets a list is
read as an index when it is a non-negative decimal integer within range
("tags.0"); any other segment misses. `None` addresses the document root.

Helpers that change a document mutate it in place; `set_path` also returns the
(possibly new) root because assigning at the root, or through a scalar root,
replaces it.
"""

from __future__ import annotations

import copy
from types import SimpleNamespace
from typing import Any, Union

from pydantic import TypeAdapter

from .errors import StoreTypeError

Document = Union[None, bool, int, float, str, list["Document"], dict[str, "Document"]]

MISSING: Any = object()

_ANY_ADAPTER: TypeAdapter[Any] = TypeAdapter(Any)


def to_document(value: Any) -> Document:
    """
    Normalize a native value into a plain JSON document.

    Pydantic models, dataclasses, tuples and the like are dumped the way
    pydantic serializes them in JSON mode; the result shares no containers
    with `value`.
    """
    return _ANY_ADAPTER.dump_python(value, mode="json")


def as_namespace(doc: Document) -> Any:
    """Return the same data with mappings exposed as attribute-access objects."""
    if isinstance(doc, dict):
        return SimpleNamespace(**{str(k): as_namespace(v) for k, v in doc.items()})
    if isinstance(doc, list):
        return [as_namespace(v) for v in doc]
    return doc


def split_path(path: str) -> list[str]:
    return path.split(".")


def _as_index(segment: str, length: int) -> int | None:
    if segment.isascii() and segment.isdigit():
        idx = int(segment)
        if idx < length:
            return idx
    return None


def _child(node: Any, segment: str) -> Any:
    if isinstance(node, dict):
        return node.get(segment, MISSING)
    if isinstance(node, list):
        idx = _as_index(segment, len(node))
        return MISSING if idx is None else node[idx]
    return MISSING


def lookup(doc: Document, path: str | None) -> Any:
    """Return the value at `path`, or MISSING when any segment is absent."""
    if path is None:
        return doc
    node: Any = doc
    for segment in split_path(path):
        node = _child(node, segment)
        if node is MISSING:
            return MISSING
    return node


def get_path(doc: Document, path: str | None, default: Any = None) -> Any:
    value = lookup(doc, path)
    return default if value is MISSING else value


def has_path(doc: Document, path: str) -> bool:
    return lookup(doc, path) is not MISSING


def set_path(doc: Document, path: str | None, value: Document) -> Document:
    """
    Assign `value` at `path`, creating missing intermediate mappings.

    Scalar intermediates are overwritten with mappings. Raises StoreTypeError
    when a list is met with a segment that is not an in-range index.
    """
    if path is None:
        return value

    segments = split_path(path)
    root: Any = doc if isinstance(doc, (dict, list)) else {}
    node = root
    for depth, segment in enumerate(segments[:-1]):
        if isinstance(node, dict):
            child = node.get(segment)
            if not isinstance(child, (dict, list)):
                child = node[segment] = {}
        else:
            idx = _list_index(node, segment, segments[:depth])
            child = node[idx]
            if not isinstance(child, (dict, list)):
                child = node[idx] = {}
        node = child

    last = segments[-1]
    if isinstance(node, dict):
        node[last] = value
    else:
        node[_list_index(node, last, segments[:-1])] = value
    return root


def _list_index(node: list[Any], segment: str, parent: list[str]) -> int:
    idx = _as_index(segment, len(node))
    if idx is None:
        raise StoreTypeError(".".join(parent) or None, "a mapping", node)
    return idx


def remove_path(doc: Document, path: str | None) -> Any:
    """Remove the value at `path` and return it, or MISSING when absent."""
    if path is None:
        return MISSING
    *parents, last = split_path(path)
    parent = lookup(doc, ".".join(parents)) if parents else doc
    if isinstance(parent, dict) and last in parent:
        return parent.pop(last)
    if isinstance(parent, list):
        idx = _as_index(last, len(parent))
        if idx is not None:
            return parent.pop(idx)
    return MISSING


def merge_documents(base: Document, override: Document) -> Document:
    """
    Recursively merge `override` over `base` into a new document.

    Mappings merge key by key with `override` winning; any other value,
    lists included, replaces the base value wholesale.
    """
    if isinstance(base, dict) and isinstance(override, dict):
        merged = {k: copy.deepcopy(v) for k, v in base.items()}
        for key, value in override.items():
            merged[key] = merge_documents(merged[key], value) if key in merged else copy.deepcopy(value)
        return merged
    return copy.deepcopy(override)


def same_value(a: Any, b: Any) -> bool:
    """Equality that does not conflate True with 1 or 1 with 1.0."""
    return type(a) is type(b) and a == b
