from __future__ import annotations

"""Structural merge helpers used by style-only paste.

:func:`extract_styles` cuts a node down to the part that may be
transplanted (no identifiers, no content fields, nested nodes only down to
a depth limit). :func:`deep_merge` then folds that extract into the target
node. Lists are combined with :func:`array_union`: elements are merged by
position, extra source elements are cloned in, and plain values already
present in the target are not duplicated.

Nothing here mutates its inputs, so it can be reused by CLI, GUI and tests.
"""

from typing import Any, List, TYPE_CHECKING

from pagebuilder_toolkit.core.identity import ID_KEY, is_node

if TYPE_CHECKING:
    from pagebuilder_toolkit.core.registry import ComponentRegistry

__all__ = [
    "is_mergeable",
    "clone_value",
    "deep_merge",
    "array_union",
    "contains_node",
    "extract_styles",
]


def is_mergeable(value: Any) -> bool:
    """Composite values (dicts and lists) are merged; everything else is replaced."""
    return isinstance(value, (dict, list))


def clone_value(value: Any) -> Any:
    """Deep copy of the dict/list structure; leaves are shared."""
    if isinstance(value, dict):
        return {key: clone_value(val) for key, val in value.items()}
    if isinstance(value, list):
        return [clone_value(item) for item in value]
    return value


def deep_merge(target: Any, source: Any) -> Any:
    """Merge *source* into *target* and return the result.

    Dict fields from *source* overwrite those of *target*, recursing when
    both sides are dicts or both are lists. Mismatched kinds resolve to a
    clone of *source*.
    """
    if isinstance(target, list) and isinstance(source, list):
        return array_union(target, source)
    if isinstance(target, dict) and isinstance(source, dict):
        merged = {key: clone_value(val) for key, val in target.items()}
        for key, val in source.items():
            if key in target and is_mergeable(val):
                merged[key] = deep_merge(target[key], val)
            else:
                merged[key] = clone_value(val)
        return merged
    return clone_value(source)


def array_union(target: List[Any], source: List[Any]) -> List[Any]:
    """Combine two lists position by position.

    - position missing in *target*: the source element is cloned in;
    - composite source element: merged into the target element there;
    - plain source element: appended unless already in *target*.
    """
    destination = list(target)
    for index, element in enumerate(source):
        if index >= len(target):
            destination.append(clone_value(element))
        elif is_mergeable(element):
            destination[index] = deep_merge(target[index], element)
        elif element not in target:
            destination.append(element)
    return destination


def contains_node(value: Any) -> bool:
    """Return True if *value* is a node or holds one at any nesting level."""
    if is_node(value):
        return True
    if isinstance(value, dict):
        return any(contains_node(val) for val in value.values())
    if isinstance(value, list):
        return any(contains_node(item) for item in value)
    return False


def extract_styles(node: Any, depth: int, registry: "ComponentRegistry") -> Any:
    """Return the style-relevant part of *node*, reaching *depth* levels down.

    Identifiers and the type's declared content fields are dropped.
    Payload fields holding nested nodes (``items`` or any other field) are
    kept while *depth* is positive; each nesting level consumes one unit.
    Non-node values are returned as clones.
    """
    if not is_node(node):
        return clone_value(node)

    excluded = set(registry.content_keys(node["type"]))
    excluded.add(ID_KEY)

    value = {}
    for key, val in node["value"].items():
        if key in excluded:
            continue
        if depth <= 0 and contains_node(val):
            continue
        value[key] = _extract_nested(val, depth, registry)

    return {"type": node["type"], "value": value}


def _extract_nested(value: Any, depth: int, registry: "ComponentRegistry") -> Any:
    if is_node(value):
        return extract_styles(value, depth - 1, registry)
    if isinstance(value, dict):
        return {key: _extract_nested(val, depth, registry) for key, val in value.items()}
    if isinstance(value, list):
        return [_extract_nested(item, depth, registry) for item in value]
    return value
