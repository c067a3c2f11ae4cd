from __future__ import annotations

"""Node identifier assignment.

Every node stores its identifier in ``value["_id"]``. Content that is
inserted, cloned or batch-inserted goes through :func:`set_ids` so that the
live document never holds two nodes with the same identifier.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional
import uuid

__all__ = [
    "ID_KEY",
    "IdOptions",
    "generate_node_id",
    "is_node",
    "node_id",
    "set_ids",
    "fill_missing_ids",
    "collect_ids",
    "find_duplicate_ids",
]

ID_KEY = "_id"


@dataclass(frozen=True)
class IdOptions:
    """Options honoured by :func:`set_ids`.

    Attributes
    ----------
    keep_existing_ids
        Preserve identifiers already present and only fill the missing ones.
        Callers that replace an item with a new version of itself use this to
        keep its identity; they are responsible for not duplicating ids.
    """

    keep_existing_ids: bool = False

    @classmethod
    def coerce(cls, options: Any) -> "IdOptions":
        if options is None:
            return cls()
        if isinstance(options, IdOptions):
            return options
        if isinstance(options, Mapping):
            return cls(keep_existing_ids=bool(options.get("keep_existing_ids", False)))
        raise TypeError(f"Unsupported id options: {options!r}")


def generate_node_id() -> str:
    """Return a fresh random identifier (128-bit token, hex encoded)."""
    return uuid.uuid4().hex


def is_node(value: Any) -> bool:
    """Return True if *value* has the ``{"type": ..., "value": {...}}`` shape."""
    return isinstance(value, dict) and "type" in value and isinstance(value.get("value"), dict)


def node_id(node: Any) -> Optional[str]:
    if not is_node(node):
        return None
    return node["value"].get(ID_KEY)


def _rebuild(tree: Any, assign: Callable[[Optional[str]], str]) -> Any:
    if isinstance(tree, list):
        return [_rebuild(item, assign) for item in tree]
    if isinstance(tree, dict):
        rebuilt = {key: _rebuild(val, assign) for key, val in tree.items()}
        if is_node(tree):
            rebuilt["value"][ID_KEY] = assign(tree["value"].get(ID_KEY))
        return rebuilt
    return tree


def set_ids(tree: Any, id_options: Any = None, generator: Callable[[], str] = generate_node_id) -> Any:
    """Return a deep copy of *tree* where every node carries a fresh identifier.

    Works on a single node, a list of nodes or any structure containing
    nodes. The result shares no mutable container with the input.
    """
    options = IdOptions.coerce(id_options)
    if options.keep_existing_ids:
        return fill_missing_ids(tree, generator)
    return _rebuild(tree, lambda _old: generator())


def fill_missing_ids(tree: Any, generator: Callable[[], str] = generate_node_id) -> Any:
    """Return a deep copy of *tree* with ids assigned only to nodes lacking one."""
    return _rebuild(tree, lambda old: old if old else generator())


def collect_ids(tree: Any) -> List[str]:
    """Return every node identifier in *tree*, in depth-first order."""
    found: List[str] = []
    stack = [tree]
    while stack:
        current = stack.pop()
        if isinstance(current, dict):
            if is_node(current) and current["value"].get(ID_KEY):
                found.append(current["value"][ID_KEY])
            stack.extend(reversed(list(current.values())))
        elif isinstance(current, list):
            stack.extend(reversed(current))
    return found


def find_duplicate_ids(tree: Any) -> List[str]:
    counts = Counter(collect_ids(tree))
    return sorted(ident for ident, count in counts.items() if count > 1)
