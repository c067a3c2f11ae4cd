from __future__ import annotations

"""Upward searches through a document tree.

Both helpers walk from a referenced location toward the root, checking the
location itself first, and return the first node that satisfies a
condition together with its path.
"""

from typing import Any, Callable, Optional, Sequence, Tuple, TYPE_CHECKING

from pagebuilder_toolkit.core.identity import is_node
from pagebuilder_toolkit.core.paths import Path, PathKey, ancestor_paths, get_in

if TYPE_CHECKING:
    from pagebuilder_toolkit.core.registry import ComponentRegistry

__all__ = ["get_closest_parent", "get_parent_which_contains_style_property"]

NodeMatch = Tuple[Path, dict]


def get_closest_parent(
    path: Sequence[PathKey],
    root: Any,
    predicate: Callable[[dict], bool],
) -> Optional[NodeMatch]:
    """Return ``(path, node)`` of the closest ancestor-or-self node matching *predicate*.

    Intermediate values that are not nodes (collections, payload dicts)
    are skipped, as are prefixes that do not resolve.
    """
    for candidate in ancestor_paths(path):
        value = get_in(root, candidate)
        if is_node(value) and predicate(value):
            return candidate, value
    return None


def get_parent_which_contains_style_property(
    path: Sequence[PathKey],
    root: Any,
    property_name: str,
    registry: "ComponentRegistry",
) -> Optional[NodeMatch]:
    """Return the closest node whose payload carries *property_name*.

    A node also qualifies when its type declares a default for the
    property, even if the payload does not store a value yet.
    """

    def carries_property(node: dict) -> bool:
        return property_name in node["value"] or property_name in registry.default_style(node["type"])

    return get_closest_parent(path, root, carries_property)
