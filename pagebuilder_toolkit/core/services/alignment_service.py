from __future__ import annotations

"""Alignment cycling on the nearest ancestor that declares the property.

Starting from the active node, the service finds the closest node whose
payload carries the alignment property (or whose type declares a default
for it), advances the value one step through a fixed cycle and returns the
rewritten payload together with where it lives relative to the calling
collection. The collection component performs the write.
"""

from dataclasses import dataclass
import logging
from typing import Any, Optional, Sequence

from pagebuilder_toolkit.core.models import AlignDirection, DeviceMode
from pagebuilder_toolkit.core.paths import Path, PathKey, relative_path
from pagebuilder_toolkit.core.registry import ComponentRegistry
from pagebuilder_toolkit.core.traversal import get_parent_which_contains_style_property

__all__ = [
    "VERTICAL_ALIGNS",
    "HORIZONTAL_ALIGNS",
    "AlignmentChange",
    "AlignmentService",
    "cycle_value",
    "horizontal_align_property",
]

logger = logging.getLogger(__name__)

VERTICAL_ALIGNS = ("top", "center", "bottom")
HORIZONTAL_ALIGNS = ("left", "center", "right")
VERTICAL_ALIGN_PROPERTY = "verticalAlign"


def cycle_value(values: Sequence[Any], current: Any, direction: Any) -> Any:
    """Step *current* one position through *values*, wrapping at both ends.

    An unknown *current* counts as the first entry.
    """
    step = 1 if AlignDirection(direction) is AlignDirection.INCREASE else -1
    position = values.index(current) if current in values else 0
    return values[(position + step) % len(values)]


def horizontal_align_property(device_mode: str) -> str:
    """``horizontalAlign`` on desktop, ``<device>HorizontalAlign`` otherwise."""
    mode = DeviceMode(device_mode)
    if mode is DeviceMode.DESKTOP:
        return "horizontalAlign"
    return f"{mode.value}HorizontalAlign"


@dataclass(frozen=True)
class AlignmentChange:
    """A resolved alignment rewrite.

    Attributes
    ----------
    property_name
        Style property being cycled.
    previous
        Effective value before the change (after default fallback).
    value
        New value.
    target_path
        Absolute path of the node whose payload changes.
    relative_path
        The same path relative to the calling collection; its first key is
        the index of the collection item containing the node.
    payload
        The node payload with the property rewritten.
    """

    property_name: str
    previous: Any
    value: Any
    target_path: Path
    relative_path: Path
    payload: dict


class AlignmentService:
    """Compute alignment rewrites for a collection component."""

    def __init__(self, registry: ComponentRegistry) -> None:
        self._registry = registry
        self._logger = logging.getLogger(f"{__name__}.AlignmentService")

    def vertical(
        self,
        document: Any,
        active_path: Optional[Sequence[PathKey]],
        collection_path: Sequence[PathKey],
        direction: Any,
    ) -> Optional[AlignmentChange]:
        return self._resolve(
            document, active_path, collection_path, VERTICAL_ALIGN_PROPERTY, VERTICAL_ALIGNS, direction
        )

    def horizontal(
        self,
        document: Any,
        active_path: Optional[Sequence[PathKey]],
        collection_path: Sequence[PathKey],
        direction: Any,
        device_mode: str = DeviceMode.DESKTOP.value,
    ) -> Optional[AlignmentChange]:
        return self._resolve(
            document,
            active_path,
            collection_path,
            horizontal_align_property(device_mode),
            HORIZONTAL_ALIGNS,
            direction,
        )

    def _resolve(
        self,
        document: Any,
        active_path: Optional[Sequence[PathKey]],
        collection_path: Sequence[PathKey],
        property_name: str,
        values: Sequence[str],
        direction: Any,
    ) -> Optional[AlignmentChange]:
        if active_path is None:
            self._logger.debug("Align noop: no active node")
            return None

        match = get_parent_which_contains_style_property(active_path, document, property_name, self._registry)
        if match is None:
            self._logger.info("Align noop: no ancestor carries %s above %s", property_name, tuple(active_path))
            return None

        target_path, node = match
        relative = relative_path(collection_path, target_path)
        if not relative:
            self._logger.info(
                "Align noop: %s owner %s lies outside collection %s",
                property_name,
                target_path,
                tuple(collection_path),
            )
            return None

        payload = node["value"]
        default = self._registry.default_style(node["type"]).get(property_name)
        current = payload.get(property_name) or default or values[0]
        new_value = cycle_value(values, current, direction)

        return AlignmentChange(
            property_name=property_name,
            previous=current,
            value=new_value,
            target_path=target_path,
            relative_path=relative,
            payload={**payload, property_name: new_value},
        )
