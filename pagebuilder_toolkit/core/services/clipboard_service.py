from __future__ import annotations

"""Clipboard resolution for paste and style-only paste.

The service never writes anything: it reads the clipboard entry (the copied
path plus the document snapshot taken at copy time), finds the node to use
for the local target and hands the result back to the collection component,
which performs the single write.

Open behaviour decisions
------------------------
- Clipboard paths are resolved against the snapshot only. If the copied path
  does not resolve inside its own snapshot, the paste is a no-op.
- The closest-ancestor search starts at the copied node itself, so a direct
  type match always wins over an enclosing container.
"""

from dataclasses import dataclass
import logging
from typing import Callable, Optional

from pagebuilder_toolkit.core.identity import fill_missing_ids, is_node
from pagebuilder_toolkit.core.merge import deep_merge, extract_styles
from pagebuilder_toolkit.core.models import ClipboardEntry
from pagebuilder_toolkit.core.paths import get_in
from pagebuilder_toolkit.core.registry import ComponentRegistry, first_child_type
from pagebuilder_toolkit.core.traversal import get_closest_parent

__all__ = ["ClipboardService", "StyleMergePlan"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StyleMergePlan:
    """Outcome of a style-only paste resolution.

    Attributes
    ----------
    depth
        Number of nesting levels transplanted below the matched node.
    source_path
        Path of the matched source node inside the clipboard snapshot.
    merged
        The local node with the extracted styles merged in.
    """

    depth: int
    source_path: tuple
    merged: dict


class ClipboardService:
    """Resolve clipboard content against a local collection item."""

    def __init__(self, registry: ComponentRegistry) -> None:
        self._registry = registry
        self._logger = logging.getLogger(f"{__name__}.ClipboardService")

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def get_current_copied_element(self, entry: Optional[ClipboardEntry]) -> Optional[dict]:
        """Return the copied node from the snapshot, or None."""
        if entry is None or entry.document is None:
            return None
        value = get_in(entry.document, entry.path)
        return value if is_node(value) else None

    def paste_predicate(self, local_item: dict) -> Callable[[dict], bool]:
        """Return the type predicate a paste onto *local_item* accepts.

        Wrapper and Cloneable are interchangeable; every other type needs an
        exact match.
        """
        local_type = str(local_item["type"])
        if self._registry.is_wrapper_family(local_type):
            return lambda node: self._registry.is_wrapper_family(node["type"])
        return lambda node: str(node["type"]) == local_type

    def resolve_paste_source(self, entry: Optional[ClipboardEntry], local_item: dict) -> Optional[dict]:
        """Return the node that a paste onto *local_item* should insert.

        Returns None when the clipboard is empty, the copied path is stale
        or no ancestor-or-self of the copied node matches.
        """
        if not self._resolvable(entry):
            return None

        match = get_closest_parent(entry.path, entry.document, self.paste_predicate(local_item))
        if match is None:
            self._logger.info(
                "Paste noop: no node matching type=%s above path=%s", local_item["type"], entry.path
            )
            return None

        source_path, node = match
        self._logger.debug("Paste: matched type=%s at path=%s", node["type"], source_path)
        return node

    def resolve_style_merge(self, entry: Optional[ClipboardEntry], local_item: dict) -> Optional[StyleMergePlan]:
        """Compute the merged node for a style-only paste onto *local_item*."""
        if not self._resolvable(entry):
            return None

        copied_element = self.get_current_copied_element(entry)
        depth = 0
        if copied_element is not None:
            depth = self._registry.style_merge_depth(copied_element, local_item)
            if depth is None:
                self._logger.info(
                    "Paste styles noop: mismatched wrapper contents copied=%s local=%s",
                    first_child_type(copied_element),
                    first_child_type(local_item),
                )
                return None

        local_type = str(local_item["type"])
        match = get_closest_parent(entry.path, entry.document, lambda node: str(node["type"]) == local_type)
        if match is None:
            self._logger.info("Paste styles noop: no node of type=%s above path=%s", local_type, entry.path)
            return None

        source_path, source = match
        styles = extract_styles(source, depth, self._registry)
        merged = fill_missing_ids(deep_merge(local_item, styles))
        self._logger.debug("Paste styles: depth=%d source=%s", depth, source_path)
        return StyleMergePlan(depth=depth, source_path=source_path, merged=merged)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _resolvable(self, entry: Optional[ClipboardEntry]) -> bool:
        if entry is None or entry.document is None:
            self._logger.debug("Clipboard empty")
            return False
        if get_in(entry.document, entry.path) is None:
            self._logger.warning("Clipboard path %s does not resolve in its snapshot", entry.path)
            return False
        return True
