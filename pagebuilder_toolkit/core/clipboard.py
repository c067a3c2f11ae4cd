from __future__ import annotations

"""Session-scoped clipboard slot.

A single slot holding the last copied node path together with the document
snapshot it was copied from. The slot is owned by the editor store and
injected wherever it is needed, so every editing session (and every test)
gets its own.

Lifecycle: empty at session start, overwritten by each copy, read (never
mutated) by paste operations. Intervening edits never invalidate it.
"""

import logging
from typing import Optional

from pagebuilder_toolkit.core.models import ClipboardEntry

__all__ = ["ClipboardSlot"]

logger = logging.getLogger(__name__)


class ClipboardSlot:
    """Single-writer holder for a :class:`ClipboardEntry`."""

    def __init__(self) -> None:
        self._entry: Optional[ClipboardEntry] = None

    @property
    def is_empty(self) -> bool:
        return self._entry is None

    def get(self) -> Optional[ClipboardEntry]:
        return self._entry

    def store(self, entry: ClipboardEntry) -> None:
        """Overwrite the slot unconditionally."""
        self._entry = entry
        logger.debug("Clipboard: stored path=%s", entry.path)

    def clear(self) -> None:
        self._entry = None
