from __future__ import annotations

"""Shared editor state container.

The EditorStore is the single place where the live document, the active
node path, the device mode and the clipboard slot live. Components read the
document snapshot from it and write back through :meth:`commit_document`,
which is the only way a new document becomes current.

Everything runs on one thread; a command reads, computes and commits before
the next command is accepted, so no locking is involved.
"""

import logging
from typing import Any, Callable, List, Optional, Sequence

from pagebuilder_toolkit.core.clipboard import ClipboardSlot
from pagebuilder_toolkit.core.models import ClipboardEntry, DeviceMode, ValueChangeMeta
from pagebuilder_toolkit.core.paths import Path, PathKey, as_path

logger = logging.getLogger(__name__)

__all__ = ["EditorStore"]

Listener = Callable[[Any, Optional[ValueChangeMeta]], None]


class EditorStore:
    """State container shared by all components of one editing session.

    Args:
        document: Initial document tree (plain dicts and lists)
        device_mode: Initial device mode, one of :class:`DeviceMode`
        clipboard: Clipboard slot to use; a fresh empty one by default
    """

    def __init__(
        self,
        document: Any = None,
        *,
        device_mode: str = DeviceMode.DESKTOP.value,
        clipboard: Optional[ClipboardSlot] = None,
    ) -> None:
        self._document: Any = document if document is not None else {}
        self._active_path: Optional[Path] = None
        self._device_mode: str = DeviceMode(device_mode).value
        self._clipboard = clipboard if clipboard is not None else ClipboardSlot()
        self._listeners: List[Listener] = []
        self._revision = 0

        self._logger = logging.getLogger(f"{__name__}.EditorStore")

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def document(self) -> Any:
        """Current document snapshot. Treat as immutable."""
        return self._document

    @property
    def active_path(self) -> Optional[Path]:
        """Path of the node currently focused in the editing surface."""
        return self._active_path

    @property
    def device_mode(self) -> str:
        return self._device_mode

    @property
    def clipboard(self) -> ClipboardSlot:
        return self._clipboard

    @property
    def revision(self) -> int:
        """Number of documents committed so far."""
        return self._revision

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def commit_document(self, document: Any, meta: Optional[ValueChangeMeta] = None) -> None:
        """Make *document* the current snapshot and notify listeners."""
        self._document = document
        self._revision += 1
        self._logger.debug(
            "Commit: revision=%d operation=%s",
            self._revision,
            meta.operation.value if meta is not None else None,
        )
        for listener in list(self._listeners):
            listener(document, meta)

    def update_copied_element(self, entry: ClipboardEntry) -> None:
        self._clipboard.store(entry)

    def set_active_path(self, path: Optional[Sequence[PathKey]]) -> None:
        self._active_path = as_path(path) if path is not None else None

    def set_device_mode(self, mode: str) -> None:
        """Switch device mode; raises ValueError for unknown modes."""
        self._device_mode = DeviceMode(mode).value

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener* for commits and return an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
