from __future__ import annotations

"""Editor exception classes.

Only genuine failures are raised: an index outside the collection bounds or a
clone/copy source that does not hold an item. Policy no-ops (empty clipboard,
no matching ancestor, unknown chord) are logged by the services and never
surface as exceptions.
"""

from typing import Any, Optional


class EditorError(Exception):
    """Base exception for all document-tree editing errors."""

    def __init__(self, message: str, path: Optional[Any] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.path = path
        self.cause = cause

    def __str__(self) -> str:
        if self.path is not None:
            return f"[Path: {tuple(self.path)}] {super().__str__()}"
        return super().__str__()


class OutOfRangeError(EditorError, IndexError):
    """Raised when an index falls outside the bounds allowed by an operation.

    Insert accepts ``[0, len]``; remove, replace and update accept
    ``[0, len)``. The collection is left untouched.
    """

    def __init__(self, index: Any, length: int, path: Optional[Any] = None) -> None:
        super().__init__(f"Index {index!r} out of range for collection of length {length}", path)
        self.index = index
        self.length = length


class InvalidIndexError(EditorError, LookupError):
    """Raised when a clone or copy source index does not hold an item."""

    def __init__(self, index: Any, operation: str, path: Optional[Any] = None) -> None:
        super().__init__(f"Can't {operation} invalid item at index {index!r}", path)
        self.index = index
        self.operation = operation


class ConfigError(EditorError):
    """Raised when a configuration section cannot be turned into a usable table."""
    pass
