from __future__ import annotations

"""Editing services over the document tree.

The collection component is the mutation surface; the clipboard and
alignment services only resolve what it should write.
"""

from .alignment_service import AlignmentService  # noqa: F401
from .array_component import EditorArrayComponent  # noqa: F401
from .clipboard_service import ClipboardService  # noqa: F401

__all__: list[str] = [
    "AlignmentService",
    "ClipboardService",
    "EditorArrayComponent",
]
