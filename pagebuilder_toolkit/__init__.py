"""Top-level package for the page-builder document editing engine.

This package hosts the GUI-agnostic implementation. Front-ends (editor
canvas, CLI, tests) should only depend on the public API exposed here rather
than importing internal modules directly.
"""

from .core.context import EditorStore  # re-export for convenience
from .core.exceptions import EditorError, InvalidIndexError, OutOfRangeError
from .core.services.array_component import EditorArrayComponent

__all__: list[str] = [
    "EditorArrayComponent",
    "EditorError",
    "EditorStore",
    "InvalidIndexError",
    "OutOfRangeError",
]
