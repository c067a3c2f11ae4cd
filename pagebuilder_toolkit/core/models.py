from __future__ import annotations

"""Shared value objects used across the page-builder core.

This module is intentionally free of UI / I/O code so that the contained
objects can be reused in any context (unit-tests, CLI, editor front-ends).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pagebuilder_toolkit.core.paths import Path, as_path

__all__ = [
    "TypeTag",
    "ArrayOperation",
    "AlignDirection",
    "DeviceMode",
    "ClipboardEntry",
    "ValueChangeMeta",
    "ItemView",
]


class TypeTag(str, Enum):
    """Known node kinds.

    Tags not listed here are still valid; they are treated as ordinary
    leaf types by the registry.
    """

    WRAPPER = "Wrapper"
    CLONEABLE = "Cloneable"
    FORM = "Form"
    ICON_TEXT = "IconText"
    IMAGE_GALLERY = "ImageGallery"
    SECTION = "Section"
    ROW = "Row"
    COLUMN = "Column"
    RICH_TEXT = "RichText"
    BUTTON = "Button"
    IMAGE = "Image"
    ICON = "Icon"
    FACEBOOK_COMMENTS = "FacebookComments"
    WP_POSTS = "WPPosts"

    def __str__(self) -> str:
        return self.value


class ArrayOperation(str, Enum):
    INSERT = "insert"
    INSERT_BULK = "insert_bulk"
    ITEM_CHANGE = "itemChange"
    REMOVE = "remove"
    REPLACE = "replace"


class AlignDirection(str, Enum):
    INCREASE = "increase"
    DECREASE = "decrease"


class DeviceMode(str, Enum):
    DESKTOP = "desktop"
    TABLET = "tablet"
    MOBILE = "mobile"


@dataclass(frozen=True)
class ClipboardEntry:
    """Content of the clipboard slot.

    Attributes
    ----------
    path
        Path of the copied node inside *document*.
    document
        Snapshot of the whole document taken at copy time. Paths are only
        resolved against this snapshot, never against the live document.
    """

    path: Path
    document: Any

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", as_path(self.path))


@dataclass(frozen=True)
class ValueChangeMeta:
    """Metadata passed along with every collection write."""

    operation: ArrayOperation
    item_index: Optional[int] = None
    old_value: Optional[List[Any]] = None

    def as_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"arrayOperation": self.operation.value}
        if self.item_index is not None:
            data["itemIndex"] = self.item_index
        if self.old_value is not None:
            data["oldValue"] = self.old_value
        return data


@dataclass(frozen=True)
class ItemView:
    """Render plan entry for one item of a collection window."""

    index: int
    key: Optional[str]
    type: str
    path: Path
    db_value: Dict[str, Any]
    default_value: Optional[Dict[str, Any]]
    props: Dict[str, Any] = field(default_factory=dict)
    registered: bool = True
