from __future__ import annotations

"""Ordered collection editing for one component of the document tree.

An EditorArrayComponent observes the collection found at its own path in
the store's document. It provides the mutation surface over that collection
(insert, batch insert, update, remove, replace, clone), the clipboard surface
(copy, paste, paste styles), alignment cycling and keyboard dispatch.

Scope and guarantees:
- Every operation computes the complete new collection first and then calls
  :meth:`EditorArrayComponent.handle_value_change` exactly once. That call is
  the only write; a failing operation writes nothing.
- Inputs (document, collection, item data) are never mutated.
- Policy no-ops (empty clipboard, no match, unknown chord) are logged and
  return quietly; index errors raise OutOfRangeError / InvalidIndexError.

Examples
--------
Basic usage:

    store = EditorStore({"items": []})
    column = EditorArrayComponent(store, ["items"])
    column.insert_item(0, {"type": "RichText", "value": {"text": "Hi"}})
    column.clone_item(0)

"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from pagebuilder_toolkit.core.context import EditorStore
from pagebuilder_toolkit.core.exceptions import InvalidIndexError, OutOfRangeError
from pagebuilder_toolkit.core.identity import ID_KEY, IdOptions, set_ids
from pagebuilder_toolkit.core.keymap import EditorCommand, KeyMap
from pagebuilder_toolkit.core.models import (
    AlignDirection,
    ArrayOperation,
    ClipboardEntry,
    ItemView,
    ValueChangeMeta,
)
from pagebuilder_toolkit.core.paths import Path, PathKey, as_path, get_in, insert, remove_at, replace_at, set_in
from pagebuilder_toolkit.core.registry import ComponentRegistry
from pagebuilder_toolkit.core.services.alignment_service import AlignmentChange, AlignmentService
from pagebuilder_toolkit.core.services.clipboard_service import ClipboardService

__all__ = ["EditorArrayComponent", "insert_item", "clone_item"]

logger = logging.getLogger(__name__)

ItemProps = Union[Mapping[str, Any], Callable[[dict, int, List[dict]], Mapping[str, Any]]]
ChangeCallback = Callable[[List[dict], ValueChangeMeta], None]


def insert_item(value: Sequence[dict], item_index: int, item_data: dict) -> List[dict]:
    """Return *value* with a fresh-id copy of *item_data* inserted at *item_index*."""
    return insert(value, item_index, set_ids(item_data))


def clone_item(value: Sequence[dict], item_index: int, to_index: Optional[int] = None) -> List[dict]:
    """Return *value* with a fresh-id copy of item *item_index* inserted at *to_index*."""
    if not _holds_item(value, item_index):
        raise InvalidIndexError(item_index, "clone")
    if to_index is None:
        to_index = item_index + 1
    return insert_item(value, to_index, value[item_index])


def _holds_item(value: Sequence[Any], index: Any) -> bool:
    return (
        isinstance(index, int)
        and not isinstance(index, bool)
        and 0 <= index < len(value)
        and bool(value[index])
    )


class EditorArrayComponent:
    """Editing surface over the ordered collection at *path*.

    Parameters
    ----------
    store
        Shared state container holding the document and clipboard.
    path
        Path of the collection inside the document.
    registry
        Component type registry; loaded from configuration when omitted.
    keymap
        Keyboard bindings; loaded from configuration when omitted.
    default_value
        Collection used by :meth:`get_value` when nothing is stored.
    item_props
        Extra props for rendered items, either a mapping or a callable
        ``(item, index, items) -> mapping``.
    item_factory
        Callable returning a new node for :meth:`add_column`.
    on_change
        When given, value changes are handed to this callback (typically a
        parent component's item channel) instead of being committed to the
        store directly.
    """

    def __init__(
        self,
        store: EditorStore,
        path: Sequence[PathKey],
        *,
        registry: Optional[ComponentRegistry] = None,
        keymap: Optional[KeyMap] = None,
        default_value: Optional[List[dict]] = None,
        item_props: Optional[ItemProps] = None,
        item_factory: Optional[Callable[[], dict]] = None,
        on_change: Optional[ChangeCallback] = None,
    ) -> None:
        self._store = store
        self._path: Path = as_path(path)
        self._registry = registry if registry is not None else ComponentRegistry.default()
        self._keymap = keymap if keymap is not None else KeyMap.default()
        self._default_value = default_value
        self._item_props = item_props
        self._item_factory = item_factory
        self._on_change = on_change

        self._clipboard_service = ClipboardService(self._registry)
        self._alignment_service = AlignmentService(self._registry)
        self._logger = logging.getLogger(f"{__name__}.EditorArrayComponent")

    # -------------------------------------------------------------------------
    # Value access
    # -------------------------------------------------------------------------

    def get_path(self) -> Path:
        return self._path

    def get_item_path(self, item_index: int) -> Path:
        """Path of the payload of item *item_index* (what child components edit)."""
        return (*self._path, item_index, "value")

    def get_db_value(self) -> Optional[List[dict]]:
        """Collection stored in the document, or None when nothing is stored."""
        return get_in(self._store.document, self._path)

    def get_default_value(self) -> List[dict]:
        return self._default_value if self._default_value is not None else []

    def get_value(self) -> List[dict]:
        """Stored collection, else the default one.

        Every operation reads and writes this value, so the first edit of a
        collection shown from its default stores the default items too.
        """
        value = self.get_db_value()
        return value if value is not None else self.get_default_value()

    # -------------------------------------------------------------------------
    # Write gate
    # -------------------------------------------------------------------------

    def handle_value_change(self, value: List[dict], meta: ValueChangeMeta) -> None:
        """Publish *value* as the new collection. The single write per command."""
        if self._on_change is not None:
            self._on_change(value, meta)
            return
        document = set_in(self._store.document, self._path, value)
        self._store.commit_document(document, meta)

    # -------------------------------------------------------------------------
    # Collection operations
    # -------------------------------------------------------------------------

    def insert_item(self, item_index: int, item_data: dict) -> None:
        """Insert a fresh-id copy of *item_data* at *item_index*."""
        logger.info("Edit: insert_item index=%s path=%s", item_index, self._path)
        updated = insert(self.get_value(), item_index, set_ids(item_data))
        self.handle_value_change(updated, ValueChangeMeta(ArrayOperation.INSERT))

    def insert_items_batch(self, item_index: int, items_data: Sequence[dict]) -> None:
        """Insert every item of *items_data* from *item_index* on, in one write."""
        logger.info("Edit: insert_items_batch index=%s count=%d path=%s", item_index, len(items_data), self._path)
        updated = self.get_value()
        for offset, item_data in enumerate(items_data):
            updated = insert(updated, item_index + offset, set_ids(item_data))
        self.handle_value_change(updated, ValueChangeMeta(ArrayOperation.INSERT_BULK))

    def update_item(self, item_index: int, item_value: dict) -> None:
        """Replace the payload of item *item_index*, keeping its identifier."""
        value = self.get_value()
        if not isinstance(item_index, int) or isinstance(item_index, bool) or not 0 <= item_index < len(value):
            raise OutOfRangeError(item_index, len(value), self._path)

        current_id = (value[item_index].get("value") or {}).get(ID_KEY)
        new_value = dict(item_value)
        if current_id is not None:
            new_value[ID_KEY] = current_id

        logger.debug("Edit: update_item index=%d path=%s", item_index, self._path)
        updated = set_in(value, (item_index, "value"), new_value)
        self.handle_value_change(updated, ValueChangeMeta(ArrayOperation.ITEM_CHANGE))

    def remove_item(self, item_index: int) -> None:
        logger.info("Edit: remove_item index=%s path=%s", item_index, self._path)
        updated = remove_at(self.get_value(), item_index)
        self.handle_value_change(updated, ValueChangeMeta(ArrayOperation.REMOVE))

    def replace_item(self, item_index: int, item_data: dict, meta: Optional[Mapping[str, Any]] = None) -> None:
        """Replace the whole item at *item_index* (type and payload).

        ``meta["idOptions"]`` is forwarded to :func:`set_ids`.
        """
        logger.info("Edit: replace_item index=%s path=%s", item_index, self._path)
        value = self.get_value()
        id_options = IdOptions.coerce((meta or {}).get("idOptions"))
        updated = replace_at(value, item_index, set_ids(item_data, id_options))
        self.handle_value_change(
            updated,
            ValueChangeMeta(ArrayOperation.REPLACE, item_index=item_index, old_value=value),
        )

    def clone_item(self, item_index: int, to_index: Optional[int] = None) -> None:
        """Insert a fresh-id copy of item *item_index* at *to_index* (default next)."""
        value = self.get_value()
        if not _holds_item(value, item_index):
            logger.warning("Edit FAIL: clone_item invalid index=%s path=%s", item_index, self._path)
            raise InvalidIndexError(item_index, "clone", self._path)
        if to_index is None:
            to_index = item_index + 1
        self.insert_item(to_index, value[item_index])

    def add_column(self, item_index: int) -> None:
        """Insert a new item built by the configured factory at *item_index*."""
        if self._item_factory is None:
            logger.debug("Edit noop: add_column without item factory path=%s", self._path)
            return
        self.insert_item(item_index, self._item_factory())

    def handle_item_change(self, item_index: int, item_value: Optional[dict],
                           meta: Optional[Mapping[str, Any]] = None) -> None:
        """Channel through which an item's own editor reports a change.

        Intent ``replace_all`` swaps the whole item, None removes it and any
        other value updates the payload.
        """
        meta = meta or {}
        if meta.get("intent") == "replace_all":
            self.replace_item(item_index, item_value, meta)
        elif item_value is None:
            self.remove_item(item_index)
        else:
            self.update_item(item_index, item_value)

    # -------------------------------------------------------------------------
    # Clipboard
    # -------------------------------------------------------------------------

    def get_current_copied_element(self) -> Optional[dict]:
        return self._clipboard_service.get_current_copied_element(self._store.clipboard.get())

    def copy(self, item_index: int) -> None:
        """Store this item's path and the current document in the clipboard.

        Only items stored in the document can be copied; a default item has
        no path inside the snapshot.
        """
        if not _holds_item(self.get_db_value() or [], item_index):
            raise InvalidIndexError(item_index, "copy", self._path)
        entry = ClipboardEntry(path=(*self._path, item_index), document=self._store.document)
        self._store.update_copied_element(entry)
        logger.info("Edit OK: copy path=%s", entry.path)

    def paste(self, item_index: int) -> None:
        """Insert the best clipboard match for item *item_index* right after it."""
        entry = self._store.clipboard.get()
        if entry is None:
            logger.debug("Edit noop: paste with empty clipboard")
            return

        local_item = self._local_item(item_index, "paste")
        node = self._clipboard_service.resolve_paste_source(entry, local_item)
        if node is None:
            return
        self.insert_item(item_index + 1, node)

    def paste_styles(self, item_index: int) -> None:
        """Merge the styles of the clipboard match into item *item_index*."""
        entry = self._store.clipboard.get()
        if entry is None:
            logger.debug("Edit noop: paste_styles with empty clipboard")
            return

        local_item = self._local_item(item_index, "paste styles onto")
        plan = self._clipboard_service.resolve_style_merge(entry, local_item)
        if plan is None:
            return
        logger.info("Edit: paste_styles index=%d depth=%d path=%s", item_index, plan.depth, self._path)
        self.update_item(item_index, plan.merged["value"])

    def _local_item(self, item_index: int, operation: str) -> dict:
        value = self.get_value()
        if not _holds_item(value, item_index):
            raise InvalidIndexError(item_index, operation, self._path)
        return value[item_index]

    # -------------------------------------------------------------------------
    # Alignment
    # -------------------------------------------------------------------------

    def change_vertical_align(self, item_index: int, direction: Any) -> None:
        change = self._alignment_service.vertical(
            self._store.document, self._store.active_path, self._path, AlignDirection(direction)
        )
        self._apply_alignment(item_index, change)

    def change_horizontal_align(self, item_index: int, direction: Any) -> None:
        change = self._alignment_service.horizontal(
            self._store.document,
            self._store.active_path,
            self._path,
            AlignDirection(direction),
            self._store.device_mode,
        )
        self._apply_alignment(item_index, change)

    def _apply_alignment(self, item_index: int, change: Optional[AlignmentChange]) -> None:
        if change is None:
            return
        if change.relative_path[0] != item_index:
            logger.info(
                "Edit noop: %s owner %s is not under item %s",
                change.property_name,
                change.target_path,
                item_index,
            )
            return

        updated = set_in(self.get_value(), (*change.relative_path, "value"), change.payload)
        logger.info(
            "Edit: align %s %s -> %s at %s", change.property_name, change.previous, change.value, change.target_path
        )
        self.update_item(item_index, updated[item_index]["value"])

    # -------------------------------------------------------------------------
    # Keyboard
    # -------------------------------------------------------------------------

    def handle_key_down(self, key_name: str, focused_id: Optional[str]) -> bool:
        """Run the command bound to *key_name* against the focused item.

        Returns True when a command ran, False when the chord is unknown or
        the focused identifier is not in this collection.
        """
        command = self._keymap.resolve(key_name)
        if command is None:
            logger.debug("Key ignored: %s", key_name)
            return False

        item_index = self._index_of(focused_id)
        if item_index is None:
            logger.debug("Key ignored: %s focused id %s not in %s", key_name, focused_id, self._path)
            return False

        logger.debug("Key: %s -> %s index=%d", key_name, command.value, item_index)
        handlers: Dict[EditorCommand, Callable[[], None]] = {
            EditorCommand.ADD_COLUMN: lambda: self.add_column(item_index + 1),
            EditorCommand.CLONE: lambda: self.clone_item(item_index),
            EditorCommand.COPY: lambda: self.copy(item_index),
            EditorCommand.PASTE: lambda: self.paste(item_index),
            EditorCommand.PASTE_STYLES: lambda: self.paste_styles(item_index),
            EditorCommand.ALIGN_HORIZONTAL_INCREASE: lambda: self.change_horizontal_align(
                item_index, AlignDirection.INCREASE
            ),
            EditorCommand.ALIGN_HORIZONTAL_DECREASE: lambda: self.change_horizontal_align(
                item_index, AlignDirection.DECREASE
            ),
            EditorCommand.ALIGN_VERTICAL_INCREASE: lambda: self.change_vertical_align(
                item_index, AlignDirection.INCREASE
            ),
            EditorCommand.ALIGN_VERTICAL_DECREASE: lambda: self.change_vertical_align(
                item_index, AlignDirection.DECREASE
            ),
            EditorCommand.REMOVE: lambda: self.remove_item(item_index),
        }
        handlers[command]()
        return True

    def _index_of(self, focused_id: Optional[str]) -> Optional[int]:
        if focused_id is None:
            return None
        for index, item in enumerate(self.get_value()):
            if (item.get("value") or {}).get(ID_KEY) == focused_id:
                return index
        return None

    # -------------------------------------------------------------------------
    # Render plan
    # -------------------------------------------------------------------------

    def get_item_props(self, item: dict, item_index: int, items: List[dict]) -> Dict[str, Any]:
        if self._item_props is None:
            return {}
        if callable(self._item_props):
            return dict(self._item_props(item, item_index, items))
        return dict(self._item_props)

    def visible_items(self, slice_start: int = 0, slice_end: Optional[int] = None) -> List[ItemView]:
        """Describe the items in the window ``[slice_start, slice_end)``.

        Indices in the returned views are positions in the full collection.
        """
        items = self.get_value()
        defaults = self.get_default_value()
        end = len(items) if slice_end is None else slice_end

        views: List[ItemView] = []
        for index, item in enumerate(items):
            if not slice_start <= index < end:
                continue
            item_type = str(item.get("type"))
            default_item = defaults[index] if index < len(defaults) else None
            views.append(
                ItemView(
                    index=index,
                    key=(item.get("value") or {}).get(ID_KEY),
                    type=item_type,
                    path=self.get_item_path(index),
                    db_value=item.get("value") or {},
                    default_value=default_item.get("value") if isinstance(default_item, dict) else None,
                    props=self.get_item_props(item, index, items),
                    registered=self._registry.is_registered(item_type),
                )
            )
        return views
