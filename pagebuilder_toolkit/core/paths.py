from __future__ import annotations

"""Pure addressing helpers over nested lists and dicts.

The document is a tree of plain ``dict``/``list`` values that is never
mutated in place. Every helper here returns a new container and reuses the
branches it did not touch, so a write costs one copy per level from the root
to the changed location.

A path is a tuple of keys: ``int`` indices for lists and ``str`` field names
for dicts. Negative indices are never interpreted Python-style.
"""

from typing import Any, Iterable, Iterator, List, Sequence, Tuple, Union

from pagebuilder_toolkit.core.exceptions import OutOfRangeError

__all__ = [
    "Path",
    "PathKey",
    "as_path",
    "get_in",
    "set_in",
    "insert",
    "remove_at",
    "replace_at",
    "ancestor_paths",
    "is_prefix",
    "relative_path",
]

PathKey = Union[int, str]
Path = Tuple[PathKey, ...]

_MISSING = object()


def as_path(keys: Iterable[PathKey] | None) -> Path:
    """Normalise *keys* (list, tuple or None) into a hashable path tuple."""
    if keys is None:
        return ()
    return tuple(keys)


def _is_index(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


def _child(container: Any, key: PathKey, default: Any = _MISSING) -> Any:
    if isinstance(container, list):
        if _is_index(key) and 0 <= key < len(container):
            return container[key]
        return default
    if isinstance(container, dict):
        return container.get(key, default)
    return default


def get_in(root: Any, path: Sequence[PathKey], default: Any = None) -> Any:
    """Return the value at *path* inside *root*, or *default* when unresolved."""
    current = root
    for key in path:
        current = _child(current, key)
        if current is _MISSING:
            return default
    return current


def set_in(root: Any, path: Sequence[PathKey], value: Any) -> Any:
    """Return a copy of *root* with *value* stored at *path*.

    Untouched branches are shared with *root*. When the stored value is
    already *value* (identity), *root* itself is returned. Missing
    intermediate containers are created as lists when the following key is an
    index and as dicts otherwise.
    """
    path = as_path(path)
    if not path:
        return value

    key, rest = path[0], path[1:]
    if root is None:
        root = [] if _is_index(key) else {}

    current = _child(root, key)
    if current is _MISSING:
        current = None
    new_child = set_in(current, rest, value)
    if new_child is current and current is not None:
        return root

    if isinstance(root, list):
        if not _is_index(key) or not 0 <= key <= len(root):
            raise OutOfRangeError(key, len(root), path)
        updated: List[Any] = list(root)
        if key == len(updated):
            updated.append(new_child)
        else:
            updated[key] = new_child
        return updated

    if isinstance(root, dict):
        updated_map = dict(root)
        updated_map[key] = new_child
        return updated_map

    raise TypeError(f"Cannot set key {key!r} on {type(root).__name__}")


def insert(collection: Sequence[Any], index: int, item: Any) -> List[Any]:
    """Return a new list with *item* inserted at *index* (``len`` appends)."""
    if not _is_index(index) or not 0 <= index <= len(collection):
        raise OutOfRangeError(index, len(collection))
    return [*collection[:index], item, *collection[index:]]


def remove_at(collection: Sequence[Any], index: int) -> List[Any]:
    """Return a new list without the element at *index*."""
    if not _is_index(index) or not 0 <= index < len(collection):
        raise OutOfRangeError(index, len(collection))
    return [*collection[:index], *collection[index + 1:]]


def replace_at(collection: Sequence[Any], index: int, item: Any) -> List[Any]:
    """Return a new list where the element at *index* is *item*."""
    if not _is_index(index) or not 0 <= index < len(collection):
        raise OutOfRangeError(index, len(collection))
    if collection[index] is item and isinstance(collection, list):
        return collection
    updated = list(collection)
    updated[index] = item
    return updated


def ancestor_paths(path: Sequence[PathKey]) -> Iterator[Path]:
    """Yield *path* itself, then each shorter prefix down to the root ``()``."""
    path = as_path(path)
    for end in range(len(path), -1, -1):
        yield path[:end]


def is_prefix(prefix: Sequence[PathKey], path: Sequence[PathKey]) -> bool:
    prefix = as_path(prefix)
    return len(prefix) <= len(path) and as_path(path)[: len(prefix)] == prefix


def relative_path(base: Sequence[PathKey], path: Sequence[PathKey]) -> Path | None:
    """Return *path* expressed relative to *base*, or None if it lies outside."""
    if not is_prefix(base, path):
        return None
    return as_path(path)[len(base):]
