"""
Immutable nested-path helpers.

Read, write and shallow-merge a value at a key path inside a tree of
mappings, sequences and frozen dataclasses. Writes copy every ancestor on the
path and reuse every sibling branch by reference.

Path steps:
- str key into a mapping, or a field name of a dataclass instance
- int index into a list/tuple

Precondition: every intermediate value on a write path is a mapping, a
sequence or a dataclass instance, and sequence indices are in range.
Violations raise PathError (a bug in the caller, not bad input data).
"""

import dataclasses
from collections.abc import Mapping
from typing import Any, Hashable, Sequence

from .errors import PathError

Path = Sequence[Hashable]

_MISSING = object()


def _is_sequence(obj: Any) -> bool:
    return isinstance(obj, (list, tuple))


def _is_record(obj: Any) -> bool:
    return dataclasses.is_dataclass(obj) and not isinstance(obj, type)


def _step(obj: Any, key: Hashable) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key, _MISSING)
    if _is_sequence(obj):
        if isinstance(key, int) and not isinstance(key, bool) and -len(obj) <= key < len(obj):
            return obj[key]
        return _MISSING
    if _is_record(obj) and isinstance(key, str):
        return getattr(obj, key, _MISSING)
    return _MISSING


def get_in(tree: Any, path: Path, default: Any = None) -> Any:
    """
    Read the value at path.

    Returns default as soon as a step is absent (missing key, index out of
    range, unknown field or a non-container value). Never raises.
    """
    cur = tree
    for key in path:
        cur = _step(cur, key)
        if cur is _MISSING:
            return default
    return cur


def _assoc(obj: Any, key: Hashable, value: Any) -> Any:
    if obj is None or isinstance(obj, Mapping):
        new = dict(obj or {})
        new[key] = value
        return new
    if _is_sequence(obj):
        if not isinstance(key, int) or isinstance(key, bool):
            raise PathError(f"Sequence index must be an int, got {key!r}")
        if not -len(obj) <= key < len(obj):
            raise PathError(f"Sequence index out of range: {key}")
        items = list(obj)
        items[key] = value
        return items if isinstance(obj, list) else tuple(items)
    if _is_record(obj):
        try:
            return dataclasses.replace(obj, **{key: value})
        except TypeError as e:
            raise PathError(f"{type(obj).__name__} has no field {key!r}") from e
    raise PathError(f"Cannot write key {key!r} into {type(obj).__name__}")


def set_in(tree: Any, path: Path, value: Any) -> Any:
    """
    Return a new tree with value stored at path.

    Absent intermediate mappings are created as dicts. An empty path replaces
    the whole tree.

    Raises:
        PathError: If an intermediate value is not a container
    """
    if not path:
        return value

    key = path[0]
    child = _step(tree, key) if tree is not None else _MISSING
    if child is _MISSING:
        child = None
    return _assoc(tree, key, set_in(child, path[1:], value))


def merge_in(tree: Any, path: Path, partial: Mapping) -> Any:
    """
    Shallow-merge partial into the mapping at path.

    Keys already at that location and absent from partial are preserved;
    keys in partial win.
    """
    current = get_in(tree, path)
    if current is not None and not isinstance(current, Mapping):
        raise PathError(f"Cannot merge into {type(current).__name__} at {list(path)!r}")
    merged = dict(current or {})
    merged.update(partial)
    return set_in(tree, path, merged)
