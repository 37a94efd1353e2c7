"""Path primitives for reading and writing nested immutable state.

All functions are pure. Writes copy only the containers along the addressed
path; every other subtree is shared by reference with the input.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any

from pyrsistent import PMap, pmap

from txstore.core.freeze import deep_freeze
from txstore.core.frozen import FrozenList, FrozenSet
from txstore.core.kinds import ABSENT, ContainerKind, kind_of

KeyPath = tuple[Hashable, ...]


class KeyPathError(TypeError):
    """Raised for a malformed key path or a write through a non-container."""


def check_key_path(key_path: tuple[Any, ...]) -> KeyPath:
    """Validate that every key in ``key_path`` is hashable."""
    for key in key_path:
        if not isinstance(key, Hashable):
            raise KeyPathError(f"key path entries must be hashable, got {type(key).__name__}")
    return key_path


def get_in(value: Any, *key_path: Hashable, default: Any = None) -> Any:
    """Return the value at ``key_path``, or ``default`` if it does not exist.

    An empty path returns ``value`` itself.
    """
    for key in key_path:
        if value is None or value is ABSENT:
            return default
        value = _get_child(value, key)
        if value is ABSENT:
            return default
    return value


def set_in(value: Any, *key_path_and_value: Any) -> Any:
    """Return a copy of ``value`` with the last argument placed at the path."""
    if not key_path_and_value:
        raise KeyPathError("set_in() requires a value to set")
    *key_path, new_value = key_path_and_value
    return _set_path(value, tuple(key_path), new_value)


def update_in(value: Any, *key_path_and_updater: Any) -> Any:
    """Apply the trailing updater to the value at the path.

    Returns ``value`` itself when the updater hands back the identical object.
    """
    if not key_path_and_updater:
        raise KeyPathError("update_in() requires an updater")
    *key_path, updater = key_path_and_updater
    old_value = get_in(value, *key_path)
    new_value = updater(old_value)
    if new_value is old_value:
        return value
    return _set_path(value, tuple(key_path), new_value)


def delete_in(value: Any, key: Hashable, *path: Hashable) -> Any:
    """Return a copy of ``value`` with the entry at ``(key, *path)`` removed.

    Missing entries leave ``value`` unchanged.
    """
    if not path:
        return _delete_child(value, key)
    child = get_in(value, key, default=ABSENT)
    if child is ABSENT or child is None:
        return value
    new_child = delete_in(child, *path)
    if new_child is child:
        return value
    return _set_path(value, (key,), new_child)


def _get_child(container: Any, key: Hashable) -> Any:
    match kind_of(container):
        case ContainerKind.MAPPING:
            return container.get(key, ABSENT)
        case ContainerKind.SEQUENCE:
            if isinstance(key, bool) or not isinstance(key, int):
                return ABSENT
            if -len(container) <= key < len(container):
                return container[key]
            return ABSENT
        case ContainerKind.SET:
            return key if key in container else ABSENT
        case _:
            if isinstance(key, str):
                return getattr(container, key, ABSENT)
            return ABSENT


def _set_path(value: Any, key_path: KeyPath, new_value: Any) -> Any:
    if not key_path:
        return deep_freeze(new_value)
    key, *rest = key_path
    if value is None or value is ABSENT:
        value = pmap()
    child = _get_child(value, key)
    return _set_child(value, key, _set_path(child, tuple(rest), new_value))


def _persistent(container: Any) -> Any:
    if isinstance(container, (PMap, FrozenList, FrozenSet)):
        return container
    return deep_freeze(container)


def _set_child(container: Any, key: Hashable, child: Any) -> Any:
    match kind_of(container):
        case ContainerKind.MAPPING:
            return _persistent(container).set(key, child)
        case ContainerKind.SEQUENCE:
            index = _check_index(container, key, allow_append=True)
            frozen = _persistent(container)
            return type(frozen)((*frozen[:index], child, *frozen[index + 1 :]))
        case kind:
            raise KeyPathError(
                f"cannot set key {key!r} inside a {kind.value} value "
                f"of type {type(container).__name__}"
            )


def _delete_child(container: Any, key: Hashable) -> Any:
    match kind_of(container):
        case ContainerKind.MAPPING:
            if key not in container:
                return container
            return _persistent(container).remove(key)
        case ContainerKind.SEQUENCE:
            if _get_child(container, key) is ABSENT:
                return container
            index = _check_index(container, key)
            frozen = _persistent(container)
            return type(frozen)((*frozen[:index], *frozen[index + 1 :]))
        case ContainerKind.SET:
            if key not in container:
                return container
            return FrozenSet(_persistent(container) - {key})
        case _:
            return container


def _check_index(container: Any, key: Hashable, *, allow_append: bool = False) -> int:
    """Return ``key`` as a non-negative index into ``container``."""
    if isinstance(key, bool) or not isinstance(key, int):
        raise KeyPathError(f"sequence index must be int, got {type(key).__name__}")
    length = len(container)
    upper = length if allow_append else length - 1
    if not -length <= key <= upper:
        raise KeyPathError(f"sequence index {key} out of range for length {length}")
    return key + length if key < 0 else key


__all__ = [
    "KeyPath",
    "KeyPathError",
    "check_key_path",
    "delete_in",
    "get_in",
    "set_in",
    "update_in",
]
