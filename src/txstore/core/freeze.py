"""Deep-freeze guard for state snapshots.

Every container reachable from a snapshot is converted into its frozen
counterpart, so in-place mutation fails where it is attempted:

    >>> frozen = deep_freeze({"todos": [{"task": "x"}]})
    >>> frozen["todos"] = []
    Traceback (most recent call last):
    TypeError: 'PMap' object does not support item assignment
    >>> frozen["todos"].append({"task": "y"})
    Traceback (most recent call last):
    TypeError: 'FrozenList' object is frozen and cannot be modified
"""

from __future__ import annotations

from typing import Any

from pyrsistent import PMap, PSet, PVector, pmap

from txstore.core.frozen import FrozenList, FrozenSet
from txstore.core.kinds import ContainerKind, kind_of


def deep_freeze(value: Any) -> Any:
    """Return ``value`` with every mapping, sequence and set frozen.

    Mappings become ``PMap``, lists and ``PVector`` become ``FrozenList``, sets
    become ``FrozenSet``. Tuples stay tuples with frozen items. Leaves (scalars,
    strings, class instances) are returned untouched. A value that is already
    fully frozen is returned by identity.
    """
    match kind_of(value):
        case ContainerKind.MAPPING:
            return _freeze_mapping(value)
        case ContainerKind.SEQUENCE:
            return _freeze_sequence(value)
        case ContainerKind.SET:
            return _freeze_set(value)
        case _:
            return value


def is_frozen(value: Any) -> bool:
    """Return True if ``value`` would pass through ``deep_freeze`` unchanged."""
    return deep_freeze(value) is value


def _freeze_mapping(value: dict[Any, Any] | PMap) -> PMap:
    if not isinstance(value, PMap):
        return pmap({key: deep_freeze(item) for key, item in value.items()})

    evolver = None
    for key, item in value.items():
        frozen = deep_freeze(item)
        if frozen is not item:
            if evolver is None:
                evolver = value.evolver()
            evolver[key] = frozen
    return value if evolver is None else evolver.persistent()


def _freeze_sequence(
    value: list[Any] | tuple[Any, ...] | PVector,
) -> FrozenList | tuple[Any, ...]:
    frozen = [deep_freeze(item) for item in value]
    if type(value) in (FrozenList, tuple) and all(
        new is old for new, old in zip(frozen, value)
    ):
        return value
    if type(value) is tuple:
        return tuple(frozen)
    return FrozenList(frozen)


def _freeze_set(value: set[Any] | frozenset[Any] | PSet) -> FrozenSet:
    if type(value) is FrozenSet:
        # Members are hashable, so they are frozen already or leaves.
        return value
    return FrozenSet(deep_freeze(item) for item in value)


__all__ = ["deep_freeze", "is_frozen"]
