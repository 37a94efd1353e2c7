"""Container kinds recognized by the state tree.

Path primitives and the freeze guard dispatch on a closed set of kinds.
Anything outside that set is a leaf: it is stored as-is and never copied,
frozen or recursed into.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pyrsistent import PMap, PSet, PVector

from txstore.core.frozen import FrozenList, FrozenSet


class ContainerKind(Enum):
    """Closed set of container kinds understood by the engine."""

    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SET = "set"
    LEAF = "leaf"


class Absent(Enum):
    """Marker for a location that does not exist.

    ``None`` is a legal stored value, so missing locations need their own marker.
    """

    ABSENT = "absent"

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = Absent.ABSENT

_BUILTIN_KINDS: dict[type, ContainerKind] = {
    dict: ContainerKind.MAPPING,
    list: ContainerKind.SEQUENCE,
    tuple: ContainerKind.SEQUENCE,
    FrozenList: ContainerKind.SEQUENCE,
    set: ContainerKind.SET,
    frozenset: ContainerKind.SET,
    FrozenSet: ContainerKind.SET,
}


def kind_of(value: Any) -> ContainerKind:
    """Return the container kind of ``value``.

    Plain built-in containers match on their exact type so that user subclasses
    (and any other class instance) stay leaves.
    """
    kind = _BUILTIN_KINDS.get(type(value))
    if kind is not None:
        return kind
    if isinstance(value, PMap):
        return ContainerKind.MAPPING
    if isinstance(value, PVector):
        return ContainerKind.SEQUENCE
    if isinstance(value, PSet):
        return ContainerKind.SET
    return ContainerKind.LEAF


__all__ = ["ABSENT", "Absent", "ContainerKind", "kind_of"]
