"""Frozen forms of lists and sets.

Mappings freeze to ``pyrsistent.PMap``. Lists and sets freeze to the types
below: built-in immutable containers whose mutating methods raise
``TypeError``, so a stray ``store.get("todos").append(x)`` fails where it is
written instead of silently building a copy nobody keeps.
"""

from __future__ import annotations

from typing import Any, NoReturn

from pyrsistent import PVector


def _frozen(self: Any, *args: Any, **kwargs: Any) -> NoReturn:
    raise TypeError(f"'{type(self).__name__}' object is frozen and cannot be modified")


class FrozenList(tuple):
    """Frozen form of a list.

    Compares equal to any list, tuple or ``PVector`` holding equal items.
    Slicing and concatenation return ``FrozenList``.
    """

    __slots__ = ()

    append = extend = insert = pop = remove = clear = sort = reverse = _frozen

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (list, tuple, PVector)):
            return len(self) == len(other) and all(a == b for a, b in zip(self, other))
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = tuple.__hash__

    def __getitem__(self, index: Any) -> Any:
        if isinstance(index, slice):
            return FrozenList(tuple.__getitem__(self, index))
        return tuple.__getitem__(self, index)

    def __add__(self, other: Any) -> FrozenList:
        if isinstance(other, (list, tuple, PVector)):
            return FrozenList((*self, *other))
        return NotImplemented

    def __radd__(self, other: Any) -> FrozenList:
        if isinstance(other, (list, tuple, PVector)):
            return FrozenList((*other, *self))
        return NotImplemented

    def __repr__(self) -> str:
        return f"FrozenList({list(self)!r})"


class FrozenSet(frozenset):
    """Frozen form of a set. Set mutators raise ``TypeError``."""

    __slots__ = ()

    add = discard = remove = pop = clear = update = _frozen
    difference_update = intersection_update = symmetric_difference_update = _frozen

    def __repr__(self) -> str:
        return f"FrozenSet({set(self)!r})" if self else "FrozenSet()"


__all__ = ["FrozenList", "FrozenSet"]
