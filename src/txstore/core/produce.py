"""Mutation toolbox and ``produce``.

A mutation is a callable that receives a :class:`Toolbox` and performs path
operations against it. ``produce`` turns a mutation into a pure
``state -> new_state`` function:

    >>> add = produce(lambda ops: ops.update("todos", lambda todos: [*todos, "x"]))
    >>> add({"todos": []})["todos"]
    FrozenList(['x'])
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from txstore.core.diff import Diff, Recorder, prefixed
from txstore.core.freeze import deep_freeze
from txstore.core.kinds import ABSENT
from txstore.core.paths import KeyPathError, delete_in, get_in, set_in

Mutation = Callable[["Toolbox"], Any]


class Toolbox:
    """Working context handed to a mutation.

    Holds the running value of the subtree being mutated. Every operation reads
    from and writes to that running value, so later operations observe earlier
    ones. Each operation returns the running value.

    Attributes:
        value: Current value of the subtree, including writes made so far.
    """

    __slots__ = ("value", "_record")

    def __init__(self, value: Any, record: Recorder | None = None) -> None:
        self.value = value
        self._record = record

    def get(self, *path: Any) -> Any:
        """Read the value at ``path`` from the running value."""
        value = get_in(self.value, *path)
        return None if value is ABSENT else value

    def set(self, *path_and_value: Any) -> Any:
        """Write the trailing value at the path. Always recorded."""
        path, new_value = _split_trailing(path_and_value, "set")
        new_value = deep_freeze(new_value)
        if self._record is not None:
            old_value = get_in(self.value, *path, default=ABSENT)
            self._record(Diff(path, old_value, new_value))
        self.value = set_in(self.value, *path, new_value)
        return self.value

    def update(self, *path_and_updater: Any) -> Any:
        """Replace the value at the path with ``updater(old)``.

        Nothing is written or recorded when the updater returns the identical
        object.
        """
        path, updater = _split_trailing(path_and_updater, "update")
        old_value = get_in(self.value, *path, default=ABSENT)
        new_value = updater(None if old_value is ABSENT else old_value)
        if new_value is old_value or (old_value is ABSENT and new_value is None):
            return self.value
        new_value = deep_freeze(new_value)
        if self._record is not None:
            self._record(Diff(path, old_value, new_value))
        self.value = set_in(self.value, *path, new_value)
        return self.value

    def remove(self, *path: Any) -> Any:
        """Delete the entry at ``path``. Always recorded."""
        if not path:
            raise KeyPathError("remove() requires a non-empty key path")
        if self._record is not None:
            self._record(Diff(path, old_value=get_in(self.value, *path, default=ABSENT)))
        self.value = delete_in(self.value, *path)
        return self.value

    def apply(self, *path_and_mutation: Any) -> Any:
        """Run a nested mutation against the subtree at the path."""
        path, inner = _split_trailing(path_and_mutation, "apply")
        subtree = get_in(self.value, *path, default=ABSENT)
        result = produce(inner, prefixed(self._record, path))(subtree)
        if result is not subtree:
            self.value = set_in(self.value, *path, result)
        return self.value


def produce(mutation: Mutation | None, record: Recorder | None = None) -> Callable[[Any], Any]:
    """Return a function applying ``mutation`` to a state and returning the result.

    Args:
        mutation: Callable receiving a :class:`Toolbox`. A falsy mutation
            leaves the state unchanged.
        record: Optional callable receiving one :class:`Diff` per recorded
            change, in operation order.
    """

    def run(state: Any) -> Any:
        if not mutation:
            return state
        toolbox = Toolbox(state, record)
        mutation(toolbox)
        return toolbox.value

    return run


def _split_trailing(args: tuple[Any, ...], method: str) -> tuple[tuple[Any, ...], Any]:
    if not args:
        raise TypeError(f"{method}() requires at least one argument")
    return tuple(args[:-1]), args[-1]


__all__ = ["Mutation", "Toolbox", "produce"]
