"""Transactions driving undo/redo.

History and future stacks live in the state itself under ``history`` and
``future``, newest entry first. Each entry is a sequence of diffs relative to
the key path the stacks live under.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from txstore.core.diff import Diff
from txstore.core.frozen import FrozenList
from txstore.core.kinds import ABSENT
from txstore.core.produce import Toolbox

HISTORY = "history"
FUTURE = "future"


@dataclass(frozen=True)
class HistoryEntry:
    """Payload of ``UNDOABLE_ACTION_END``: the recorded diffs of one action."""

    changes: tuple[Diff, ...]
    limit: int | None = None


def _push(
    stack: FrozenList | None, entry: Sequence[Diff], limit: int | None = None
) -> FrozenList:
    pushed = FrozenList((FrozenList(entry), *(stack or ())))
    return pushed if limit is None else pushed[:limit]


def _replay(ops: Toolbox, path: tuple[Any, ...], value: Any) -> None:
    if value is ABSENT:
        ops.remove(*path)
    else:
        ops.set(*path, value)


def UNDOABLE_ACTION_START() -> None:
    """Marks the start of an undoable action. Changes nothing by itself."""
    return None


def UNDOABLE_ACTION_END(entry: HistoryEntry | None = None) -> Callable[[Toolbox], Any] | None:
    """Push a finished action onto ``history`` and clear ``future``.

    An action that changed nothing still gets an (empty) entry, so starting
    a new action always discards the redo stack.
    """
    if entry is None:
        return None

    def mutation(ops: Toolbox) -> None:
        ops.update(HISTORY, lambda history: _push(history, entry.changes, entry.limit))
        ops.set(FUTURE, [])

    return mutation


def UNDO() -> Callable[[Toolbox], Any]:
    def mutation(ops: Toolbox) -> None:
        changes = ops.get(HISTORY, 0)
        if changes is None:
            return
        for diff in reversed(changes):
            _replay(ops, diff.path, diff.old_value)
        ops.update(FUTURE, lambda future: _push(future, changes))
        ops.update(HISTORY, lambda history: history[1:])

    return mutation


def REDO() -> Callable[[Toolbox], Any]:
    def mutation(ops: Toolbox) -> None:
        changes = ops.get(FUTURE, 0)
        if changes is None:
            return
        for diff in changes:
            _replay(ops, diff.path, diff.new_value)
        ops.update(HISTORY, lambda history: _push(history, changes))
        ops.update(FUTURE, lambda future: future[1:])

    return mutation


__all__ = [
    "FUTURE",
    "HISTORY",
    "HistoryEntry",
    "REDO",
    "UNDO",
    "UNDOABLE_ACTION_END",
    "UNDOABLE_ACTION_START",
]
