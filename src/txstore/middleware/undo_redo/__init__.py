"""Undo/redo built on recorded diffs."""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from txstore.core.diff import Diff
from txstore.middleware.undo_redo.recorder import Recording, UndoRecorder, UndoRedo, UndoRedoStore
from txstore.middleware.undo_redo.transactions import (
    FUTURE,
    HISTORY,
    REDO,
    UNDO,
    UNDOABLE_ACTION_END,
    UNDOABLE_ACTION_START,
    HistoryEntry,
)

R = TypeVar("R")


def enable_undo_redo(store: Any, *, limit: int | None = None) -> UndoRedoStore:
    """Wrap ``store`` with :class:`UndoRedo`."""
    return UndoRedo(limit=limit)(store)


def undoable(action: Callable[..., R], key_path: Iterable[Any] = ()) -> Callable[..., R]:
    """Make ``action(store, *args, **kwargs)`` one undoable unit.

    The end marker is committed even when the action raises, so whatever it
    changed before failing can still be undone.
    """
    path = tuple(key_path)

    @functools.wraps(action)
    def run(store: Any, *args: Any, **kwargs: Any) -> R:
        store.commit(*path, UNDOABLE_ACTION_START)
        try:
            return action(store, *args, **kwargs)
        finally:
            store.commit(*path, UNDOABLE_ACTION_END)

    return run


def undo(store: Any, *key_path: Any) -> list[Diff]:
    """Revert the newest history entry. No-op when history is empty."""
    return store.commit(*key_path, UNDO)


def redo(store: Any, *key_path: Any) -> list[Diff]:
    """Reapply the newest undone entry. No-op when nothing was undone."""
    return store.commit(*key_path, REDO)


def can_undo(store: Any, *key_path: Any) -> bool:
    return bool(store.get(*key_path, HISTORY))


def can_redo(store: Any, *key_path: Any) -> bool:
    return bool(store.get(*key_path, FUTURE))


__all__ = [
    "FUTURE",
    "HISTORY",
    "REDO",
    "UNDO",
    "UNDOABLE_ACTION_END",
    "UNDOABLE_ACTION_START",
    "HistoryEntry",
    "Recording",
    "UndoRecorder",
    "UndoRedo",
    "UndoRedoStore",
    "can_redo",
    "can_undo",
    "enable_undo_redo",
    "redo",
    "undo",
    "undoable",
]
