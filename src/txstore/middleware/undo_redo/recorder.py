"""Undo/redo middleware.

Commits issued between ``UNDOABLE_ACTION_START`` and ``UNDOABLE_ACTION_END``
are recorded into one history entry. Nested start/end pairs merge into the
outermost action.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from txstore.core.diff import Diff, rebase
from txstore.core.kinds import ABSENT
from txstore.core.paths import KeyPath
from txstore.core.store import Dispatch, Transaction
from txstore.middleware.base import Middleware, MiddlewareStore
from txstore.middleware.undo_redo.transactions import (
    REDO,
    UNDO,
    UNDOABLE_ACTION_END,
    UNDOABLE_ACTION_START,
    HistoryEntry,
)

logger = logging.getLogger(__name__)


@dataclass
class Recording:
    """Diffs captured so far for the action in progress."""

    root: KeyPath
    depth: int = 1
    changes: list[Diff] = field(default_factory=list)


class UndoRecorder:
    """Dispatch function recording undoable actions for one store."""

    def __init__(self, next_dispatch: Dispatch, *, limit: int | None = None) -> None:
        self._next = next_dispatch
        self._limit = limit
        self._recording: Recording | None = None

    @property
    def recording(self) -> Recording | None:
        return self._recording

    def __call__(self, key_path: KeyPath, transaction: Transaction, payload: Any) -> list[Diff]:
        if transaction is UNDOABLE_ACTION_START:
            return self._start(key_path, transaction, payload)
        if transaction is UNDOABLE_ACTION_END:
            return self._end(key_path, transaction)

        changes = self._next(key_path, transaction, payload)
        if transaction in (UNDO, REDO):
            logger.debug(
                "%s at %r replayed %d change(s)", transaction.__name__, key_path, len(changes)
            )
            return changes
        if self._recording is not None:
            absolute = (diff.with_prefix(key_path) for diff in changes)
            self._recording.changes.extend(rebase(absolute, self._recording.root))
        return changes

    def _start(self, key_path: KeyPath, transaction: Transaction, payload: Any) -> list[Diff]:
        if self._recording is not None:
            self._recording.depth += 1
            return []
        changes = self._next(key_path, transaction, payload)
        self._recording = Recording(root=key_path)
        return changes

    def _end(self, key_path: KeyPath, transaction: Transaction) -> list[Diff]:
        recording = self._recording
        if recording is None:
            return self._next(key_path, transaction, ABSENT)
        recording.depth -= 1
        if recording.depth > 0:
            return []
        self._recording = None

        entry = HistoryEntry(changes=tuple(recording.changes), limit=self._limit)
        logger.debug("flushing undoable action with %d change(s)", len(entry.changes))
        return self._next(key_path, transaction, entry)


class UndoRedo(Middleware):
    """Middleware grouping commits into undoable history entries.

    Args:
        limit: Max retained history entries, oldest dropped first. Use None
            for unbounded history.
    """

    def __init__(self, *, limit: int | None = None) -> None:
        if limit is not None and limit < 1:
            raise ValueError("limit must be >= 1 or None")
        self._limit = limit

    def wrap(self, next_dispatch: Dispatch) -> UndoRecorder:
        return UndoRecorder(next_dispatch, limit=self._limit)

    def __call__(self, store: Any) -> UndoRedoStore:
        return UndoRedoStore(store, self)


class UndoRedoStore(MiddlewareStore):
    """Store decorated with :class:`UndoRedo`."""

    @property
    def recording(self) -> Recording | None:
        """Action currently being recorded, if any."""
        return self._wrapped.recording
