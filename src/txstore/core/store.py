"""Transactional store.

A Store owns one immutable snapshot. State changes go through ``commit``:

    >>> def ADD_TODO(task):
    ...     return lambda ops: ops.update("todos", lambda todos: [*todos, {"task": task}])
    >>> store = tx({"todos": []})
    >>> store.commit(ADD_TODO, "x")
    [Diff(path=('todos',), old_value=FrozenList([]), new_value=FrozenList([pmap({'task': 'x'})]))]

Commits run through a dispatch chain built from the store's middleware, then
apply the transaction's mutation to the subtree at the commit key path,
install the new snapshot and notify subscribers.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, Protocol

from txstore.core.diff import Diff
from txstore.core.freeze import deep_freeze
from txstore.core.kinds import ABSENT
from txstore.core.paths import KeyPath, check_key_path, get_in, set_in
from txstore.core.produce import Mutation, produce
from txstore.core.writable import Subscriber, Unsubscribe, Writable

logger = logging.getLogger(__name__)

Transaction = Callable[..., Mutation | None]
Dispatch = Callable[[KeyPath, Transaction, Any], list[Diff]]


class DispatchMiddleware(Protocol):
    """Anything that can wrap a dispatch function."""

    def wrap(self, next_dispatch: Dispatch) -> Dispatch: ...


def transaction_name(transaction: Any) -> str:
    """Return the display name of a transaction."""
    return getattr(transaction, "__name__", type(transaction).__name__)


def parse_commit_args(args: tuple[Any, ...]) -> tuple[KeyPath, Transaction, Any]:
    """Split ``(*key_path, transaction, payload?)`` into its parts.

    The first callable argument is the transaction. Everything before it is the
    key path; at most one argument may follow it as the payload. A missing
    payload is reported as ``ABSENT``.

    Raises:
        TypeError: No callable transaction, or more than one trailing argument.
        KeyPathError: A key path entry is not hashable.
    """
    for index, arg in enumerate(args):
        if callable(arg):
            break
    else:
        raise TypeError("commit() requires a callable transaction")

    trailing = args[index + 1 :]
    if len(trailing) > 1:
        raise TypeError(
            f"commit() takes at most one payload after the transaction, got {len(trailing)}"
        )
    payload = trailing[0] if trailing else ABSENT
    return check_key_path(tuple(args[:index])), args[index], payload


def build_dispatch(base: Dispatch, middleware: Iterable[DispatchMiddleware]) -> Dispatch:
    """Wrap ``base`` so the first middleware is outermost."""
    dispatch = base
    for item in reversed(list(middleware)):
        dispatch = item.wrap(dispatch)
    return dispatch


class Store:
    """Owns one immutable snapshot and applies transactions to it.

    Args:
        initial: Initial state, or an existing :class:`Writable` cell to adopt.
            The state is deep-frozen before anyone can observe it.
        middleware: Dispatch middleware, outermost first.
    """

    def __init__(
        self,
        initial: Any = None,
        middleware: Iterable[DispatchMiddleware] = (),
    ) -> None:
        if isinstance(initial, Writable):
            initial.update(deep_freeze)
            self._cell = initial
        else:
            self._cell = Writable(deep_freeze(initial))
        self._dispatch = build_dispatch(self._apply, middleware)

    @property
    def state(self) -> Any:
        """Current snapshot."""
        return self._cell.get()

    def get(self, *key_path: Any) -> Any:
        """Return the value at ``key_path`` in the current snapshot."""
        return get_in(self._cell.get(), *key_path)

    def subscribe(self, subscriber: Subscriber) -> Unsubscribe:
        """Call ``subscriber`` now and after every commit that changes the snapshot."""
        return self._cell.subscribe(subscriber)

    def commit(self, *args: Any) -> list[Diff]:
        """Apply ``transaction(payload)`` at ``key_path``.

        Called as ``commit(*key_path, transaction, payload?)``. Returns the
        recorded changes with paths relative to ``key_path``.
        """
        return self.dispatch(*parse_commit_args(args))

    def dispatch(
        self, key_path: KeyPath, transaction: Transaction, payload: Any = ABSENT
    ) -> list[Diff]:
        """Run an already-parsed commit through the middleware chain."""
        return self._dispatch(tuple(key_path), transaction, payload)

    def _apply(self, key_path: KeyPath, transaction: Transaction, payload: Any) -> list[Diff]:
        if not callable(transaction):
            raise TypeError(
                f"transaction must be callable, got {type(transaction).__name__}"
            )
        check_key_path(key_path)

        mutation = transaction() if payload is ABSENT else transaction(payload)
        changes: list[Diff] = []
        run = produce(mutation, changes.append)

        def transition(state: Any) -> Any:
            subtree = get_in(state, *key_path, default=ABSENT)
            result = run(subtree)
            return state if result is subtree else set_in(state, *key_path, result)

        self._cell.update(transition)
        logger.debug(
            "commit %s at %r: %d change(s)", transaction_name(transaction), key_path, len(changes)
        )
        return changes


def tx(initial: Any = None, middleware: Iterable[DispatchMiddleware] = ()) -> Store:
    """Create a :class:`Store`."""
    return Store(initial, middleware)


__all__ = [
    "Dispatch",
    "DispatchMiddleware",
    "Store",
    "Transaction",
    "build_dispatch",
    "parse_commit_args",
    "transaction_name",
    "tx",
]
