"""Derived and selected projections of a store."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol

from txstore.core.diff import Diff
from txstore.core.kinds import ABSENT
from txstore.core.paths import KeyPath, check_key_path, get_in
from txstore.core.store import Transaction, parse_commit_args
from txstore.core.writable import Equals, Subscriber, Unsubscribe, Writable


class Readable(Protocol):
    def get(self, *key_path: Any) -> Any: ...

    def subscribe(self, subscriber: Subscriber) -> Unsubscribe: ...


class Dispatcher(Readable, Protocol):
    def dispatch(
        self, key_path: KeyPath, transaction: Transaction, payload: Any = ...
    ) -> list[Diff]: ...


class Derived:
    """Read-only value computed from a store's state.

    The upstream subscription is opened when the first subscriber arrives and
    closed when the last one leaves. While nobody is subscribed, ``get``
    recomputes from the store on every call.
    """

    def __init__(
        self,
        store: Readable,
        selector: Callable[[Any], Any],
        equals: Equals | None = None,
    ) -> None:
        self._store = store
        self._selector = selector
        self._cell = Writable(ABSENT, equals)
        self._subscriber_count = 0
        self._stop: Unsubscribe | None = None

    def _compute(self, state: Any) -> None:
        self._cell.set(self._selector(state))

    def get(self, *key_path: Any) -> Any:
        if self._subscriber_count == 0:
            self._compute(self._store.get())
        return get_in(self._cell.get(), *key_path)

    def subscribe(self, subscriber: Subscriber) -> Unsubscribe:
        if self._subscriber_count == 0:
            self._stop = self._store.subscribe(self._compute)
        self._subscriber_count += 1
        unsubscribe = self._cell.subscribe(subscriber)
        released = False

        def release() -> None:
            nonlocal released
            if released:
                return
            released = True
            unsubscribe()
            self._subscriber_count -= 1
            if self._subscriber_count == 0 and self._stop is not None:
                self._stop()
                self._stop = None

        return release


class Selected(Derived):
    """Read/write view of the subtree at a dynamically computed key path.

    ``selector`` maps the full state to a key path and is evaluated again on
    every read, notification and commit, so the view follows whatever location
    the state currently points at.
    """

    def __init__(self, store: Dispatcher, selector: Callable[[Any], Sequence[Any]]) -> None:
        super().__init__(store, lambda state: get_in(state, *selector(state)))
        self._root_selector = selector

    def root(self) -> KeyPath:
        """Key path currently addressed by this view."""
        return check_key_path(tuple(self._root_selector(self._store.get())))

    def commit(self, *args: Any) -> list[Diff]:
        """Commit relative to the selected subtree.

        Diffs are reported relative to the key path given to this call.
        """
        return self.dispatch(*parse_commit_args(args))

    def dispatch(
        self, key_path: KeyPath, transaction: Transaction, payload: Any = ABSENT
    ) -> list[Diff]:
        return self._store.dispatch((*self.root(), *key_path), transaction, payload)


def derived(
    store: Readable, selector: Callable[[Any], Any], equals: Equals | None = None
) -> Derived:
    """Create a read-only projection notified only when ``equals`` says it changed."""
    return Derived(store, selector, equals)


def select(store: Dispatcher, selector: Callable[[Any], Sequence[Any]]) -> Selected:
    """Create a read/write view rooted at ``selector(state)``."""
    return Selected(store, selector)


__all__ = ["Derived", "Selected", "derived", "select"]
