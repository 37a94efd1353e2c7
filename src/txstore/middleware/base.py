"""Middleware composition around a store's commit.

Middleware come in two shapes:

- ``Middleware`` subclasses wrap the normalized dispatch function
  ``(key_path, transaction, payload) -> list[Diff]``. They can be passed to
  ``Store(middleware=...)`` directly, or called with a store to get a
  decorated store back.
- Plain store decorators: any callable ``store -> store``. They usually
  return a :class:`StoreProxy` subclass that adds members and forwards the
  rest.

``apply_middleware`` accepts both and puts the first item outermost.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any

from txstore.core.diff import Diff
from txstore.core.kinds import ABSENT
from txstore.core.paths import KeyPath
from txstore.core.store import Dispatch, Transaction, parse_commit_args
from txstore.core.writable import Subscriber, Unsubscribe


class StoreProxy:
    """Store-shaped wrapper forwarding everything to ``inner``.

    Subclasses override ``dispatch`` (or add new members); ``commit`` always
    parses its arguments and routes through ``self.dispatch`` so overrides
    take effect for every caller.
    """

    def __init__(self, inner: Any) -> None:
        self._inner = inner

    @property
    def inner(self) -> Any:
        return self._inner

    def get(self, *key_path: Any) -> Any:
        return self._inner.get(*key_path)

    def subscribe(self, subscriber: Subscriber) -> Unsubscribe:
        return self._inner.subscribe(subscriber)

    def commit(self, *args: Any) -> list[Diff]:
        return self.dispatch(*parse_commit_args(args))

    def dispatch(
        self, key_path: KeyPath, transaction: Transaction, payload: Any = ABSENT
    ) -> list[Diff]:
        return self._inner.dispatch(key_path, transaction, payload)

    def __getattr__(self, name: str) -> Any:
        if name == "_inner":
            raise AttributeError(name)
        return getattr(self._inner, name)


class Middleware(ABC):
    """Base class for middleware wrapping the dispatch function."""

    @abstractmethod
    def wrap(self, next_dispatch: Dispatch) -> Dispatch:
        """Return a dispatch function that eventually delegates to ``next_dispatch``."""

    def __call__(self, store: Any) -> StoreProxy:
        return MiddlewareStore(store, self)


class MiddlewareStore(StoreProxy):
    """Store whose dispatch runs through one middleware before reaching ``inner``."""

    def __init__(self, inner: Any, middleware: Middleware) -> None:
        super().__init__(inner)
        self._middleware = middleware
        self._wrapped = middleware.wrap(inner.dispatch)

    @property
    def middleware(self) -> Middleware:
        return self._middleware

    def dispatch(
        self, key_path: KeyPath, transaction: Transaction, payload: Any = ABSENT
    ) -> list[Diff]:
        return self._wrapped(tuple(key_path), transaction, payload)


StoreDecorator = Callable[[Any], Any]


def apply_middleware(store: Any, middleware: Iterable[Middleware | StoreDecorator]) -> Any:
    """Decorate ``store`` with ``middleware``; the first item ends up outermost."""
    for item in reversed(list(middleware)):
        store = item(store)
    return store


__all__ = [
    "Middleware",
    "MiddlewareStore",
    "StoreDecorator",
    "StoreProxy",
    "apply_middleware",
]
