"""Live binding of a store value into a consumer.

UI layers hold a ``Binding`` per component: the first read subscribes, later
reads return the last delivered value, and teardown releases the subscription
exactly once.
"""

from __future__ import annotations

from typing import Any, Protocol

from txstore.core.kinds import ABSENT
from txstore.core.writable import Subscriber, Unsubscribe


class Subscribable(Protocol):
    def subscribe(self, subscriber: Subscriber) -> Unsubscribe: ...


class Binding:
    """Lazily subscribed holder of a store's latest value."""

    def __init__(self, store: Subscribable) -> None:
        self._store = store
        self._value: Any = ABSENT
        self._unsubscribe: Unsubscribe | None = None
        self._closed = False

    def _receive(self, value: Any) -> None:
        self._value = value

    @property
    def value(self) -> Any:
        """Latest value delivered by the store. Subscribes on first access."""
        if self._closed:
            raise RuntimeError("binding is closed")
        if self._unsubscribe is None:
            self._unsubscribe = self._store.subscribe(self._receive)
        return self._value

    @property
    def bound(self) -> bool:
        return self._unsubscribe is not None

    def close(self) -> None:
        """Release the subscription. Safe to call more than once."""
        self._closed = True
        if self._unsubscribe is not None:
            unsubscribe, self._unsubscribe = self._unsubscribe, None
            unsubscribe()

    def __enter__(self) -> Binding:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["Binding"]
