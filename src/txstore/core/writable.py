"""Observable single-value cell."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from txstore.core.kinds import ABSENT

Subscriber = Callable[[Any], Any]
Unsubscribe = Callable[[], None]
Equals = Callable[[Any, Any], bool]


def identical(a: Any, b: Any) -> bool:
    """Default equality for cells: reference identity."""
    return a is b


class _Subscription:
    __slots__ = ("callback", "active")

    def __init__(self, callback: Subscriber) -> None:
        self.callback = callback
        self.active = True


class Writable:
    """Mutable cell notifying subscribers when its value changes.

    Subscribers run synchronously in registration order. An exception raised by
    a subscriber propagates to whoever called ``set``.
    """

    def __init__(self, value: Any = None, equals: Equals | None = None) -> None:
        self._value = value
        self._equals = equals or identical
        self._subscriptions: list[_Subscription] = []

    def get(self) -> Any:
        return self._value

    def set(self, value: Any) -> bool:
        """Store ``value`` and notify subscribers. Returns False if unchanged.

        A cell still holding ``ABSENT`` accepts its first value without
        consulting ``equals``.
        """
        if self._value is not ABSENT and self._equals(value, self._value):
            return False
        self._value = value
        for subscription in list(self._subscriptions):
            if subscription.active:
                subscription.callback(value)
        return True

    def update(self, updater: Callable[[Any], Any]) -> bool:
        return self.set(updater(self._value))

    def subscribe(self, subscriber: Subscriber) -> Unsubscribe:
        """Register ``subscriber``, call it with the current value, return unsubscribe."""
        subscription = _Subscription(subscriber)
        self._subscriptions.append(subscription)

        def unsubscribe() -> None:
            if subscription.active:
                subscription.active = False
                self._subscriptions.remove(subscription)

        subscriber(self._value)
        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)


__all__ = ["Equals", "Subscriber", "Unsubscribe", "Writable", "identical"]
