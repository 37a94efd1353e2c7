"""Store decorator adding ``set``/``update`` shortcuts on the commit root."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from txstore.core.produce import Toolbox
from txstore.middleware.base import StoreProxy


def SET(value: Any) -> Callable[[Toolbox], Any]:
    return lambda ops: ops.set(value)


def UPDATE(updater: Callable[[Any], Any]) -> Callable[[Toolbox], Any]:
    return lambda ops: ops.update(updater)


class WritableStore(StoreProxy):
    """Store proxy exposing cell-style writes.

    Both methods commit through this proxy, so outer and inner middleware see
    them as ordinary ``SET``/``UPDATE`` transactions.
    """

    def set(self, value: Any) -> bool:
        """Replace the whole state. Always counts as a change."""
        return bool(self.commit(SET, value))

    def update(self, updater: Callable[[Any], Any]) -> bool:
        """Replace the state with ``updater(state)``. False when nothing changed."""
        return bool(self.commit(UPDATE, updater))


def writable_traits(store: Any) -> WritableStore:
    return WritableStore(store)


__all__ = ["SET", "UPDATE", "WritableStore", "writable_traits"]
