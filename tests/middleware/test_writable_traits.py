"""Tests for middleware composition and writable traits."""

from __future__ import annotations

import pytest

from txstore.core import tx
from txstore.middleware import Middleware, StoreProxy, apply_middleware, writable_traits


class NameLog(Middleware):
    def __init__(self, log: list[str], label: str = "") -> None:
        self.log = log
        self.label = label

    def wrap(self, next_dispatch):
        def dispatch(key_path, transaction, payload):
            self.log.append(self.label + transaction.__name__)
            return next_dispatch(key_path, transaction, payload)

        return dispatch


class Veto(Middleware):
    def wrap(self, next_dispatch):
        return lambda key_path, transaction, payload: []


def test_writable_traits_commit_through_inner_middleware():
    log: list[str] = []
    store = apply_middleware(tx(None), [writable_traits, NameLog(log)])

    assert store.set([55]) is True
    assert store.update(lambda items: [*items, 42]) is True
    assert store.update(lambda items: items) is False

    assert log == ["SET", "UPDATE", "UPDATE"]
    assert store.get() == [55, 42]


def test_first_middleware_is_outermost():
    log: list[str] = []
    store = apply_middleware(tx({}), [NameLog(log, "outer:"), NameLog(log, "inner:")])

    store.commit("a", lambda: lambda ops: ops.set(1))

    assert log == ["outer:<lambda>", "inner:<lambda>"]


def test_store_constructor_composes_dispatch_middleware():
    log: list[str] = []
    store = tx({}, middleware=[NameLog(log, "1:"), NameLog(log, "2:")])

    def SET_A():
        return lambda ops: ops.set("a", 1)

    store.commit(SET_A)

    assert log == ["1:SET_A", "2:SET_A"]
    assert store.get("a") == 1


def test_middleware_can_veto_commit():
    store = Veto()(tx({"a": 1}))
    seen = []
    store.subscribe(seen.append)

    assert store.commit("a", lambda: lambda ops: ops.set(2)) == []
    assert store.get("a") == 1
    assert len(seen) == 1


def test_store_proxy_forwards_unknown_members():
    store = writable_traits(tx({"a": 1}))
    wrapped = StoreProxy(store)

    assert wrapped.get("a") == 1
    assert wrapped.set({"a": 2}) is True
    assert store.get("a") == 2
    assert wrapped.inner is store


def test_middleware_must_implement_wrap():
    class Incomplete(Middleware):
        pass

    with pytest.raises(TypeError, match="abstract"):
        Incomplete()
