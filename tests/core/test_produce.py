"""Tests for produce and the mutation Toolbox."""

from __future__ import annotations

import pytest
from pyrsistent import pmap

from txstore.core import ABSENT, Diff, KeyPathError, produce


def _recorded(mutation, state):
    changes: list[Diff] = []
    result = produce(mutation, changes.append)(state)
    return result, changes


def test_noop_mutation_returns_input():
    state = {}

    assert produce(lambda ops: None)(state) is state
    assert produce(None)(state) is state


def test_set_writes_nested_paths():
    def mutation(ops):
        ops.set("foo1", "bar", 42)
        ops.set("foo2", "bar", 84)

    assert produce(mutation)({}) == {"foo1": {"bar": 42}, "foo2": {"bar": 84}}


def test_apply_runs_nested_mutation_on_subtree():
    state = {"foo1": {"bar": 42}, "foo2": {"bar": 84}}

    def inner(ops):
        ops.set("barCopy", ops.get("bar"))
        ops.update("bar", lambda value: 2 * value)

    result, changes = _recorded(lambda ops: ops.apply("foo1", inner), state)

    assert result == {"foo1": {"barCopy": 42, "bar": 84}, "foo2": {"bar": 84}}
    assert changes == [
        Diff(("foo1", "barCopy"), ABSENT, 42),
        Diff(("foo1", "bar"), 42, 84),
    ]


def test_produce_composes_inside_updaters():
    state = {
        "todos": [
            {"what": "Do something awesome", "urgent": True},
            {"what": "Chill"},
        ]
    }

    def highlight_urgent(color):
        def style(ops):
            if ops.get("urgent"):
                ops.set("style", "color", color)

        return lambda ops: ops.update("todos", lambda todos: [produce(style)(t) for t in todos])

    result = produce(highlight_urgent("red"))(state)

    assert result == {
        "todos": [
            {"what": "Do something awesome", "urgent": True, "style": {"color": "red"}},
            {"what": "Chill"},
        ]
    }
    assert state["todos"][0] == {"what": "Do something awesome", "urgent": True}


def test_get_sees_earlier_writes_in_same_mutation():
    seen = []

    def mutation(ops):
        ops.set("a", 1)
        seen.append(ops.get("a"))
        ops.update("a", lambda a: a + 1)
        seen.append(ops.get("a"))

    assert produce(mutation)({}) == {"a": 2}
    assert seen == [1, 2]


def test_set_always_records_even_when_unchanged():
    state = pmap({"a": 5})

    _, changes = _recorded(lambda ops: ops.set("a", 5), state)

    assert changes == [Diff(("a",), 5, 5)]


def test_update_returning_same_object_is_silent():
    state = pmap({"a": 5, "b": pmap({"c": 1})})

    result, changes = _recorded(lambda ops: ops.update("b", lambda b: b), state)

    assert result is state
    assert changes == []


def test_update_of_missing_location_records_absent_old_value():
    result, changes = _recorded(lambda ops: ops.update("count", lambda n: (n or 0) + 1), {})

    assert result == {"count": 1}
    assert changes == [Diff(("count",), ABSENT, 1)]
    assert changes[0].created


def test_remove_records_old_value_only():
    result, changes = _recorded(lambda ops: ops.remove("a"), {"a": 1, "b": 2})

    assert result == {"b": 2}
    assert changes == [Diff(("a",), old_value=1)]
    assert changes[0].removed


def test_remove_requires_path():
    with pytest.raises(KeyPathError):
        produce(lambda ops: ops.remove())({"a": 1})


def test_recorded_values_are_frozen():
    _, changes = _recorded(lambda ops: ops.set("items", [1, 2]), {})

    with pytest.raises(TypeError):
        changes[0].new_value[0] = 3


def test_input_state_is_never_altered():
    state = pmap({"a": pmap({"b": 1})})

    def mutation(ops):
        ops.set("a", "b", 2)
        ops.remove("a", "b")
        ops.set("c", [1])

    produce(mutation)(state)

    assert state == {"a": {"b": 1}}


def test_failed_mutation_returns_nothing():
    state = pmap({"a": 1})

    def mutation(ops):
        ops.set("a", 2)
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        produce(mutation)(state)
    assert state == {"a": 1}
