"""Tests for the deep-freeze guard."""

from __future__ import annotations

from dataclasses import dataclass

import pytest
from pyrsistent import PMap, pmap, pset, pvector

from txstore.core import FrozenList, FrozenSet, deep_freeze, is_frozen, tx


class Counter:
    def __init__(self) -> None:
        self.items: list[int] = []


@dataclass
class Settings:
    options: dict[str, int]


def test_converts_builtin_containers_recursively():
    frozen = deep_freeze({"a": [1, {"b": {2, 3}}], "t": (1, [2])})

    assert isinstance(frozen, PMap)
    assert isinstance(frozen["a"], FrozenList)
    assert isinstance(frozen["a"][1], PMap)
    assert isinstance(frozen["a"][1]["b"], FrozenSet)
    assert isinstance(frozen["t"], tuple)
    assert isinstance(frozen["t"][1], FrozenList)


def test_frozen_containers_reject_in_place_mutation():
    frozen = deep_freeze({"m": {"a": 1}, "l": [1, 2]})

    with pytest.raises(TypeError):
        frozen["m"]["a"] = 2
    with pytest.raises(TypeError):
        del frozen["m"]["a"]
    with pytest.raises(TypeError):
        frozen["l"][0] = 5
    assert frozen == {"m": {"a": 1}, "l": [1, 2]}


def test_list_mutators_raise():
    frozen = deep_freeze([1, 2])

    for mutate in (
        lambda: frozen.append(3),
        lambda: frozen.extend([3]),
        lambda: frozen.insert(0, 3),
        lambda: frozen.pop(),
        lambda: frozen.remove(1),
        lambda: frozen.sort(),
        lambda: frozen.clear(),
    ):
        with pytest.raises(TypeError, match="frozen"):
            mutate()
    assert frozen == [1, 2]


def test_set_mutators_raise():
    frozen = deep_freeze({1, 2})

    for mutate in (
        lambda: frozen.add(3),
        lambda: frozen.discard(1),
        lambda: frozen.remove(1),
        lambda: frozen.update({3}),
        lambda: frozen.clear(),
    ):
        with pytest.raises(TypeError, match="frozen"):
            mutate()
    assert frozen == {1, 2}


def test_values_read_from_a_store_reject_mutation():
    store = tx({"todos": [], "tags": {"a"}})

    with pytest.raises(TypeError):
        store.get("todos").append({"task": "x"})
    with pytest.raises(TypeError):
        store.get("tags").add("b")
    with pytest.raises(TypeError):
        store.get("tags").discard("a")
    assert store.get() == {"todos": [], "tags": {"a"}}


def test_frozen_list_behaves_like_a_list_when_read():
    frozen = deep_freeze([1, 2, 3])

    assert frozen == [1, 2, 3]
    assert [1, 2, 3] == frozen
    assert frozen != [1, 2]
    assert not (frozen != [1, 2, 3])
    assert isinstance(frozen[1:], FrozenList)
    assert frozen[1:] == [2, 3]
    assert isinstance(frozen + [4], FrozenList)
    assert [0] + frozen == [0, 1, 2, 3]
    assert hash(frozen) == hash((1, 2, 3))


def test_persistent_inputs_are_converted():
    frozen = deep_freeze(pmap({"items": pvector([1]), "tags": pset(["x"])}))

    assert isinstance(frozen["items"], FrozenList)
    assert isinstance(frozen["tags"], FrozenSet)
    assert deep_freeze(frozenset({1})) == {1}
    assert isinstance(deep_freeze(frozenset({1})), FrozenSet)


def test_leaves_other_objects_alone():
    counter = Counter()
    settings = Settings(options={"depth": 1})

    frozen = deep_freeze({"counter": counter, "settings": settings})

    assert frozen["counter"] is counter
    assert frozen["settings"] is settings
    counter.items.append(1)
    settings.options["depth"] = 2
    assert isinstance(settings.options, dict)


def test_subclasses_of_builtin_containers_are_leaves():
    class Tagged(dict):
        pass

    tagged = Tagged(a=[1])

    assert deep_freeze(tagged) is tagged


def test_refreezing_is_idempotent():
    frozen = deep_freeze({"a": [1, 2], "b": {"c": "d"}})

    assert deep_freeze(frozen) is frozen
    assert is_frozen(frozen)
    assert not is_frozen({"a": 1})


def test_persistent_containers_with_mutable_members_are_refrozen():
    mixed = pmap({"shared": FrozenList([1]), "loose": [1, 2]})

    frozen = deep_freeze(mixed)

    assert frozen is not mixed
    assert frozen["shared"] is mixed["shared"]
    assert isinstance(frozen["loose"], FrozenList)


def test_scalars_pass_through():
    for value in (None, 1, 2.5, "text", b"bytes", True):
        assert deep_freeze(value) is value
