"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from txstore.core import Store, Toolbox, tx


def ADD_TODO(task: str) -> Callable[[Toolbox], Any]:
    """Append ``{"task": task}`` to ``todos``."""
    return lambda ops: ops.update("todos", lambda todos: [*todos, {"task": task}])


def SET_VALUE(value: Any) -> Callable[[Toolbox], Any]:
    """Replace the value at the commit root."""
    return lambda ops: ops.set(value)


@pytest.fixture
def add_todo() -> Callable[[str], Callable[[Toolbox], Any]]:
    return ADD_TODO


@pytest.fixture
def set_value() -> Callable[[Any], Callable[[Toolbox], Any]]:
    return SET_VALUE


@pytest.fixture
def todo_store() -> Store:
    return tx({"todos": []})
