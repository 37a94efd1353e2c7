"""Recorded leaf-level changes."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from typing import Any

from txstore.core.kinds import ABSENT
from txstore.core.paths import KeyPath


@dataclass(frozen=True)
class Diff:
    """One recorded change at ``path``.

    ``old_value is ABSENT`` means the location did not exist before the change;
    ``new_value is ABSENT`` means the location was removed.
    """

    path: KeyPath
    old_value: Any = field(default=ABSENT)
    new_value: Any = field(default=ABSENT)

    @property
    def created(self) -> bool:
        return self.old_value is ABSENT

    @property
    def removed(self) -> bool:
        return self.new_value is ABSENT

    def with_prefix(self, prefix: KeyPath) -> Diff:
        """Return this diff re-rooted under ``prefix``."""
        if not prefix:
            return self
        return replace(self, path=(*prefix, *self.path))

    def relative_to(self, root: KeyPath) -> Diff | None:
        """Return this diff re-based to ``root``, or None if it lies outside it."""
        if self.path[: len(root)] != tuple(root):
            return None
        return replace(self, path=self.path[len(root) :])


Recorder = Callable[[Diff], Any]


def prefixed(record: Recorder | None, prefix: KeyPath) -> Recorder | None:
    """Wrap ``record`` so every diff passed to it is re-rooted under ``prefix``."""
    if record is None:
        return None
    if not prefix:
        return record
    return lambda diff: record(diff.with_prefix(prefix))


def rebase(changes: Iterable[Diff], root: KeyPath) -> list[Diff]:
    """Keep diffs under ``root`` with ``root`` stripped from their paths."""
    rebased = []
    for diff in changes:
        relative = diff.relative_to(root)
        if relative is not None:
            rebased.append(relative)
    return rebased


__all__ = ["Diff", "Recorder", "prefixed", "rebase"]
