"""Commit logging middleware."""

from __future__ import annotations

import logging
from typing import Any

from txstore.core.diff import Diff
from txstore.core.kinds import ABSENT
from txstore.core.paths import KeyPath
from txstore.core.store import Dispatch, Transaction, transaction_name
from txstore.middleware.base import Middleware

_default_logger = logging.getLogger("txstore.transactions")


def format_commit(
    key_path: KeyPath, transaction: Transaction, payload: Any, changes: list[Diff]
) -> str:
    """Render one commit as ``a.b [NAME]: payload changes``."""
    message = f"[{transaction_name(transaction)}]"
    if key_path:
        message = ".".join(str(key) for key in key_path) + " " + message
    if payload is ABSENT:
        return f"{message} {changes!r}"
    return f"{message}: {payload!r} {changes!r}"


class TransactionLogger(Middleware):
    """Log every commit after it has been applied.

    Args:
        logger: Destination logger. Defaults to ``txstore.transactions``.
        level: Level used for each commit record.
    """

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self._logger = logger or _default_logger
        self._level = level

    def wrap(self, next_dispatch: Dispatch) -> Dispatch:
        def dispatch(key_path: KeyPath, transaction: Transaction, payload: Any) -> list[Diff]:
            changes = next_dispatch(key_path, transaction, payload)
            if self._logger.isEnabledFor(self._level):
                self._logger.log(
                    self._level, "%s", format_commit(key_path, transaction, payload, changes)
                )
            return changes

        return dispatch


def tx_logger(store: Any) -> Any:
    """Store decorator logging commits with the default ``TransactionLogger``."""
    return TransactionLogger()(store)


__all__ = ["TransactionLogger", "format_commit", "tx_logger"]
