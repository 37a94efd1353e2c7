"""Middleware wrapping a store's commit."""

from txstore.middleware.base import (
    Middleware,
    MiddlewareStore,
    StoreDecorator,
    StoreProxy,
    apply_middleware,
)
from txstore.middleware.logger import TransactionLogger, format_commit, tx_logger
from txstore.middleware.undo_redo import (
    UndoRedo,
    can_redo,
    can_undo,
    enable_undo_redo,
    redo,
    undo,
    undoable,
)
from txstore.middleware.writable_traits import SET, UPDATE, WritableStore, writable_traits

__all__ = [
    "SET",
    "UPDATE",
    "Middleware",
    "MiddlewareStore",
    "StoreDecorator",
    "StoreProxy",
    "TransactionLogger",
    "UndoRedo",
    "WritableStore",
    "apply_middleware",
    "can_redo",
    "can_undo",
    "enable_undo_redo",
    "format_commit",
    "redo",
    "tx_logger",
    "undo",
    "undoable",
    "writable_traits",
]
