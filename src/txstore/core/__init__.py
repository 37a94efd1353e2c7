"""Immutable state engine.

A Store holds one frozen snapshot. Transactions produce mutations that run
against a Toolbox, every change is recorded as a Diff, and subscribers see
each new snapshot synchronously:

    store = tx({"todos": []})
    store.commit(ADD_TODO, "write tests")
"""

from txstore.core.binding import Binding
from txstore.core.diff import Diff, Recorder, prefixed, rebase
from txstore.core.freeze import deep_freeze, is_frozen
from txstore.core.frozen import FrozenList, FrozenSet
from txstore.core.kinds import ABSENT, Absent, ContainerKind, kind_of
from txstore.core.paths import (
    KeyPath,
    KeyPathError,
    check_key_path,
    delete_in,
    get_in,
    set_in,
    update_in,
)
from txstore.core.produce import Mutation, Toolbox, produce
from txstore.core.store import (
    Dispatch,
    DispatchMiddleware,
    Store,
    Transaction,
    build_dispatch,
    parse_commit_args,
    transaction_name,
    tx,
)
from txstore.core.views import Derived, Selected, derived, select
from txstore.core.writable import Writable

__all__ = [
    "ABSENT",
    "Absent",
    "Binding",
    "ContainerKind",
    "Derived",
    "Diff",
    "Dispatch",
    "DispatchMiddleware",
    "FrozenList",
    "FrozenSet",
    "KeyPath",
    "KeyPathError",
    "Mutation",
    "Recorder",
    "Selected",
    "Store",
    "Toolbox",
    "Transaction",
    "Writable",
    "build_dispatch",
    "check_key_path",
    "deep_freeze",
    "delete_in",
    "derived",
    "get_in",
    "is_frozen",
    "kind_of",
    "parse_commit_args",
    "prefixed",
    "produce",
    "rebase",
    "select",
    "set_in",
    "transaction_name",
    "tx",
    "update_in",
]
