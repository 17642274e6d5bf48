"""Key-value storage for draft state."""

from snakedraft.storage.kv import (
    InMemoryKeyValueStore,
    KeyValueStore,
    MISSING,
    Precondition,
    PreconditionFailed,
    StoreKey,
    StoreResult,
)

__all__ = [
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "MISSING",
    "Precondition",
    "PreconditionFailed",
    "StoreKey",
    "StoreResult",
]
