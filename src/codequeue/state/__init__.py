"""Persisted reconciliation state."""

from .store import (
    STATE_KEY,
    MemoryStateStore,
    StateStore,
    StateStoreProtocol,
    parse_entries,
)

__all__ = [
    "STATE_KEY",
    "MemoryStateStore",
    "StateStore",
    "StateStoreProtocol",
    "parse_entries",
]
