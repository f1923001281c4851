"""Local persisted console state."""

from fireview.infrastructure.persistence.local_state import (
    JsonFileStateStore,
    MemoryStateStore,
    create_state_store,
)

__all__ = [
    "JsonFileStateStore",
    "MemoryStateStore",
    "create_state_store",
]
