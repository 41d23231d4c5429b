"""In-memory repository implementations for testing."""

from .cache import InMemoryCacheStore, InMemoryCounterStore
from .invite import (
    InMemoryInviteRepository,
    InMemoryInviteStore,
    InMemoryTransactionManager,
)

__all__ = [
    "InMemoryCacheStore",
    "InMemoryCounterStore",
    "InMemoryInviteRepository",
    "InMemoryInviteStore",
    "InMemoryTransactionManager",
]
