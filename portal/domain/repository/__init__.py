"""Repository interfaces for the invitation domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from portal.domain.repository.cache import CacheStore
from portal.domain.repository.counter import CounterStore
from portal.domain.repository.invite import InviteRepository, TransactionManager

__all__ = [
    "CacheStore",
    "CounterStore",
    "InviteRepository",
    "TransactionManager",
]
