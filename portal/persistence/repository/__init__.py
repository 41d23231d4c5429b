"""PostgreSQL repository implementations."""

from portal.persistence.repository.cache import PostgresCacheStore, PostgresCounterStore
from portal.persistence.repository.invite import PostgresInviteRepository
from portal.persistence.repository.transaction import PostgresTransactionManager

__all__ = [
    "PostgresCacheStore",
    "PostgresCounterStore",
    "PostgresInviteRepository",
    "PostgresTransactionManager",
]
