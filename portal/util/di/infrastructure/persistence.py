"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from portal.config import Settings
from portal.domain.repository import CacheStore, CounterStore, TransactionManager
from portal.persistence.database import create_engine, create_session_factory
from portal.persistence.repository import (
    PostgresCacheStore,
    PostgresCounterStore,
    PostgresTransactionManager,
)
from portal.util.di.base import ProviderBase
from portal.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL.

    Invite repositories are not provided directly: each invite operation
    gets one from the transaction manager, bound to its own transaction.
    """

    __is_mock__ = False

    scope = Scope.APP

    @provide
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide
    def get_transaction_manager(
        self, session_factory: async_sessionmaker[AsyncSession], settings: Settings
    ) -> TransactionManager:
        """Provide transaction manager."""
        return PostgresTransactionManager(
            session_factory,
            timeout_seconds=settings.invitations.transaction_timeout_seconds,
        )

    @provide
    def get_cache_store(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> CacheStore:
        """Provide cache store."""
        return PostgresCacheStore(session_factory)

    @provide
    def get_counter_store(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> CounterStore:
        """Provide counter store."""
        return PostgresCounterStore(session_factory)
