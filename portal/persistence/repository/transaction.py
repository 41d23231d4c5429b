"""PostgreSQL transaction manager."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from portal.domain.repository import InviteRepository, TransactionManager
from portal.persistence.repository.invite import PostgresInviteRepository


class PostgresTransactionManager(TransactionManager):
    """Runs each invite operation in its own database transaction."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        timeout_seconds: float,
    ) -> None:
        """Initialize transaction manager.

        Args:
            session_factory: Session factory
            timeout_seconds: Bound for lock waits and single statements
        """
        self.session_factory = session_factory
        self.timeout_ms = int(timeout_seconds * 1000)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[InviteRepository]:
        async with self.session_factory() as session:
            try:
                async with session.begin():
                    await session.execute(
                        text(f"SET LOCAL lock_timeout = {self.timeout_ms}")
                    )
                    await session.execute(
                        text(f"SET LOCAL statement_timeout = {self.timeout_ms}")
                    )
                    yield PostgresInviteRepository(session)
            except BaseException as e:
                logfire.warn("Transaction rolled back", error=repr(e))
                raise
