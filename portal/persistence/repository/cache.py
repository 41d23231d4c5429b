"""PostgreSQL-backed key-value stores.

Both stores run every call in a short transaction of its own, never inside
an invite transaction.
"""

from datetime import datetime, timedelta, timezone

from sqlalchemy import and_, delete, func, insert, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from portal.domain.repository import CacheStore, CounterStore
from portal.persistence.tables import cache_entries_table, rate_events_table


class PostgresCacheStore(CacheStore):
    """Cache entries in the unlogged ``cache_entries`` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def get(self, key: str) -> str | None:
        stmt = select(cache_entries_table.c.payload).where(
            and_(
                cache_entries_table.c.key == key,
                cache_entries_table.c.expires_at > func.now(),
            )
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return result.scalar()

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=ttl_seconds)
        stmt = pg_insert(cache_entries_table).values(
            key=key, payload=value, expires_at=expires_at
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[cache_entries_table.c.key],
            set_={"payload": stmt.excluded.payload, "expires_at": stmt.excluded.expires_at},
        )
        async with self.session_factory() as session, session.begin():
            await session.execute(stmt)

    async def add(self, key: str, value: str, ttl_seconds: int) -> bool:
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=ttl_seconds)
        stmt = pg_insert(cache_entries_table).values(
            key=key, payload=value, expires_at=expires_at
        )
        # An expired row still holds the key and is replaced
        stmt = stmt.on_conflict_do_update(
            index_elements=[cache_entries_table.c.key],
            set_={"payload": stmt.excluded.payload, "expires_at": stmt.excluded.expires_at},
            where=cache_entries_table.c.expires_at <= func.now(),
        ).returning(cache_entries_table.c.key)
        async with self.session_factory() as session, session.begin():
            result = await session.execute(stmt)
            return result.scalar() is not None

    async def delete(self, key: str) -> None:
        stmt = delete(cache_entries_table).where(cache_entries_table.c.key == key)
        async with self.session_factory() as session, session.begin():
            await session.execute(stmt)


class PostgresCounterStore(CounterStore):
    """Sliding window log in the unlogged ``rate_events`` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def hit(self, key: str, window_seconds: int) -> int:
        now = datetime.now(timezone.utc)
        window_start = now - timedelta(seconds=window_seconds)

        async with self.session_factory() as session, session.begin():
            await session.execute(
                delete(rate_events_table).where(
                    and_(
                        rate_events_table.c.key == key,
                        rate_events_table.c.occurred_at <= window_start,
                    )
                )
            )
            await session.execute(
                insert(rate_events_table).values(key=key, occurred_at=now)
            )
            result = await session.execute(self._count_stmt(key, window_start))
            return result.scalar() or 0

    async def count(self, key: str, window_seconds: int) -> int:
        window_start = datetime.now(timezone.utc) - timedelta(seconds=window_seconds)
        async with self.session_factory() as session:
            result = await session.execute(self._count_stmt(key, window_start))
            return result.scalar() or 0

    @staticmethod
    def _count_stmt(key: str, window_start: datetime):
        return (
            select(func.count())
            .select_from(rate_events_table)
            .where(
                and_(
                    rate_events_table.c.key == key,
                    rate_events_table.c.occurred_at > window_start,
                )
            )
        )
