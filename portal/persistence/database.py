"""Async engine and session factory for PostgreSQL."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from portal.config import Settings

# Shows up in pg_stat_activity next to lock waits
APPLICATION_NAME = "school-portal-invites"


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine.

    Connections are pinged before checkout and recycled every 30 minutes.
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_recycle=1800,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        connect_args={"server_settings": {"application_name": APPLICATION_NAME}},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory.

    Sessions keep loaded rows after commit and never autoflush; the
    repositories issue explicit Core statements and map rows themselves.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
