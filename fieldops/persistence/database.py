"""Async PostgreSQL engine and session factory."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from fieldops.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine.

    asyncpg's per-statement timeout matches the service's operation timeout,
    so a stuck query is cancelled server-side rather than left running after
    the caller has given up.
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        connect_args={
            "command_timeout": settings.invitations.operation_timeout_seconds,
            "server_settings": {"application_name": "fieldops-invites"},
        },
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Repositories return mapped domain objects, so nothing is lazily loaded
    # after commit
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
