"""Async engine and session factory for PostgreSQL (asyncpg driver)."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from agora.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the process-wide engine.

    Vote requests are short and many run concurrently against the same
    ledger rows, so the pool is sized from DATABASE__POOL_SIZE and
    DATABASE__MAX_OVERFLOW rather than SQLAlchemy defaults.
    """
    return create_async_engine(
        settings.database.url,
        echo=settings.debug,
        pool_pre_ping=True,  # Connections dropped by the server become retryable errors otherwise
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the factory for request-scoped sessions.

    Repositories work with Core statements and detached domain models, so
    nothing needs expiring on commit and nothing is autoflushed.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
