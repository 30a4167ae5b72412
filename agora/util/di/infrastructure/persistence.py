"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from agora.config import Settings
from agora.domain.repository import (
    AuditLogRepository,
    ContentRepository,
    KarmaRepository,
    TransactionManager,
    UserRepository,
    VoteRepository,
)
from agora.persistence.database import create_engine, create_session_factory
from agora.persistence.repository import (
    PostgresAuditLogRepository,
    PostgresContentRepository,
    PostgresKarmaRepository,
    PostgresTransactionManager,
    PostgresUserRepository,
    PostgresVoteRepository,
)
from agora.util.di.base import ProviderBase
from agora.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        Units of work commit themselves when their outermost atomic block
        exits. Anything else done on the session (reads, seeding in tests)
        is committed at the end of the request if no exception occurred, or
        rolled back if an exception was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.info("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_transaction_manager(self, session: AsyncSession) -> TransactionManager:
        """Provide transaction boundary."""
        return PostgresTransactionManager(session)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_content_repository(self, session: AsyncSession) -> ContentRepository:
        """Provide Content repository."""
        return PostgresContentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, session: AsyncSession) -> VoteRepository:
        """Provide Vote repository."""
        return PostgresVoteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_karma_repository(self, session: AsyncSession) -> KarmaRepository:
        """Provide Karma repository."""
        return PostgresKarmaRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_audit_log_repository(self, session: AsyncSession) -> AuditLogRepository:
        """Provide AuditLog repository."""
        return PostgresAuditLogRepository(session)
