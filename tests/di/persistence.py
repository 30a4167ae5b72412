"""Mock persistence providers for testing."""

from dishka import Scope, provide

from agora.domain.repository import (
    AuditLogRepository,
    ContentRepository,
    KarmaRepository,
    TransactionManager,
    UserRepository,
    VoteRepository,
)
from agora.persistence.repository.inmemory import (
    InMemoryAuditLogRepository,
    InMemoryContentRepository,
    InMemoryDatabase,
    InMemoryKarmaRepository,
    InMemoryTransactionManager,
    InMemoryUserRepository,
    InMemoryVoteRepository,
)
from agora.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    The database is APP-scoped so that every request of one container sees
    the same data, like requests against one Postgres database. Each test
    builds its own container, which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_database(self) -> InMemoryDatabase:
        """Provide the shared in-memory database."""
        return InMemoryDatabase()

    @provide(scope=Scope.REQUEST)
    def get_transaction_manager(self, db: InMemoryDatabase) -> TransactionManager:
        """Provide in-memory transaction boundary."""
        return InMemoryTransactionManager(db)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, db: InMemoryDatabase) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository(db)

    @provide(scope=Scope.REQUEST)
    def get_content_repository(self, db: InMemoryDatabase) -> ContentRepository:
        """Provide in-memory content repository."""
        return InMemoryContentRepository(db)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, db: InMemoryDatabase) -> VoteRepository:
        """Provide in-memory vote repository."""
        return InMemoryVoteRepository(db)

    @provide(scope=Scope.REQUEST)
    def get_karma_repository(self, db: InMemoryDatabase) -> KarmaRepository:
        """Provide in-memory karma repository."""
        return InMemoryKarmaRepository(db)

    @provide(scope=Scope.REQUEST)
    def get_audit_log_repository(self, db: InMemoryDatabase) -> AuditLogRepository:
        """Provide in-memory audit log repository."""
        return InMemoryAuditLogRepository(db)
