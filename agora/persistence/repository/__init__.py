"""PostgreSQL repository implementations."""

from agora.persistence.repository.audit import PostgresAuditLogRepository
from agora.persistence.repository.content import PostgresContentRepository
from agora.persistence.repository.karma import PostgresKarmaRepository
from agora.persistence.repository.transaction import PostgresTransactionManager
from agora.persistence.repository.user import PostgresUserRepository
from agora.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresAuditLogRepository",
    "PostgresContentRepository",
    "PostgresKarmaRepository",
    "PostgresTransactionManager",
    "PostgresUserRepository",
    "PostgresVoteRepository",
]
