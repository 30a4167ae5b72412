"""In-memory repository implementations for testing."""

from .audit import InMemoryAuditLogRepository
from .content import InMemoryContentRepository
from .database import InMemoryDatabase
from .karma import InMemoryKarmaRepository
from .transaction import InMemoryTransactionManager
from .user import InMemoryUserRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryAuditLogRepository",
    "InMemoryContentRepository",
    "InMemoryDatabase",
    "InMemoryKarmaRepository",
    "InMemoryTransactionManager",
    "InMemoryUserRepository",
    "InMemoryVoteRepository",
]
