"""Repository interfaces for Agora domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from agora.domain.repository.audit import AuditLogRepository
from agora.domain.repository.content import ContentRepository
from agora.domain.repository.karma import KarmaRepository
from agora.domain.repository.transaction import TransactionManager
from agora.domain.repository.user import UserRepository
from agora.domain.repository.vote import VoteRepository

__all__ = [
    "AuditLogRepository",
    "ContentRepository",
    "KarmaRepository",
    "TransactionManager",
    "UserRepository",
    "VoteRepository",
]
