"""In-memory audit log repository for testing."""

from typing import List

from agora.domain.model.audit import AuditEntry
from agora.domain.repository.audit import AuditLogRepository
from agora.domain.value import UserId

from .database import InMemoryDatabase


class InMemoryAuditLogRepository(AuditLogRepository):
    """In-memory implementation of AuditLogRepository for testing."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    async def record(self, entry: AuditEntry) -> None:
        """Record an audit entry."""
        self._db.audit_log.append(entry)

    async def find_by_actor(self, actor_id: UserId, limit: int) -> List[AuditEntry]:
        """Find the most recent entries recorded for an actor."""
        entries = [e for e in self._db.audit_log if e.actor_id == actor_id]
        return list(reversed(entries))[:limit]
