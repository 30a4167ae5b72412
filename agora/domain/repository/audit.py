"""Audit log repository interface."""

from abc import ABC, abstractmethod
from typing import List

from agora.domain.model.audit import AuditEntry
from agora.domain.value import UserId


class AuditLogRepository(ABC):
    """Sink for audit entries."""

    @abstractmethod
    async def record(self, entry: AuditEntry) -> None:
        """Record an audit entry.

        Fire-and-forget: implementations log failures instead of raising,
        and a failed write never rolls back the caller's work.

        Args:
            entry: Entry to record
        """
        pass

    @abstractmethod
    async def find_by_actor(self, actor_id: UserId, limit: int) -> List[AuditEntry]:
        """Find the most recent entries recorded for an actor.

        Args:
            actor_id: User who performed the actions
            limit: Maximum number of entries

        Returns:
            Entries ordered newest first
        """
        pass
