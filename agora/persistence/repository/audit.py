"""PostgreSQL implementation of AuditLog repository."""

from typing import List

import logfire
from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import AuditEntry
from agora.domain.repository import AuditLogRepository
from agora.domain.value import UserId
from agora.persistence.mappers import audit_entry_to_dict, row_to_audit_entry
from agora.persistence.tables import audit_logs_table


class PostgresAuditLogRepository(AuditLogRepository):
    """Writes audit entries to the audit_logs table."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def record(self, entry: AuditEntry) -> None:
        """Record an audit entry in its own transaction or savepoint.

        A failed insert rolls back only the audit write and is logged.
        """
        begin = (
            self.session.begin_nested
            if self.session.in_transaction()
            else self.session.begin
        )
        try:
            async with begin():
                await self.session.execute(
                    insert(audit_logs_table).values(**audit_entry_to_dict(entry))
                )
        except SQLAlchemyError as e:
            logfire.warn(
                "Failed to write audit log entry",
                action=entry.action.value,
                actor_id=str(entry.actor_id),
                resource_id=entry.resource_id,
                error=str(e),
            )

    async def find_by_actor(self, actor_id: UserId, limit: int) -> List[AuditEntry]:
        """Find the most recent entries recorded for an actor."""
        stmt = (
            select(audit_logs_table)
            .where(audit_logs_table.c.actor_id == actor_id)
            .order_by(audit_logs_table.c.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_audit_entry(dict(row)) for row in result.mappings().all()]
