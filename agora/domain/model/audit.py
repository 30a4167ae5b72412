"""Audit log entry."""

from datetime import datetime, timezone
from typing import Any

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import AuditAction, AuditEntryId, UserId


class AuditEntry(DomainModel):
    """Record of an action a user performed.

    Written fire-and-forget; a missing entry never invalidates the action.
    """

    id: AuditEntryId
    actor_id: UserId
    action: AuditAction
    resource: str  # e.g. "post_vote", "user_karma"
    resource_id: str
    details: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
