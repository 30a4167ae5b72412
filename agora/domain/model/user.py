"""User entity.

Users are owned by the surrounding application; the karma engine only
needs to know that they exist and how to label them.
"""

from datetime import datetime, timezone

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import Handle, UserId


class User(DomainModel):
    """Read-only view of a user account."""

    id: UserId
    handle: Handle
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
