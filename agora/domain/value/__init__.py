"""Domain value objects for Agora."""

from agora.domain.value.identifiers import (
    AuditEntryId,
    CommentId,
    KarmaEventId,
    PostId,
    UserId,
    VoteId,
)
from agora.domain.value.types import (
    AuditAction,
    Handle,
    KarmaCategory,
    VotableType,
    VoteType,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "VoteId",
    "KarmaEventId",
    "AuditEntryId",
    # Types
    "VoteType",
    "VotableType",
    "KarmaCategory",
    "AuditAction",
    "Handle",
]
