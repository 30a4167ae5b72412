"""Domain model entities for Agora."""

from agora.domain.model.audit import AuditEntry
from agora.domain.model.karma import KARMA_FLOOR, KarmaEvent, KarmaSnapshot
from agora.domain.model.user import User
from agora.domain.model.vote import (
    Vote,
    VoteResult,
    VoteTransition,
    resolve_transition,
)

__all__ = [
    "KARMA_FLOOR",
    "AuditEntry",
    "KarmaEvent",
    "KarmaSnapshot",
    "User",
    "Vote",
    "VoteResult",
    "VoteTransition",
    "resolve_transition",
]
