"""Vote entity and the vote-slot state machine.

A vote slot is one voter's standing opinion on one target. It is either
empty (no record), up or down. Casting a vote moves the slot and yields the
signed karma delta owed to the target's author.
"""

from datetime import datetime, timezone
from uuid import UUID

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import (
    AuditAction,
    KarmaCategory,
    KarmaEventId,
    UserId,
    VotableType,
    VoteId,
    VoteType,
)


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per item (enforced by database unique constraint)
    - Repeating the same vote removes it; the opposite vote flips it
    - Polymorphic reference to votable (post or comment)
    """

    id: VoteId
    user_id: UserId
    votable_type: VotableType
    votable_id: UUID  # PostId or CommentId (both are UUIDs)
    author_id: UserId  # Denormalized from the votable at cast time
    vote_type: VoteType
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


def resolve_transition(
    current: VoteType | None, requested: VoteType
) -> tuple[VoteType | None, int]:
    """Resolve a vote request against the current slot.

    Args:
        current: Standing vote, None when the slot is empty
        requested: Vote the user just cast

    Returns:
        Tuple of (resulting slot, karma delta for the author)
    """
    if current is None:
        return requested, requested.weight
    if current == requested:
        # Toggle off
        return None, -current.weight
    return requested, requested.weight - current.weight


class VoteTransition(DomainModel):
    """Outcome of casting a vote against the store.

    Each transition gets its own event id so the karma side effect can be
    delivered at least once without being applied twice.
    """

    event_id: KarmaEventId
    vote_id: VoteId
    voter_id: UserId
    author_id: UserId
    votable_type: VotableType
    votable_id: UUID
    previous: VoteType | None
    current: VoteType | None
    delta: int

    @property
    def category(self) -> KarmaCategory:
        """Karma category the delta is booked against."""
        return KarmaCategory.for_votable(self.votable_type)

    @property
    def audit_action(self) -> AuditAction:
        """Audit action describing this transition."""
        if self.previous is None:
            verb = "CREATE"
        elif self.current is None:
            verb = "REMOVE"
        else:
            verb = "UPDATE"
        return AuditAction(f"{verb}_{self.votable_type.value.upper()}_VOTE")


class VoteResult(DomainModel):
    """Result of a vote as seen by the caller."""

    state: VoteType | None
    author_id: UserId
    karma_change: int  # Applied to the author, after floor clamping
