"""Karma ledger entities.

A ledger entry aggregates the karma a user has received, split by the
kind of content that earned it. Two invariants hold for every committed
entry:

- total_karma == post_karma + comment_karma + award_karma
- total_karma >= KARMA_FLOOR
"""

from datetime import datetime, timezone

from pydantic import Field, model_validator

from agora.domain.model.common import DomainModel
from agora.domain.value import KarmaCategory, KarmaEventId, UserId

# Negative-vote spam cannot push a user below this total
KARMA_FLOOR = -99


class KarmaSnapshot(DomainModel):
    """Point-in-time view of a user's karma ledger entry."""

    user_id: UserId
    post_karma: int = 0
    comment_karma: int = 0
    award_karma: int = 0
    total_karma: int = 0
    updated_at: datetime | None = None

    @model_validator(mode="after")
    def check_total(self) -> "KarmaSnapshot":
        """Reject entries whose total does not match the categories."""
        expected = self.post_karma + self.comment_karma + self.award_karma
        if self.total_karma != expected:
            raise ValueError(
                f"total_karma {self.total_karma} != sum of categories {expected}"
            )
        return self

    @classmethod
    def empty(cls, user_id: UserId) -> "KarmaSnapshot":
        """Ledger entry for a user that has not been touched yet."""
        return cls(user_id=user_id)

    @classmethod
    def reconciled(
        cls,
        user_id: UserId,
        post_karma: int,
        comment_karma: int,
        award_karma: int,
        floor: int = KARMA_FLOOR,
    ) -> "KarmaSnapshot":
        """Build an entry from freshly aggregated category totals.

        When the aggregate total falls below the floor, the excess is absorbed
        by whichever of post/comment karma is more negative.

        Args:
            user_id: Ledger owner
            post_karma: Sum of votes on the user's posts
            comment_karma: Sum of votes on the user's comments
            award_karma: Stored award karma (not derivable from votes)
            floor: Minimum total karma

        Returns:
            Snapshot satisfying both ledger invariants
        """
        total = post_karma + comment_karma + award_karma
        if total < floor:
            excess = floor - total
            if post_karma <= comment_karma:
                post_karma += excess
            else:
                comment_karma += excess
            total = floor
        return cls(
            user_id=user_id,
            post_karma=post_karma,
            comment_karma=comment_karma,
            award_karma=award_karma,
            total_karma=total,
            updated_at=datetime.now(timezone.utc),
        )

    def karma_for(self, category: KarmaCategory) -> int:
        """Value of a single category."""
        return getattr(self, f"{category.value}_karma")

    def with_delta(
        self, category: KarmaCategory, delta: int, floor: int = KARMA_FLOOR
    ) -> "KarmaSnapshot":
        """Apply a signed delta to one category with floor clamping.

        The total is clamped at the floor and the clamped amount is taken
        from the category just modified, so the total stays the exact sum.

        Args:
            category: Category to modify
            delta: Signed change requested
            floor: Minimum total karma

        Returns:
            New snapshot with the delta applied
        """
        new_total = max(self.total_karma + delta, floor)
        applied = new_total - self.total_karma
        field = f"{category.value}_karma"
        return self.model_copy(
            update={
                field: getattr(self, field) + applied,
                "total_karma": new_total,
                "updated_at": datetime.now(timezone.utc),
            }
        )


class KarmaEvent(DomainModel):
    """A single karma delta applied to a ledger entry.

    Keyed by the vote transition that produced it, so redelivery of the
    same transition is detected and ignored.
    """

    id: KarmaEventId
    user_id: UserId
    category: KarmaCategory
    delta: int  # Requested
    applied_delta: int  # After floor clamping
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
