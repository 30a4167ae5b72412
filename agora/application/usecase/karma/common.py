"""Response models shared by the karma use cases."""

from datetime import datetime

from pydantic import BaseModel

from agora.domain.model import KarmaSnapshot


class KarmaStats(BaseModel):
    """A user's karma split by category."""

    post_karma: int
    comment_karma: int
    award_karma: int
    total_karma: int
    updated_at: datetime | None = None

    @classmethod
    def from_snapshot(cls, snapshot: KarmaSnapshot) -> "KarmaStats":
        return cls(
            post_karma=snapshot.post_karma,
            comment_karma=snapshot.comment_karma,
            award_karma=snapshot.award_karma,
            total_karma=snapshot.total_karma,
            updated_at=snapshot.updated_at,
        )
