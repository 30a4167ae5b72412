"""Domain value objects for Agora.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum

from pydantic import field_validator

from agora.domain.value.common import RootValueObject


class VoteType(str, Enum):
    """Direction of a vote."""

    UP = "up"
    DOWN = "down"

    @property
    def weight(self) -> int:
        """Karma contributed by a standing vote of this type."""
        return 1 if self is VoteType.UP else -1


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    POST = "post"
    COMMENT = "comment"


class KarmaCategory(str, Enum):
    """Ledger column a karma delta is booked against."""

    POST = "post"
    COMMENT = "comment"
    AWARD = "award"

    @classmethod
    def for_votable(cls, votable_type: VotableType) -> "KarmaCategory":
        """Category that votes on the given votable type feed into."""
        if votable_type == VotableType.POST:
            return cls.POST
        return cls.COMMENT


class AuditAction(str, Enum):
    """Actions recorded in the audit log."""

    CREATE_POST_VOTE = "CREATE_POST_VOTE"
    UPDATE_POST_VOTE = "UPDATE_POST_VOTE"
    REMOVE_POST_VOTE = "REMOVE_POST_VOTE"
    CREATE_COMMENT_VOTE = "CREATE_COMMENT_VOTE"
    UPDATE_COMMENT_VOTE = "UPDATE_COMMENT_VOTE"
    REMOVE_COMMENT_VOTE = "REMOVE_COMMENT_VOTE"
    RECALCULATE_KARMA = "RECALCULATE_KARMA"


class Handle(RootValueObject[str]):
    """Human-readable user handle."""

    @field_validator("root")
    @classmethod
    def validate_handle_format(cls, v: str) -> str:
        """Validate handle is not empty and within length limits."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Handle must be 1-255 characters")
        return v
