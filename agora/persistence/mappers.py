"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from agora.domain.model import AuditEntry, KarmaEvent, KarmaSnapshot, User, Vote
from agora.domain.value import (
    AuditAction,
    AuditEntryId,
    Handle,
    KarmaCategory,
    KarmaEventId,
    UserId,
    VotableType,
    VoteId,
    VoteType,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        handle=Handle(row["handle"]),
        created_at=row["created_at"],
    )


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        votable_type=VotableType(row["votable_type"]),
        votable_id=_uuid(row["votable_id"]),
        author_id=UserId(_uuid(row["author_id"])),
        vote_type=VoteType(row["vote_type"]),
        created_at=row["created_at"],
    )


def row_to_karma(row: Dict[str, Any]) -> KarmaSnapshot:
    """Convert database row to KarmaSnapshot domain model.

    Args:
        row: Database row as dict

    Returns:
        KarmaSnapshot domain model
    """
    return KarmaSnapshot(
        user_id=UserId(_uuid(row["user_id"])),
        post_karma=row["post_karma"],
        comment_karma=row["comment_karma"],
        award_karma=row["award_karma"],
        total_karma=row["total_karma"],
        updated_at=row.get("updated_at"),
    )


def row_to_karma_event(row: Dict[str, Any]) -> KarmaEvent:
    """Convert database row to KarmaEvent domain model.

    Args:
        row: Database row as dict

    Returns:
        KarmaEvent domain model
    """
    return KarmaEvent(
        id=KarmaEventId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        category=KarmaCategory(row["category"]),
        delta=row["delta"],
        applied_delta=row["applied_delta"],
        created_at=row["created_at"],
    )


def row_to_audit_entry(row: Dict[str, Any]) -> AuditEntry:
    """Convert database row to AuditEntry domain model.

    Args:
        row: Database row as dict

    Returns:
        AuditEntry domain model
    """
    return AuditEntry(
        id=AuditEntryId(_uuid(row["id"])),
        actor_id=UserId(_uuid(row["actor_id"])),
        action=AuditAction(row["action"]),
        resource=row["resource"],
        resource_id=row["resource_id"],
        details=row.get("details") or {},
        created_at=row["created_at"],
    )


def audit_entry_to_dict(entry: AuditEntry) -> Dict[str, Any]:
    """Convert AuditEntry domain model to database dict.

    Args:
        entry: AuditEntry domain model

    Returns:
        Dict suitable for database insertion
    """
    data = entry.model_dump()
    data["action"] = entry.action.value
    return data
