"""Seed helpers for the in-memory database."""

from uuid import UUID, uuid4

from agora.domain.model import User
from agora.domain.value import Handle, UserId, VotableType
from agora.persistence.repository.inmemory import InMemoryDatabase


def make_user(db: InMemoryDatabase, handle: str | None = None) -> UserId:
    """Seed a user and return its ID."""
    user_id = UserId(uuid4())
    db.add_user(User(id=user_id, handle=Handle(handle or f"user-{str(user_id)[:8]}")))
    return user_id


def make_post(db: InMemoryDatabase, author_id: UserId) -> UUID:
    """Seed a post written by author_id and return its ID."""
    post_id = uuid4()
    db.add_content(VotableType.POST, post_id, author_id)
    return post_id


def make_comment(db: InMemoryDatabase, author_id: UserId) -> UUID:
    """Seed a comment written by author_id and return its ID."""
    comment_id = uuid4()
    db.add_content(VotableType.COMMENT, comment_id, author_id)
    return comment_id
