"""Shared in-memory storage for the in-memory repositories.

All in-memory repositories of one container read and write the same
``InMemoryDatabase``. Transactions are emulated with a single-writer lock
and snapshot/restore rollback.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import Any
from uuid import UUID

from agora.domain.model import AuditEntry, KarmaEvent, KarmaSnapshot, User, Vote
from agora.domain.value import UserId, VotableType

VoteKey = tuple[UserId, VotableType, UUID]


class InMemoryDatabase:
    """Tables as dicts of immutable domain models."""

    def __init__(self) -> None:
        self.users: dict[UserId, User] = {}
        # (votable_type, votable_id) -> (author_id, deleted)
        self.content: dict[tuple[VotableType, UUID], tuple[UserId, bool]] = {}
        self.votes: dict[VoteKey, Vote] = {}
        self.karma: dict[UserId, KarmaSnapshot] = {}
        self.karma_events: dict[UUID, KarmaEvent] = {}
        self.audit_log: list[AuditEntry] = []

        self._lock = asyncio.Lock()
        self._depth: ContextVar[int] = ContextVar(f"inmemory_tx_{id(self)}", default=0)

    def add_user(self, user: User) -> User:
        """Seed a user."""
        self.users[user.id] = user
        return user

    def add_content(
        self, votable_type: VotableType, votable_id: UUID, author_id: UserId
    ) -> None:
        """Seed a post or comment written by author_id."""
        self.content[(votable_type, votable_id)] = (author_id, False)

    def delete_content(self, votable_type: VotableType, votable_id: UUID) -> None:
        """Soft-delete a post or comment."""
        author_id, _ = self.content[(votable_type, votable_id)]
        self.content[(votable_type, votable_id)] = (author_id, True)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Run a block as one unit of work.

        The outermost block holds the writer lock. Every block, nested or
        not, restores the tables it saw on entry if it exits with an error.
        """
        depth = self._depth.get()
        if depth == 0:
            await self._lock.acquire()
        saved = self._snapshot()
        token = self._depth.set(depth + 1)
        try:
            yield
        except BaseException:
            self._restore(saved)
            raise
        finally:
            self._depth.reset(token)
            if depth == 0:
                self._lock.release()

    def _snapshot(self) -> dict[str, Any]:
        # Models are frozen, so shallow copies are enough
        return {
            "votes": dict(self.votes),
            "karma": dict(self.karma),
            "karma_events": dict(self.karma_events),
        }

    def _restore(self, saved: dict[str, Any]) -> None:
        self.votes = saved["votes"]
        self.karma = saved["karma"]
        self.karma_events = saved["karma_events"]
