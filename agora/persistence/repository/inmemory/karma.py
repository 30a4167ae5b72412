"""In-memory karma repository for testing."""

from datetime import datetime, timezone
from typing import List, Optional

from agora.domain.model.karma import KarmaEvent, KarmaSnapshot
from agora.domain.repository.karma import KarmaRepository
from agora.domain.value import KarmaCategory, KarmaEventId, UserId

from .database import InMemoryDatabase


class InMemoryKarmaRepository(KarmaRepository):
    """In-memory implementation of KarmaRepository for testing.

    Every write runs inside ``InMemoryDatabase.transaction()``. Called
    outside an atomic block it waits for the writer lock, so it can never
    land in the middle of another unit of work and be undone by that
    unit's rollback.
    """

    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    async def find_by_user(self, user_id: UserId) -> Optional[KarmaSnapshot]:
        """Find a user's ledger entry."""
        return self._db.karma.get(user_id)

    async def apply_delta(
        self,
        user_id: UserId,
        category: KarmaCategory,
        delta: int,
        floor: int,
        event_id: Optional[KarmaEventId] = None,
    ) -> tuple[KarmaSnapshot, Optional[int]]:
        """Atomically add a delta to one category, clamping the total at floor."""
        async with self._db.transaction():
            current = self._db.karma.get(user_id) or KarmaSnapshot.empty(user_id)
            if event_id is not None and event_id in self._db.karma_events:
                return current, None

            updated = current.with_delta(category, delta, floor)
            applied = updated.total_karma - current.total_karma
            self._db.karma[user_id] = updated
            if event_id is not None:
                self._db.karma_events[event_id] = KarmaEvent(
                    id=event_id,
                    user_id=user_id,
                    category=category,
                    delta=delta,
                    applied_delta=applied,
                )
            return updated, applied

    async def lock(self, user_id: UserId) -> KarmaSnapshot:
        """Create the entry if needed.

        Inside an atomic block the writer lock is already held for the
        whole unit of work.
        """
        async with self._db.transaction():
            if user_id not in self._db.karma:
                self._db.karma[user_id] = KarmaSnapshot.empty(user_id).model_copy(
                    update={"updated_at": datetime.now(timezone.utc)}
                )
            return self._db.karma[user_id]

    async def overwrite(self, snapshot: KarmaSnapshot) -> KarmaSnapshot:
        """Replace post, comment and total karma, keeping stored award karma."""
        async with self._db.transaction():
            stored = self._db.karma.get(snapshot.user_id) or KarmaSnapshot.empty(
                snapshot.user_id
            )
            updated = stored.model_copy(
                update={
                    "post_karma": snapshot.post_karma,
                    "comment_karma": snapshot.comment_karma,
                    "total_karma": snapshot.post_karma
                    + snapshot.comment_karma
                    + stored.award_karma,
                    "updated_at": datetime.now(timezone.utc),
                }
            )
            self._db.karma[snapshot.user_id] = updated
            return updated

    async def find_top(self, limit: int) -> List[KarmaSnapshot]:
        """Find the entries with the highest total karma."""
        entries = sorted(
            self._db.karma.values(),
            key=lambda entry: (-entry.total_karma, str(entry.user_id)),
        )
        return entries[:limit]

    async def find_events(self, user_id: UserId, limit: int) -> List[KarmaEvent]:
        """Find the most recent karma events for a user."""
        events = [e for e in self._db.karma_events.values() if e.user_id == user_id]
        # dicts keep insertion order; newest last
        return list(reversed(events))[:limit]
