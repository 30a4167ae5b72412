"""PostgreSQL implementation of Karma repository."""

from typing import List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import KarmaEvent, KarmaSnapshot
from agora.domain.repository import KarmaRepository
from agora.domain.value import KarmaCategory, KarmaEventId, UserId
from agora.persistence.mappers import row_to_karma, row_to_karma_event
from agora.persistence.tables import karma_events_table, user_karma_table


class PostgresKarmaRepository(KarmaRepository):
    """PostgreSQL implementation of KarmaRepository.

    Deltas are applied with a single UPDATE whose SET clause reads the
    current row, so concurrent deltas for one user serialize on the row
    lock Postgres takes for the update and none of them is lost.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user(self, user_id: UserId) -> Optional[KarmaSnapshot]:
        """Find a user's ledger entry."""
        stmt = select(user_karma_table).where(user_karma_table.c.user_id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_karma(dict(row)) if row else None

    async def apply_delta(
        self,
        user_id: UserId,
        category: KarmaCategory,
        delta: int,
        floor: int,
        event_id: Optional[KarmaEventId] = None,
    ) -> tuple[KarmaSnapshot, Optional[int]]:
        """Atomically add a delta to one category, clamping the total at floor."""
        await self._ensure_entry(user_id)

        if event_id is not None:
            # The event row is the idempotency gate: a redelivered event
            # conflicts on the primary key and applies nothing.
            event_stmt = (
                pg_insert(karma_events_table)
                .values(
                    id=event_id,
                    user_id=user_id,
                    category=category.value,
                    delta=delta,
                    applied_delta=0,
                )
                .on_conflict_do_nothing(index_elements=[karma_events_table.c.id])
                .returning(karma_events_table.c.id)
            )
            inserted = await self.session.execute(event_stmt)
            if inserted.scalar_one_or_none() is None:
                snapshot = await self.find_by_user(user_id)
                return snapshot or KarmaSnapshot.empty(user_id), None

        column = user_karma_table.c[f"{category.value}_karma"]
        total = user_karma_table.c.total_karma
        previous = (
            select(user_karma_table.c.user_id, total.label("previous_total"))
            .where(user_karma_table.c.user_id == user_id)
            .with_for_update()
            .cte("previous")
        )
        new_total = func.greatest(total + delta, floor)
        stmt = (
            update(user_karma_table)
            .where(user_karma_table.c.user_id == previous.c.user_id)
            .values(
                {
                    column: column + (new_total - total),
                    total: new_total,
                    user_karma_table.c.updated_at: func.now(),
                }
            )
            .returning(
                *user_karma_table.c,
                (total - previous.c.previous_total).label("applied_delta"),
            )
        )
        row = dict((await self.session.execute(stmt)).mappings().one())

        if event_id is not None:
            await self.session.execute(
                update(karma_events_table)
                .where(karma_events_table.c.id == event_id)
                .values(applied_delta=row["applied_delta"])
            )

        await self.session.flush()
        return row_to_karma(row), row["applied_delta"]

    async def lock(self, user_id: UserId) -> KarmaSnapshot:
        """Create the entry if needed and lock it until the transaction ends."""
        await self._ensure_entry(user_id)
        stmt = (
            select(user_karma_table)
            .where(user_karma_table.c.user_id == user_id)
            .with_for_update()
        )
        row = (await self.session.execute(stmt)).mappings().one()
        return row_to_karma(dict(row))

    async def overwrite(self, snapshot: KarmaSnapshot) -> KarmaSnapshot:
        """Replace post, comment and total karma in one statement."""
        stmt = (
            update(user_karma_table)
            .where(user_karma_table.c.user_id == snapshot.user_id)
            .values(
                post_karma=snapshot.post_karma,
                comment_karma=snapshot.comment_karma,
                total_karma=snapshot.post_karma
                + snapshot.comment_karma
                + user_karma_table.c.award_karma,
                updated_at=func.now(),
            )
            .returning(*user_karma_table.c)
        )
        row = (await self.session.execute(stmt)).mappings().one()
        await self.session.flush()
        return row_to_karma(dict(row))

    async def find_top(self, limit: int) -> List[KarmaSnapshot]:
        """Find the entries with the highest total karma."""
        stmt = (
            select(user_karma_table)
            .order_by(
                user_karma_table.c.total_karma.desc(), user_karma_table.c.user_id
            )
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_karma(dict(row)) for row in result.mappings().all()]

    async def find_events(self, user_id: UserId, limit: int) -> List[KarmaEvent]:
        """Find the most recent karma events for a user."""
        stmt = (
            select(karma_events_table)
            .where(karma_events_table.c.user_id == user_id)
            .order_by(karma_events_table.c.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_karma_event(dict(row)) for row in result.mappings().all()]

    async def _ensure_entry(self, user_id: UserId) -> None:
        """Create the ledger entry with zero counters on first touch."""
        stmt = (
            pg_insert(user_karma_table)
            .values(user_id=user_id)
            .on_conflict_do_nothing(index_elements=[user_karma_table.c.user_id])
        )
        await self.session.execute(stmt)
