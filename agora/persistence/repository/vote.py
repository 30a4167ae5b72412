"""PostgreSQL implementation of Vote repository."""

from typing import Optional, Union
from uuid import uuid4

from sqlalchemy import and_, case, delete, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.error import ConflictError
from agora.domain.model import Vote, VoteTransition, resolve_transition
from agora.domain.repository import VoteRepository
from agora.domain.value import (
    CommentId,
    KarmaEventId,
    PostId,
    UserId,
    VotableType,
    VoteId,
    VoteType,
)
from agora.persistence.mappers import row_to_vote
from agora.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def cast(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
        vote_type: VoteType,
        author_id: UserId,
    ) -> VoteTransition:
        """Cast a vote and move the slot to its next state.

        The insert races on the unique_vote constraint. The loser of the race
        falls through to the row lock and sees the winner's vote.
        """
        new_id = VoteId(uuid4())
        insert_stmt = (
            pg_insert(votes_table)
            .values(
                id=new_id,
                user_id=user_id,
                votable_type=votable_type.value,
                votable_id=votable_id,
                author_id=author_id,
                vote_type=vote_type.value,
            )
            .on_conflict_do_nothing(constraint="unique_vote")
            .returning(votes_table.c.id)
        )
        result = await self.session.execute(insert_stmt)
        if result.scalar_one_or_none() is not None:
            current, delta = resolve_transition(None, vote_type)
            return VoteTransition(
                event_id=KarmaEventId(uuid4()),
                vote_id=new_id,
                voter_id=user_id,
                author_id=author_id,
                votable_type=votable_type,
                votable_id=votable_id,
                previous=None,
                current=current,
                delta=delta,
            )

        # Slot is taken: lock it until the transaction ends
        lock_stmt = (
            select(votes_table)
            .where(
                and_(
                    votes_table.c.user_id == user_id,
                    votes_table.c.votable_type == votable_type.value,
                    votes_table.c.votable_id == votable_id,
                )
            )
            .with_for_update()
        )
        row = (await self.session.execute(lock_stmt)).mappings().first()
        if row is None:
            # Deleted between the insert and the lock
            raise ConflictError(
                f"Vote slot changed during cast: {user_id} on {votable_id}"
            )

        existing = row_to_vote(dict(row))
        current, delta = resolve_transition(existing.vote_type, vote_type)
        if current is None:
            await self.session.execute(
                delete(votes_table).where(votes_table.c.id == existing.id)
            )
        else:
            await self.session.execute(
                update(votes_table)
                .where(votes_table.c.id == existing.id)
                .values(vote_type=current.value)
            )
        await self.session.flush()

        return VoteTransition(
            event_id=KarmaEventId(uuid4()),
            vote_id=existing.id,
            voter_id=user_id,
            author_id=existing.author_id,
            votable_type=votable_type,
            votable_id=votable_id,
            previous=existing.vote_type,
            current=current,
            delta=delta,
        )

    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id == votable_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_vote(dict(row)) if row else None

    async def tally_for_author(self, author_id: UserId) -> dict[VotableType, int]:
        """Sum +1/-1 over every vote on content written by a user."""
        weight = case((votes_table.c.vote_type == VoteType.UP.value, 1), else_=-1)
        stmt = (
            select(votes_table.c.votable_type, func.sum(weight).label("score"))
            .where(votes_table.c.author_id == author_id)
            .group_by(votes_table.c.votable_type)
        )
        result = await self.session.execute(stmt)
        tally = {votable_type: 0 for votable_type in VotableType}
        for row in result.mappings().all():
            tally[VotableType(row["votable_type"])] = int(row["score"])
        return tally
