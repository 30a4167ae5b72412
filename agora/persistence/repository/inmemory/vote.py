"""In-memory vote repository for testing."""

from typing import Optional, Union
from uuid import UUID, uuid4

from agora.domain.model.vote import Vote, VoteTransition, resolve_transition
from agora.domain.repository.vote import VoteRepository
from agora.domain.value import (
    CommentId,
    KarmaEventId,
    PostId,
    UserId,
    VotableType,
    VoteId,
    VoteType,
)

from .database import InMemoryDatabase


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing.

    ``cast`` runs inside ``InMemoryDatabase.transaction()``, so the read and
    write of a slot cannot interleave with another unit of work.
    """

    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    async def cast(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
        vote_type: VoteType,
        author_id: UserId,
    ) -> VoteTransition:
        """Cast a vote and move the slot to its next state."""
        async with self._db.transaction():
            key = (user_id, votable_type, UUID(str(votable_id)))
            existing = self._db.votes.get(key)
            previous = existing.vote_type if existing else None
            current, delta = resolve_transition(previous, vote_type)

            if existing is None:
                vote = Vote(
                    id=VoteId(uuid4()),
                    user_id=user_id,
                    votable_type=votable_type,
                    votable_id=key[2],
                    author_id=author_id,
                    vote_type=vote_type,
                )
                self._db.votes[key] = vote
            elif current is None:
                vote = self._db.votes.pop(key)
            else:
                vote = existing.model_copy(update={"vote_type": current})
                self._db.votes[key] = vote

            return VoteTransition(
                event_id=KarmaEventId(uuid4()),
                vote_id=vote.id,
                voter_id=user_id,
                author_id=vote.author_id,
                votable_type=votable_type,
                votable_id=key[2],
                previous=previous,
                current=current,
                delta=delta,
            )

    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: PostId | CommentId,
    ) -> Optional[Vote]:
        """Find a vote by user and votable item."""
        return self._db.votes.get((user_id, votable_type, UUID(str(votable_id))))

    async def tally_for_author(self, author_id: UserId) -> dict[VotableType, int]:
        """Sum +1/-1 over every vote on content written by a user."""
        tally = {votable_type: 0 for votable_type in VotableType}
        for vote in self._db.votes.values():
            if vote.author_id == author_id:
                tally[vote.votable_type] += vote.vote_type.weight
        return tally
