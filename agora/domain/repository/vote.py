"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Union

from agora.domain.model.vote import Vote, VoteTransition
from agora.domain.value import CommentId, PostId, UserId, VotableType, VoteType


class VoteRepository(ABC):
    """Repository for Vote entity.

    Owns the one-vote-per-slot rule. The database unique constraint on
    (user_id, votable_type, votable_id) is the arbiter for concurrent casts.
    """

    @abstractmethod
    async def cast(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
        vote_type: VoteType,
        author_id: UserId,
    ) -> VoteTransition:
        """Cast a vote and move the slot to its next state.

        Creates, flips or deletes the user's vote on the item according to
        the vote-slot state machine, as one atomic operation.

        Args:
            user_id: Voter
            votable_type: Type of item (post or comment)
            votable_id: ID of the item
            vote_type: Requested vote
            author_id: Author of the item, stored on new votes

        Returns:
            The transition that was applied

        Raises:
            ConflictError: If the slot changed underneath the operation
        """
        pass

    @abstractmethod
    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item.

        Args:
            user_id: The user's ID
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def tally_for_author(self, author_id: UserId) -> dict[VotableType, int]:
        """Sum +1/-1 over every vote on content written by a user.

        Args:
            author_id: Author whose content is tallied

        Returns:
            Net score per votable type (missing types count as 0)
        """
        pass
