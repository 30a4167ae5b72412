"""Cast vote use case."""

from uuid import UUID

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.domain.service import VoteService
from agora.domain.value import UserId, VotableType, VoteType


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    vote_type: VoteType
    user_id: str  # User ID from authenticated user


class CastVoteResponse(BaseModel):
    """Cast vote response.

    ``user_vote`` is None when the request toggled an existing vote off.
    ``karma_change`` is what the author's total actually moved by, which
    can be less than the vote's weight when the author is at the floor.
    """

    votable_type: VotableType
    votable_id: str
    user_vote: VoteType | None
    author_id: str
    karma_change: int


class CastVoteUseCase(BaseUseCase):
    """Use case for voting up or down on a post or comment."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            Resulting vote state and the author's karma change

        Raises:
            NotFoundError: If the item does not exist
            SelfVoteForbiddenError: If self-voting is disabled
            StorageUnavailableError: If storage kept failing
        """
        result = await self.vote_service.vote(
            votable_type=request.votable_type,
            votable_id=UUID(request.votable_id),
            voter_id=UserId(UUID(request.user_id)),
            vote_type=request.vote_type,
        )

        return CastVoteResponse(
            votable_type=request.votable_type,
            votable_id=request.votable_id,
            user_vote=result.state,
            author_id=str(result.author_id),
            karma_change=result.karma_change,
        )
