"""Vote routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, status
from pydantic import BaseModel

from agora.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from agora.domain.error import DomainError
from agora.domain.service import JWTService
from agora.domain.value import VotableType, VoteType
from agora.interface.error import to_http_exception

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class VoteBody(BaseModel):
    """Request body for casting a vote."""

    votable_type: VotableType
    votable_id: UUID
    vote_type: VoteType


@router.post("/vote", response_model=CastVoteResponse)
async def cast_vote(
    body: VoteBody,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Vote up or down on a post or comment.

    Casting the vote you already have removes it; casting the opposite
    vote switches it. Requires authentication.

    Args:
        body: Target and vote direction
        cast_vote_use_case: Cast vote use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Resulting vote state and the author's karma change

    Raises:
        HTTPException: 401 if not authenticated, 404 if the item does not
            exist, 403 on a forbidden self-vote, 503 if storage is unavailable
    """
    # Verify authentication and get user ID
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to vote",
        )

    try:
        request = CastVoteRequest(
            votable_type=body.votable_type,
            votable_id=str(body.votable_id),
            vote_type=body.vote_type,
            user_id=str(user_id),
        )
        return await cast_vote_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e) from e
