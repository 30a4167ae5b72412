"""Karma routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Query, status

from agora.application.usecase.karma import (
    GetKarmaHistoryRequest,
    GetKarmaHistoryResponse,
    GetKarmaHistoryUseCase,
    GetKarmaRequest,
    GetKarmaResponse,
    GetKarmaUseCase,
    GetLeaderboardRequest,
    GetLeaderboardResponse,
    GetLeaderboardUseCase,
    RecalculateKarmaRequest,
    RecalculateKarmaResponse,
    RecalculateKarmaUseCase,
)
from agora.domain.error import DomainError
from agora.domain.service import JWTService
from agora.interface.error import to_http_exception

router = APIRouter(prefix="/karma", tags=["karma"], route_class=DishkaRoute)


@router.get("/user/{user_id}", response_model=GetKarmaResponse)
async def get_user_karma(
    user_id: UUID,
    get_karma_use_case: FromDishka[GetKarmaUseCase],
) -> GetKarmaResponse:
    """Get a user's karma split by category.

    Raises:
        HTTPException: 404 if the user does not exist
    """
    try:
        return await get_karma_use_case.execute(GetKarmaRequest(user_id=str(user_id)))
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/user/{user_id}/history", response_model=GetKarmaHistoryResponse)
async def get_user_karma_history(
    user_id: UUID,
    get_karma_history_use_case: FromDishka[GetKarmaHistoryUseCase],
    limit: int | None = Query(default=None, ge=1, le=100),
) -> GetKarmaHistoryResponse:
    """Get a user's most recent karma changes, newest first.

    Raises:
        HTTPException: 404 if the user does not exist
    """
    try:
        return await get_karma_history_use_case.execute(
            GetKarmaHistoryRequest(user_id=str(user_id), limit=limit)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/leaderboard", response_model=GetLeaderboardResponse)
async def get_leaderboard(
    get_leaderboard_use_case: FromDishka[GetLeaderboardUseCase],
    limit: int | None = Query(default=None, ge=1, le=100),
) -> GetLeaderboardResponse:
    """Get the users with the highest total karma."""
    return await get_leaderboard_use_case.execute(GetLeaderboardRequest(limit=limit))


@router.post("/recalculate/{user_id}", response_model=RecalculateKarmaResponse)
async def recalculate_karma(
    user_id: UUID,
    recalculate_karma_use_case: FromDishka[RecalculateKarmaUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RecalculateKarmaResponse:
    """Rebuild a user's karma from the votes on their content.

    Requires authentication.

    Args:
        user_id: User whose karma is rebuilt
        recalculate_karma_use_case: Recalculate karma use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Reconciled karma

    Raises:
        HTTPException: 401 if not authenticated, 404 if the user does not
            exist, 503 if storage is unavailable
    """
    actor_id = jwt_service.get_user_id_from_token(auth_token)
    if not actor_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to recalculate karma",
        )

    try:
        return await recalculate_karma_use_case.execute(
            RecalculateKarmaRequest(user_id=str(user_id), actor_id=str(actor_id))
        )
    except DomainError as e:
        raise to_http_exception(e) from e
