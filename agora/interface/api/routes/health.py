"""Health check route."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from agora.config import KarmaSettings, Settings

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Liveness report with the deployed build and karma rules."""

    status: str
    timestamp: datetime
    git_sha: str
    environment: str
    karma_floor: int
    allow_self_vote: bool


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: FromDishka[Settings], karma_settings: FromDishka[KarmaSettings]
) -> HealthResponse:
    """Report that the process is up. Does not touch the database."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        git_sha=settings.git_sha,
        environment=settings.environment,
        karma_floor=karma_settings.floor,
        allow_self_vote=karma_settings.allow_self_vote,
    )
