"""Get karma history use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from agora.domain.service import KarmaService
from agora.domain.value import KarmaCategory, UserId


class GetKarmaHistoryRequest(BaseModel):
    """Get karma history request."""

    user_id: str
    limit: int | None = Field(default=None, ge=1, le=100)


class KarmaHistoryItem(BaseModel):
    """A single karma change."""

    event_id: str
    category: KarmaCategory
    delta: int
    applied_delta: int
    created_at: datetime


class GetKarmaHistoryResponse(BaseModel):
    """Get karma history response."""

    user_id: str
    events: list[KarmaHistoryItem]


class GetKarmaHistoryUseCase:
    """Use case for listing recent karma changes of a user."""

    def __init__(self, karma_service: KarmaService) -> None:
        """Initialize get karma history use case.

        Args:
            karma_service: Karma domain service
        """
        self.karma_service = karma_service

    async def execute(
        self, request: GetKarmaHistoryRequest
    ) -> GetKarmaHistoryResponse:
        """Execute get karma history flow.

        Raises:
            NotFoundError: If the user does not exist
        """
        events = await self.karma_service.get_history(
            UserId(UUID(request.user_id)), request.limit
        )
        return GetKarmaHistoryResponse(
            user_id=request.user_id,
            events=[
                KarmaHistoryItem(
                    event_id=str(event.id),
                    category=event.category,
                    delta=event.delta,
                    applied_delta=event.applied_delta,
                    created_at=event.created_at,
                )
                for event in events
            ],
        )
