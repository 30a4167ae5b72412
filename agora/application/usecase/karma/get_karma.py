"""Get karma use case."""

from uuid import UUID

from pydantic import BaseModel

from agora.domain.service import KarmaService
from agora.domain.value import UserId

from .common import KarmaStats


class GetKarmaRequest(BaseModel):
    """Get karma request."""

    user_id: str


class GetKarmaResponse(BaseModel):
    """Get karma response."""

    user_id: str
    karma: KarmaStats


class GetKarmaUseCase:
    """Use case for reading a user's karma."""

    def __init__(self, karma_service: KarmaService) -> None:
        """Initialize get karma use case.

        Args:
            karma_service: Karma domain service
        """
        self.karma_service = karma_service

    async def execute(self, request: GetKarmaRequest) -> GetKarmaResponse:
        """Execute get karma flow.

        Args:
            request: Request with the user ID

        Returns:
            The user's karma, zeros if nobody voted on their content yet

        Raises:
            NotFoundError: If the user does not exist
        """
        snapshot = await self.karma_service.get_karma(UserId(UUID(request.user_id)))
        return GetKarmaResponse(
            user_id=request.user_id, karma=KarmaStats.from_snapshot(snapshot)
        )
