"""Get karma leaderboard use case."""

from pydantic import BaseModel, Field

from agora.domain.repository import UserRepository
from agora.domain.service import KarmaService

from .common import KarmaStats


class GetLeaderboardRequest(BaseModel):
    """Get leaderboard request."""

    limit: int | None = Field(default=None, ge=1, le=100)


class LeaderboardEntry(BaseModel):
    """One ranked user."""

    rank: int
    user_id: str
    handle: str | None  # None if the account vanished after scoring
    karma: KarmaStats


class GetLeaderboardResponse(BaseModel):
    """Get leaderboard response."""

    entries: list[LeaderboardEntry]


class GetLeaderboardUseCase:
    """Use case for listing the users with the most karma."""

    def __init__(
        self, karma_service: KarmaService, user_repository: UserRepository
    ) -> None:
        """Initialize get leaderboard use case.

        Args:
            karma_service: Karma domain service
            user_repository: User repository for handles
        """
        self.karma_service = karma_service
        self.user_repository = user_repository

    async def execute(self, request: GetLeaderboardRequest) -> GetLeaderboardResponse:
        """Execute get leaderboard flow.

        Args:
            request: Request with optional page size

        Returns:
            Ranked entries, highest total karma first
        """
        snapshots = await self.karma_service.get_leaderboard(request.limit)

        entries = []
        for rank, snapshot in enumerate(snapshots, start=1):
            user = await self.user_repository.find_by_id(snapshot.user_id)
            entries.append(
                LeaderboardEntry(
                    rank=rank,
                    user_id=str(snapshot.user_id),
                    handle=user.handle.root if user else None,
                    karma=KarmaStats.from_snapshot(snapshot),
                )
            )
        return GetLeaderboardResponse(entries=entries)
