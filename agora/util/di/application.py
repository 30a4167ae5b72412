"""Application layer DI providers."""

from dishka import Scope, provide

from agora.application.usecase.karma import (
    GetKarmaHistoryUseCase,
    GetKarmaUseCase,
    GetLeaderboardUseCase,
    RecalculateKarmaUseCase,
)
from agora.application.usecase.vote import CastVoteUseCase
from agora.domain.repository import AuditLogRepository, UserRepository
from agora.domain.service import KarmaReconciler, KarmaService, VoteService
from agora.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(self, vote_service: VoteService) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service)

    # Karma use cases
    @provide(scope=Scope.REQUEST)
    def get_get_karma_use_case(self, karma_service: KarmaService) -> GetKarmaUseCase:
        """Provide get karma use case."""
        return GetKarmaUseCase(karma_service=karma_service)

    @provide(scope=Scope.REQUEST)
    def get_get_karma_history_use_case(
        self, karma_service: KarmaService
    ) -> GetKarmaHistoryUseCase:
        """Provide get karma history use case."""
        return GetKarmaHistoryUseCase(karma_service=karma_service)

    @provide(scope=Scope.REQUEST)
    def get_get_leaderboard_use_case(
        self, karma_service: KarmaService, user_repository: UserRepository
    ) -> GetLeaderboardUseCase:
        """Provide get leaderboard use case."""
        return GetLeaderboardUseCase(
            karma_service=karma_service, user_repository=user_repository
        )

    @provide(scope=Scope.REQUEST)
    def get_recalculate_karma_use_case(
        self,
        karma_reconciler: KarmaReconciler,
        audit_log_repository: AuditLogRepository,
    ) -> RecalculateKarmaUseCase:
        """Provide recalculate karma use case."""
        return RecalculateKarmaUseCase(
            karma_reconciler=karma_reconciler,
            audit_log_repository=audit_log_repository,
        )
