"""Domain layer DI providers."""

from dishka import Scope, provide

from agora.config import AuthSettings, KarmaSettings
from agora.domain.repository import (
    AuditLogRepository,
    ContentRepository,
    KarmaRepository,
    TransactionManager,
    UserRepository,
    VoteRepository,
)
from agora.domain.service import (
    JWTService,
    KarmaReconciler,
    KarmaService,
    VoteService,
)
from agora.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_karma_service(
        self,
        karma_repository: KarmaRepository,
        user_repository: UserRepository,
        karma_settings: KarmaSettings,
    ) -> KarmaService:
        """Provide karma ledger domain service."""
        return KarmaService(
            karma_repository=karma_repository,
            user_repository=user_repository,
            karma_settings=karma_settings,
        )

    @provide
    def get_karma_reconciler(
        self,
        vote_repository: VoteRepository,
        karma_repository: KarmaRepository,
        user_repository: UserRepository,
        transaction_manager: TransactionManager,
        karma_settings: KarmaSettings,
    ) -> KarmaReconciler:
        """Provide karma reconciliation domain service."""
        return KarmaReconciler(
            vote_repository=vote_repository,
            karma_repository=karma_repository,
            user_repository=user_repository,
            transaction_manager=transaction_manager,
            karma_settings=karma_settings,
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        content_repository: ContentRepository,
        audit_log_repository: AuditLogRepository,
        transaction_manager: TransactionManager,
        karma_service: KarmaService,
        karma_settings: KarmaSettings,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            content_repository=content_repository,
            audit_log_repository=audit_log_repository,
            transaction_manager=transaction_manager,
            karma_service=karma_service,
            karma_settings=karma_settings,
        )
