"""Recalculate karma use case."""

from uuid import UUID, uuid4

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.domain.model import AuditEntry
from agora.domain.repository import AuditLogRepository
from agora.domain.service import KarmaReconciler
from agora.domain.value import AuditAction, AuditEntryId, UserId

from .common import KarmaStats


class RecalculateKarmaRequest(BaseModel):
    """Recalculate karma request."""

    user_id: str  # User whose karma is rebuilt
    actor_id: str  # Authenticated user who asked for it


class RecalculateKarmaResponse(BaseModel):
    """Recalculate karma response."""

    user_id: str
    karma: KarmaStats


class RecalculateKarmaUseCase(BaseUseCase):
    """Use case for rebuilding a user's karma from the votes on their content."""

    def __init__(
        self,
        karma_reconciler: KarmaReconciler,
        audit_log_repository: AuditLogRepository,
    ) -> None:
        """Initialize recalculate karma use case.

        Args:
            karma_reconciler: Karma reconciliation domain service
            audit_log_repository: Audit sink
        """
        self.karma_reconciler = karma_reconciler
        self.audit_log_repository = audit_log_repository

    async def execute(
        self, request: RecalculateKarmaRequest
    ) -> RecalculateKarmaResponse:
        """Execute recalculate karma flow.

        Steps:
        1. Reconcile the user's ledger entry from the votes
        2. Record who triggered the recalculation

        Args:
            request: Request with target user and actor

        Returns:
            Reconciled karma

        Raises:
            NotFoundError: If the user does not exist
            StorageUnavailableError: If storage kept failing
        """
        snapshot = await self.karma_reconciler.recompute(
            UserId(UUID(request.user_id))
        )
        stats = KarmaStats.from_snapshot(snapshot)

        await self.audit_log_repository.record(
            AuditEntry(
                id=AuditEntryId(uuid4()),
                actor_id=UserId(UUID(request.actor_id)),
                action=AuditAction.RECALCULATE_KARMA,
                resource="user_karma",
                resource_id=request.user_id,
                details={
                    "target_user_id": request.user_id,
                    "karma": stats.model_dump(mode="json"),
                },
            )
        )

        return RecalculateKarmaResponse(user_id=request.user_id, karma=stats)
