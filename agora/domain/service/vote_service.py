"""Vote domain service."""

from uuid import UUID, uuid4

import logfire

from agora.config import KarmaSettings
from agora.domain.error import (
    NotFoundError,
    SelfVoteForbiddenError,
    StorageUnavailableError,
)
from agora.domain.model import AuditEntry, VoteResult, VoteTransition
from agora.domain.repository import (
    AuditLogRepository,
    ContentRepository,
    TransactionManager,
    VoteRepository,
)
from agora.domain.value import AuditEntryId, UserId, VotableType, VoteType
from agora.util.error import RetryExhaustedError
from agora.util.retry import retry_async

from .base import Service, retry_config_for, run_in_transaction
from .karma_service import KarmaService


class VoteService(Service):
    """Domain service for casting votes.

    A vote is one unit of work: the vote record transition and the karma
    delta for the target's author commit together or not at all.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        content_repository: ContentRepository,
        audit_log_repository: AuditLogRepository,
        transaction_manager: TransactionManager,
        karma_service: KarmaService,
        karma_settings: KarmaSettings,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            content_repository: Read-only post/comment lookup
            audit_log_repository: Audit sink
            transaction_manager: Transaction boundary
            karma_service: Karma ledger domain service
            karma_settings: Self-vote and retry settings
        """
        self.vote_repository = vote_repository
        self.content_repository = content_repository
        self.audit_log_repository = audit_log_repository
        self.transaction_manager = transaction_manager
        self.karma_service = karma_service
        self.karma_settings = karma_settings

    async def vote(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        voter_id: UserId,
        vote_type: VoteType,
    ) -> VoteResult:
        """Cast a vote on a post or comment.

        Repeating the standing vote removes it, the opposite vote flips it.
        The author's karma moves by the transition's delta.

        Args:
            votable_type: Post or comment
            votable_id: ID of the item
            voter_id: User casting the vote
            vote_type: Up or down

        Returns:
            Resulting vote state, the author whose karma changed and the
            karma actually applied after floor clamping

        Raises:
            NotFoundError: If the item does not exist
            SelfVoteForbiddenError: If self-voting is disabled and the voter
                wrote the item
            StorageUnavailableError: If storage kept failing
        """
        with logfire.span(
            "vote_service.vote",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            voter_id=str(voter_id),
            vote_type=vote_type.value,
        ):

            async def work() -> tuple[VoteTransition, int]:
                author_id = await self.content_repository.find_author(
                    votable_type, votable_id
                )
                if author_id is None:
                    logfire.warn(
                        "Vote on non-existent item",
                        votable_type=votable_type.value,
                        votable_id=str(votable_id),
                    )
                    raise NotFoundError(
                        votable_type.value.capitalize(), str(votable_id)
                    )

                if author_id == voter_id and not self.karma_settings.allow_self_vote:
                    logfire.warn(
                        "Self vote rejected",
                        voter_id=str(voter_id),
                        votable_id=str(votable_id),
                    )
                    raise SelfVoteForbiddenError(str(voter_id), str(votable_id))

                transition = await self.vote_repository.cast(
                    user_id=voter_id,
                    votable_type=votable_type,
                    votable_id=votable_id,
                    vote_type=vote_type,
                    author_id=author_id,
                )
                applied = 0
                if transition.delta:
                    applied = await self._apply_karma(transition)
                return transition, applied

            transition, applied = await run_in_transaction(
                self.transaction_manager,
                work,
                retry_config_for(self.karma_settings),
                "vote",
            )

            logfire.info(
                "Vote applied",
                voter_id=str(voter_id),
                author_id=str(transition.author_id),
                previous=transition.previous.value if transition.previous else None,
                current=transition.current.value if transition.current else None,
                karma_change=applied,
            )

            await self._audit(transition, vote_type, applied)

            return VoteResult(
                state=transition.current,
                author_id=transition.author_id,
                karma_change=applied,
            )

    async def _apply_karma(self, transition: VoteTransition) -> int:
        """Deliver the transition's karma delta to the author.

        Runs in a nested atomic block so a transient failure can be retried
        without undoing the vote record change. The transition's event id
        makes redelivery a no-op.

        Returns:
            Karma actually added to the author's total
        """

        async def attempt() -> int:
            async with self.transaction_manager.atomic():
                return await self.karma_service.apply_transition(transition)

        try:
            return await retry_async(
                attempt,
                retry_config_for(self.karma_settings, retry_conflicts=False),
                "apply_karma_delta",
            )
        except RetryExhaustedError as e:
            raise StorageUnavailableError("apply_karma_delta", e.attempts) from e

    async def _audit(
        self, transition: VoteTransition, requested: VoteType, applied: int
    ) -> None:
        await self.audit_log_repository.record(
            AuditEntry(
                id=AuditEntryId(uuid4()),
                actor_id=transition.voter_id,
                action=transition.audit_action,
                resource=f"{transition.votable_type.value}_vote",
                resource_id=str(transition.vote_id),
                details={
                    "votable_type": transition.votable_type.value,
                    "votable_id": str(transition.votable_id),
                    "author_id": str(transition.author_id),
                    "vote_type": requested.value,
                    "karma_change": applied,
                },
            )
        )
