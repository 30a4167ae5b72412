"""Karma reconciliation domain service.

The ledger is maintained incrementally from vote deltas. Anything that
bypasses that path (a manual database edit, a bug, a half-applied
migration) makes the ledger drift from the votes. Reconciliation rebuilds
post and comment karma from the votes themselves and overwrites the entry.
"""

import logfire

from agora.config import KarmaSettings
from agora.domain.error import NotFoundError
from agora.domain.model import KarmaSnapshot
from agora.domain.repository import (
    KarmaRepository,
    TransactionManager,
    UserRepository,
    VoteRepository,
)
from agora.domain.value import UserId, VotableType

from .base import Service, retry_config_for, run_in_transaction


class KarmaReconciler(Service):
    """Recomputes karma ledger entries from the authoritative vote set."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        karma_repository: KarmaRepository,
        user_repository: UserRepository,
        transaction_manager: TransactionManager,
        karma_settings: KarmaSettings,
    ) -> None:
        """Initialize karma reconciler.

        Args:
            vote_repository: Vote repository
            karma_repository: Karma ledger repository
            user_repository: User repository
            transaction_manager: Transaction boundary
            karma_settings: Floor and retry settings
        """
        self.vote_repository = vote_repository
        self.karma_repository = karma_repository
        self.user_repository = user_repository
        self.transaction_manager = transaction_manager
        self.karma_settings = karma_settings

    async def recompute(self, user_id: UserId) -> KarmaSnapshot:
        """Rebuild a user's karma from the votes on their content.

        Runs under the ledger entry's lock, so a concurrent vote either
        lands before the tally (and is counted) or after the overwrite
        (and is applied on top). Award karma is preserved.

        Args:
            user_id: User to reconcile

        Returns:
            Reconciled ledger entry

        Raises:
            NotFoundError: If the user does not exist
            StorageUnavailableError: If storage kept failing
        """
        with logfire.span("karma_reconciler.recompute", user_id=str(user_id)):

            async def work() -> tuple[KarmaSnapshot, KarmaSnapshot]:
                if not await self.user_repository.exists(user_id):
                    logfire.warn(
                        "Recompute for non-existent user", user_id=str(user_id)
                    )
                    raise NotFoundError("User", str(user_id))

                current = await self.karma_repository.lock(user_id)
                tally = await self.vote_repository.tally_for_author(user_id)
                fresh = KarmaSnapshot.reconciled(
                    user_id=user_id,
                    post_karma=tally.get(VotableType.POST, 0),
                    comment_karma=tally.get(VotableType.COMMENT, 0),
                    award_karma=current.award_karma,
                    floor=self.karma_settings.floor,
                )
                return current, await self.karma_repository.overwrite(fresh)

            before, after = await run_in_transaction(
                self.transaction_manager,
                work,
                retry_config_for(self.karma_settings),
                "recompute_karma",
            )

            if (before.post_karma, before.comment_karma) != (
                after.post_karma,
                after.comment_karma,
            ):
                logfire.warn(
                    "Karma drift repaired",
                    user_id=str(user_id),
                    post_karma_before=before.post_karma,
                    post_karma_after=after.post_karma,
                    comment_karma_before=before.comment_karma,
                    comment_karma_after=after.comment_karma,
                )
            else:
                logfire.info("Karma consistent", user_id=str(user_id))
            return after

    async def recompute_all(self) -> list[KarmaSnapshot]:
        """Reconcile every user.

        Returns:
            Reconciled entries, one per user
        """
        with logfire.span("karma_reconciler.recompute_all"):
            async with self.transaction_manager.atomic():
                user_ids = await self.user_repository.find_all_ids()
            results = [await self.recompute(user_id) for user_id in user_ids]
            logfire.info("Karma reconciled for all users", users=len(results))
            return results
