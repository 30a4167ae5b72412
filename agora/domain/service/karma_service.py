"""Karma ledger domain service."""

from typing import Optional

import logfire

from agora.config import KarmaSettings
from agora.domain.error import NotFoundError
from agora.domain.model import KarmaEvent, KarmaSnapshot, VoteTransition
from agora.domain.repository import KarmaRepository, UserRepository
from agora.domain.value import KarmaCategory, KarmaEventId, UserId

from .base import Service


class KarmaService(Service):
    """Domain service for the karma ledger.

    All writes go through ``KarmaRepository.apply_delta``, which applies the
    delta as one atomic statement. Two concurrent deltas for the same user
    are both reflected in the final entry.
    """

    def __init__(
        self,
        karma_repository: KarmaRepository,
        user_repository: UserRepository,
        karma_settings: KarmaSettings,
    ) -> None:
        """Initialize karma service.

        Args:
            karma_repository: Karma ledger repository
            user_repository: User repository
            karma_settings: Floor and page size settings
        """
        self.karma_repository = karma_repository
        self.user_repository = user_repository
        self.karma_settings = karma_settings

    async def apply_delta(
        self,
        user_id: UserId,
        category: KarmaCategory,
        delta: int,
        event_id: Optional[KarmaEventId] = None,
    ) -> KarmaSnapshot:
        """Apply a signed delta to one category of a user's karma.

        The ledger entry is created on first touch. The total is clamped at
        the configured floor; the clamped amount comes out of the category
        being modified.

        Args:
            user_id: User whose karma changes
            category: Post, comment or award karma
            delta: Signed change
            event_id: Vote transition that produced the delta, if any

        Returns:
            Ledger entry after the delta
        """
        snapshot, _ = await self._apply(user_id, category, delta, event_id)
        return snapshot

    async def apply_transition(self, transition: VoteTransition) -> int:
        """Deliver a vote transition's delta to the author of the item.

        Args:
            transition: Vote slot transition with a non-zero delta

        Returns:
            Karma actually added to the author's total, which is smaller in
            magnitude than the transition's delta when the floor clamps it
            and 0 when the transition was already delivered
        """
        _, applied = await self._apply(
            transition.author_id,
            transition.category,
            transition.delta,
            transition.event_id,
        )
        return applied or 0

    async def _apply(
        self,
        user_id: UserId,
        category: KarmaCategory,
        delta: int,
        event_id: Optional[KarmaEventId],
    ) -> tuple[KarmaSnapshot, Optional[int]]:
        with logfire.span(
            "karma_service.apply_delta",
            user_id=str(user_id),
            category=category.value,
            delta=delta,
        ):
            snapshot, applied = await self.karma_repository.apply_delta(
                user_id=user_id,
                category=category,
                delta=delta,
                floor=self.karma_settings.floor,
                event_id=event_id,
            )
            if applied is None:
                logfire.info(
                    "Karma event already applied",
                    user_id=str(user_id),
                    event_id=str(event_id),
                )
            elif applied != delta:
                logfire.info(
                    "Karma clamped at floor",
                    user_id=str(user_id),
                    floor=self.karma_settings.floor,
                    requested=delta,
                    applied=applied,
                )
            return snapshot, applied

    async def get_karma(self, user_id: UserId) -> KarmaSnapshot:
        """Get a user's karma.

        Args:
            user_id: User ID

        Returns:
            Ledger entry, all zeros if the user never received a vote

        Raises:
            NotFoundError: If the user does not exist
        """
        with logfire.span("karma_service.get_karma", user_id=str(user_id)):
            await self._ensure_user(user_id)
            snapshot = await self.karma_repository.find_by_user(user_id)
            return snapshot or KarmaSnapshot.empty(user_id)

    async def get_leaderboard(self, limit: Optional[int] = None) -> list[KarmaSnapshot]:
        """Get the users with the highest total karma.

        Args:
            limit: Number of entries (defaults to the configured page size)

        Returns:
            Ledger entries, highest total first
        """
        limit = limit or self.karma_settings.leaderboard_default_limit
        with logfire.span("karma_service.get_leaderboard", limit=limit):
            return await self.karma_repository.find_top(limit)

    async def get_history(
        self, user_id: UserId, limit: Optional[int] = None
    ) -> list[KarmaEvent]:
        """Get the most recent karma events for a user.

        Args:
            user_id: User ID
            limit: Number of events (defaults to the configured page size)

        Returns:
            Karma events, newest first

        Raises:
            NotFoundError: If the user does not exist
        """
        limit = limit or self.karma_settings.history_default_limit
        with logfire.span("karma_service.get_history", user_id=str(user_id)):
            await self._ensure_user(user_id)
            return await self.karma_repository.find_events(user_id, limit)

    async def _ensure_user(self, user_id: UserId) -> None:
        if not await self.user_repository.exists(user_id):
            logfire.warn("User not found", user_id=str(user_id))
            raise NotFoundError("User", str(user_id))
