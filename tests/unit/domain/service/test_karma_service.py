"""Unit tests for KarmaService."""

import asyncio
from uuid import uuid4

import pytest

from agora.domain.error import NotFoundError
from agora.domain.model import KARMA_FLOOR, VoteTransition
from agora.domain.service import KarmaService
from agora.domain.value import (
    KarmaCategory,
    KarmaEventId,
    UserId,
    VotableType,
    VoteId,
    VoteType,
)
from agora.persistence.repository.inmemory import InMemoryDatabase
from tests.factories import make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class TestApplyDelta:
    """Tests for apply_delta."""

    @pytest.mark.asyncio
    async def test_first_delta_creates_entry(self, unit_env):
        """The ledger entry is created on first touch."""
        # Arrange
        karma_service = await unit_env.get(KarmaService)
        db = await unit_env.get(InMemoryDatabase)
        user_id = make_user(db)

        # Act
        snapshot = await karma_service.apply_delta(user_id, KarmaCategory.POST, 1)

        # Assert
        assert snapshot.post_karma == 1
        assert snapshot.total_karma == 1
        assert db.karma[user_id] == snapshot

    @pytest.mark.asyncio
    async def test_negative_deltas_stop_at_floor(self, unit_env):
        """Total karma never drops below the floor."""
        karma_service = await unit_env.get(KarmaService)
        user_id = UserId(uuid4())

        for _ in range(150):
            snapshot = await karma_service.apply_delta(
                user_id, KarmaCategory.COMMENT, -1
            )

        assert snapshot.total_karma == KARMA_FLOOR
        assert snapshot.comment_karma == KARMA_FLOOR

    @pytest.mark.asyncio
    async def test_concurrent_deltas_are_all_applied(self, unit_env):
        """No delta is lost when many are applied at once."""
        karma_service = await unit_env.get(KarmaService)
        user_id = UserId(uuid4())

        await asyncio.gather(
            *[
                karma_service.apply_delta(user_id, KarmaCategory.POST, 1)
                for _ in range(50)
            ],
            *[
                karma_service.apply_delta(user_id, KarmaCategory.COMMENT, -1)
                for _ in range(20)
            ],
        )

        snapshot = await karma_service.karma_repository.find_by_user(user_id)
        assert snapshot.post_karma == 50
        assert snapshot.comment_karma == -20
        assert snapshot.total_karma == 30

    @pytest.mark.asyncio
    async def test_duplicate_event_is_not_reapplied(self, unit_env):
        """Redelivering the same event id leaves karma unchanged."""
        karma_service = await unit_env.get(KarmaService)
        db = await unit_env.get(InMemoryDatabase)
        user_id = UserId(uuid4())
        event_id = KarmaEventId(uuid4())

        first = await karma_service.apply_delta(
            user_id, KarmaCategory.POST, 2, event_id=event_id
        )
        second = await karma_service.apply_delta(
            user_id, KarmaCategory.POST, 2, event_id=event_id
        )

        assert first.total_karma == 2
        assert second.total_karma == 2
        assert len(db.karma_events) == 1

    @pytest.mark.asyncio
    async def test_event_records_clamped_amount(self, unit_env):
        karma_service = await unit_env.get(KarmaService)
        db = await unit_env.get(InMemoryDatabase)
        user_id = UserId(uuid4())
        event_id = KarmaEventId(uuid4())

        await karma_service.apply_delta(user_id, KarmaCategory.POST, -98)
        await karma_service.apply_delta(
            user_id, KarmaCategory.POST, -2, event_id=event_id
        )

        event = db.karma_events[event_id]
        assert event.delta == -2
        assert event.applied_delta == -1


class TestGetKarma:
    """Tests for get_karma."""

    @pytest.mark.asyncio
    async def test_user_without_votes_has_zero_karma(self, unit_env):
        karma_service = await unit_env.get(KarmaService)
        db = await unit_env.get(InMemoryDatabase)
        user_id = make_user(db)

        snapshot = await karma_service.get_karma(user_id)

        assert snapshot.total_karma == 0
        # Reading does not create the entry
        assert user_id not in db.karma

    @pytest.mark.asyncio
    async def test_unknown_user_raises_not_found(self, unit_env):
        karma_service = await unit_env.get(KarmaService)

        with pytest.raises(NotFoundError, match="User not found"):
            await karma_service.get_karma(UserId(uuid4()))


class TestLeaderboardAndHistory:
    """Tests for get_leaderboard and get_history."""

    @pytest.mark.asyncio
    async def test_leaderboard_orders_by_total_karma(self, unit_env):
        karma_service = await unit_env.get(KarmaService)
        low, high, mid = UserId(uuid4()), UserId(uuid4()), UserId(uuid4())
        await karma_service.apply_delta(low, KarmaCategory.POST, -3)
        await karma_service.apply_delta(high, KarmaCategory.COMMENT, 9)
        await karma_service.apply_delta(mid, KarmaCategory.POST, 4)

        leaderboard = await karma_service.get_leaderboard(limit=2)

        assert [entry.user_id for entry in leaderboard] == [high, mid]

    @pytest.mark.asyncio
    async def test_history_is_newest_first(self, unit_env):
        karma_service = await unit_env.get(KarmaService)
        db = await unit_env.get(InMemoryDatabase)
        user_id = make_user(db)
        first, second = KarmaEventId(uuid4()), KarmaEventId(uuid4())
        await karma_service.apply_delta(
            user_id, KarmaCategory.POST, 1, event_id=first
        )
        await karma_service.apply_delta(
            user_id, KarmaCategory.COMMENT, -1, event_id=second
        )

        history = await karma_service.get_history(user_id)

        assert [event.id for event in history] == [second, first]

    @pytest.mark.asyncio
    async def test_history_for_unknown_user_raises_not_found(self, unit_env):
        karma_service = await unit_env.get(KarmaService)

        with pytest.raises(NotFoundError):
            await karma_service.get_history(UserId(uuid4()))


class TestApplyTransition:
    """Tests for apply_transition."""

    @staticmethod
    def _downvote(author_id: UserId) -> VoteTransition:
        return VoteTransition(
            event_id=KarmaEventId(uuid4()),
            vote_id=VoteId(uuid4()),
            voter_id=UserId(uuid4()),
            author_id=author_id,
            votable_type=VotableType.COMMENT,
            votable_id=uuid4(),
            previous=None,
            current=VoteType.DOWN,
            delta=-1,
        )

    @pytest.mark.asyncio
    async def test_returns_amount_applied_after_clamping(self, unit_env):
        karma_service = await unit_env.get(KarmaService)
        db = await unit_env.get(InMemoryDatabase)
        author_id = make_user(db)
        await karma_service.apply_delta(author_id, KarmaCategory.POST, KARMA_FLOOR)

        applied = await karma_service.apply_transition(self._downvote(author_id))

        assert applied == 0
        assert db.karma[author_id].total_karma == KARMA_FLOOR

    @pytest.mark.asyncio
    async def test_redelivered_transition_applies_nothing(self, unit_env):
        karma_service = await unit_env.get(KarmaService)
        db = await unit_env.get(InMemoryDatabase)
        author_id = make_user(db)
        transition = self._downvote(author_id)

        first = await karma_service.apply_transition(transition)
        second = await karma_service.apply_transition(transition)

        assert (first, second) == (-1, 0)
        assert db.karma[author_id].comment_karma == -1
