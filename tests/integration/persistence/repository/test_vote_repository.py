"""Integration tests for PostgresVoteRepository and PostgresKarmaRepository.

Run against a migrated database with ``pytest -m integration``.
"""

from uuid import UUID, uuid4

import pytest
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.repository import KarmaRepository, VoteRepository
from agora.domain.service import KarmaReconciler, VoteService
from agora.domain.value import KarmaCategory, KarmaEventId, UserId, VotableType, VoteType
from agora.persistence.tables import posts_table, users_table
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

# Integration test fixture - real persistence, assumes postgres running
integration_env = create_env_fixture(unmock={"persistence"})


async def seed_user(session: AsyncSession) -> UserId:
    user_id = UserId(uuid4())
    await session.execute(
        insert(users_table).values(id=user_id, handle=f"user-{str(user_id)[:8]}")
    )
    return user_id


async def seed_post(session: AsyncSession, author_id: UserId) -> UUID:
    post_id = uuid4()
    await session.execute(insert(posts_table).values(id=post_id, author_id=author_id))
    return post_id


class TestVoteRepositoryIntegration:
    """Vote slot transitions against PostgreSQL."""

    @pytest.mark.asyncio
    async def test_cast_walks_the_state_machine(self, integration_env):
        # Arrange
        session = await integration_env.get(AsyncSession)
        vote_repo = await integration_env.get(VoteRepository)
        author_id = await seed_user(session)
        voter_id = await seed_user(session)
        post_id = await seed_post(session, author_id)

        async def cast(vote_type: VoteType):
            return await vote_repo.cast(
                voter_id, VotableType.POST, post_id, vote_type, author_id
            )

        # Act / Assert
        created = await cast(VoteType.UP)
        assert (created.previous, created.current, created.delta) == (
            None,
            VoteType.UP,
            1,
        )

        switched = await cast(VoteType.DOWN)
        assert (switched.previous, switched.current, switched.delta) == (
            VoteType.UP,
            VoteType.DOWN,
            -2,
        )
        assert switched.vote_id == created.vote_id

        removed = await cast(VoteType.DOWN)
        assert (removed.previous, removed.current, removed.delta) == (
            VoteType.DOWN,
            None,
            1,
        )
        assert (
            await vote_repo.find_by_user_and_votable(
                voter_id, VotableType.POST, post_id
            )
            is None
        )

    @pytest.mark.asyncio
    async def test_tally_for_author(self, integration_env):
        session = await integration_env.get(AsyncSession)
        vote_repo = await integration_env.get(VoteRepository)
        author_id = await seed_user(session)
        post_id = await seed_post(session, author_id)

        for vote_type in (VoteType.UP, VoteType.UP, VoteType.DOWN):
            voter_id = await seed_user(session)
            await vote_repo.cast(
                voter_id, VotableType.POST, post_id, vote_type, author_id
            )

        tally = await vote_repo.tally_for_author(author_id)

        assert tally == {VotableType.POST: 1, VotableType.COMMENT: 0}


class TestKarmaRepositoryIntegration:
    """Atomic karma updates against PostgreSQL."""

    @pytest.mark.asyncio
    async def test_apply_delta_creates_entry_and_clamps_at_floor(
        self, integration_env
    ):
        session = await integration_env.get(AsyncSession)
        karma_repo = await integration_env.get(KarmaRepository)
        user_id = await seed_user(session)

        first, applied = await karma_repo.apply_delta(
            user_id, KarmaCategory.COMMENT, -3, floor=-5
        )
        assert applied == -3
        assert first.comment_karma == -3
        assert first.total_karma == -3

        clamped, clamped_applied = await karma_repo.apply_delta(
            user_id, KarmaCategory.COMMENT, -4, floor=-5
        )
        assert clamped_applied == -2
        assert clamped.total_karma == -5
        assert clamped.comment_karma == -5

    @pytest.mark.asyncio
    async def test_apply_delta_is_idempotent_per_event(self, integration_env):
        session = await integration_env.get(AsyncSession)
        karma_repo = await integration_env.get(KarmaRepository)
        user_id = await seed_user(session)
        event_id = KarmaEventId(uuid4())

        _, first_applied = await karma_repo.apply_delta(
            user_id, KarmaCategory.POST, 1, floor=-99, event_id=event_id
        )
        snapshot, second_applied = await karma_repo.apply_delta(
            user_id, KarmaCategory.POST, 1, floor=-99, event_id=event_id
        )

        assert first_applied == 1
        assert second_applied is None
        assert snapshot.total_karma == 1
        [event] = await karma_repo.find_events(user_id, limit=10)
        assert event.id == event_id
        assert event.applied_delta == 1

    @pytest.mark.asyncio
    async def test_vote_service_and_reconciler_agree(self, integration_env):
        session = await integration_env.get(AsyncSession)
        vote_service = await integration_env.get(VoteService)
        reconciler = await integration_env.get(KarmaReconciler)
        karma_repo = await integration_env.get(KarmaRepository)
        author_id = await seed_user(session)
        post_id = await seed_post(session, author_id)

        for vote_type in (VoteType.UP, VoteType.UP, VoteType.DOWN):
            await vote_service.vote(
                VotableType.POST, post_id, await seed_user(session), vote_type
            )
        incremental = await karma_repo.find_by_user(author_id)

        reconciled = await reconciler.recompute(author_id)

        assert incremental is not None
        assert incremental.total_karma == 1
        assert reconciled.post_karma == incremental.post_karma
        assert reconciled.total_karma == incremental.total_karma
