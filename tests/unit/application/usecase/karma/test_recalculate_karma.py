"""Unit tests for RecalculateKarmaUseCase."""

from uuid import uuid4

import pytest

from agora.application.usecase.karma import (
    RecalculateKarmaRequest,
    RecalculateKarmaUseCase,
)
from agora.domain.error import NotFoundError
from agora.domain.repository import AuditLogRepository
from agora.domain.service import VoteService
from agora.domain.value import AuditAction, VotableType, VoteType
from agora.persistence.repository.inmemory import InMemoryDatabase
from tests.factories import make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestRecalculateKarmaUseCase:
    """Tests for RecalculateKarmaUseCase."""

    @pytest.mark.asyncio
    async def test_recalculation_repairs_drift(self, unit_env):
        """A ledger entry that drifted from the votes is rebuilt."""
        # Arrange
        use_case = await unit_env.get(RecalculateKarmaUseCase)
        vote_service = await unit_env.get(VoteService)
        db = await unit_env.get(InMemoryDatabase)
        author_id = make_user(db)
        admin_id = make_user(db)
        post_id = make_post(db, author_id)
        await vote_service.vote(VotableType.POST, post_id, make_user(db), VoteType.UP)
        await vote_service.vote(VotableType.POST, post_id, make_user(db), VoteType.UP)

        # Corrupt the stored entry
        db.karma[author_id] = db.karma[author_id].model_copy(
            update={"post_karma": 40, "total_karma": 40}
        )

        # Act
        response = await use_case.execute(
            RecalculateKarmaRequest(user_id=str(author_id), actor_id=str(admin_id))
        )

        # Assert
        assert response.karma.post_karma == 2
        assert response.karma.total_karma == 2
        assert db.karma[author_id].total_karma == 2

    @pytest.mark.asyncio
    async def test_recalculation_is_audited(self, unit_env):
        use_case = await unit_env.get(RecalculateKarmaUseCase)
        audit_repo = await unit_env.get(AuditLogRepository)
        db = await unit_env.get(InMemoryDatabase)
        user_id = make_user(db)
        admin_id = make_user(db)

        await use_case.execute(
            RecalculateKarmaRequest(user_id=str(user_id), actor_id=str(admin_id))
        )

        [entry] = await audit_repo.find_by_actor(admin_id, limit=10)
        assert entry.action == AuditAction.RECALCULATE_KARMA
        assert entry.resource == "user_karma"
        assert entry.resource_id == str(user_id)
        assert entry.details["target_user_id"] == str(user_id)
        assert entry.details["karma"]["total_karma"] == 0

    @pytest.mark.asyncio
    async def test_unknown_user_raises_not_found(self, unit_env):
        use_case = await unit_env.get(RecalculateKarmaUseCase)
        db = await unit_env.get(InMemoryDatabase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                RecalculateKarmaRequest(
                    user_id=str(uuid4()), actor_id=str(make_user(db))
                )
            )
