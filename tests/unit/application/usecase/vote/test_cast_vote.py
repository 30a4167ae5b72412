"""Unit tests for CastVoteUseCase."""

from uuid import uuid4

import pytest

from agora.application.usecase.vote import CastVoteRequest, CastVoteUseCase
from agora.domain.error import NotFoundError
from agora.domain.value import VotableType, VoteType
from agora.persistence.repository.inmemory import InMemoryDatabase
from tests.factories import make_comment, make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_upvote_post(self, unit_env):
        """First upvote should be recorded and credit the author."""
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        db = await unit_env.get(InMemoryDatabase)
        author_id = make_user(db)
        voter_id = make_user(db)
        post_id = make_post(db, author_id)

        # Act
        response = await use_case.execute(
            CastVoteRequest(
                votable_type=VotableType.POST,
                votable_id=str(post_id),
                vote_type=VoteType.UP,
                user_id=str(voter_id),
            )
        )

        # Assert
        assert response.user_vote == VoteType.UP
        assert response.votable_id == str(post_id)
        assert response.author_id == str(author_id)
        assert response.karma_change == 1

    @pytest.mark.asyncio
    async def test_repeat_downvote_on_comment_clears_vote(self, unit_env):
        """Casting the standing vote again should remove it."""
        use_case = await unit_env.get(CastVoteUseCase)
        db = await unit_env.get(InMemoryDatabase)
        author_id = make_user(db)
        voter_id = make_user(db)
        comment_id = make_comment(db, author_id)
        request = CastVoteRequest(
            votable_type=VotableType.COMMENT,
            votable_id=str(comment_id),
            vote_type=VoteType.DOWN,
            user_id=str(voter_id),
        )

        first = await use_case.execute(request)
        second = await use_case.execute(request)

        assert first.karma_change == -1
        assert second.user_vote is None
        assert second.karma_change == 1
        assert db.karma[author_id].comment_karma == 0

    @pytest.mark.asyncio
    async def test_missing_target_raises_not_found(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)
        db = await unit_env.get(InMemoryDatabase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                CastVoteRequest(
                    votable_type=VotableType.POST,
                    votable_id=str(uuid4()),
                    vote_type=VoteType.UP,
                    user_id=str(make_user(db)),
                )
            )
