"""Unit tests for karma ledger arithmetic."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from agora.domain.model import KARMA_FLOOR, KarmaSnapshot
from agora.domain.value import KarmaCategory, UserId


@pytest.fixture
def user_id() -> UserId:
    return UserId(uuid4())


def _assert_invariants(snapshot: KarmaSnapshot, floor: int = KARMA_FLOOR) -> None:
    assert snapshot.total_karma == (
        snapshot.post_karma + snapshot.comment_karma + snapshot.award_karma
    )
    assert snapshot.total_karma >= floor


class TestKarmaSnapshot:
    """Tests for KarmaSnapshot construction."""

    def test_rejects_total_that_is_not_the_sum(self, user_id):
        with pytest.raises(ValidationError, match="total_karma"):
            KarmaSnapshot(user_id=user_id, post_karma=2, total_karma=3)

    def test_empty_entry_is_all_zero(self, user_id):
        snapshot = KarmaSnapshot.empty(user_id)

        assert snapshot.total_karma == 0
        assert snapshot.karma_for(KarmaCategory.AWARD) == 0


class TestWithDelta:
    """Tests for applying a delta with floor clamping."""

    def test_positive_delta_adds_to_category_and_total(self, user_id):
        snapshot = KarmaSnapshot.empty(user_id).with_delta(KarmaCategory.POST, 3)

        assert snapshot.post_karma == 3
        assert snapshot.total_karma == 3
        assert snapshot.updated_at is not None

    def test_total_is_clamped_at_floor(self, user_id):
        """A big negative delta stops at the floor; the category absorbs the clamp."""
        snapshot = KarmaSnapshot.empty(user_id).with_delta(KarmaCategory.POST, -150)

        assert snapshot.total_karma == KARMA_FLOOR
        assert snapshot.post_karma == KARMA_FLOOR
        _assert_invariants(snapshot)

    def test_delta_at_floor_is_a_noop(self, user_id):
        at_floor = KarmaSnapshot.empty(user_id).with_delta(KarmaCategory.POST, -99)

        snapshot = at_floor.with_delta(KarmaCategory.COMMENT, -5)

        assert snapshot.total_karma == KARMA_FLOOR
        assert snapshot.comment_karma == 0
        _assert_invariants(snapshot)

    def test_recovery_from_floor_counts_fully(self, user_id):
        at_floor = KarmaSnapshot.empty(user_id).with_delta(KarmaCategory.POST, -200)

        snapshot = at_floor.with_delta(KarmaCategory.POST, 2)

        assert snapshot.total_karma == KARMA_FLOOR + 2

    def test_single_category_may_go_below_floor(self, user_id):
        """Only the total is floored; other categories can carry it."""
        snapshot = (
            KarmaSnapshot.empty(user_id)
            .with_delta(KarmaCategory.COMMENT, 50)
            .with_delta(KarmaCategory.POST, -140)
        )

        assert snapshot.post_karma == -140
        assert snapshot.total_karma == -90
        _assert_invariants(snapshot)

    def test_custom_floor(self, user_id):
        snapshot = KarmaSnapshot.empty(user_id).with_delta(
            KarmaCategory.POST, -5, floor=0
        )

        assert snapshot.total_karma == 0
        assert snapshot.post_karma == 0


class TestReconciled:
    """Tests for building an entry from aggregated vote totals."""

    def test_keeps_aggregates_above_floor(self, user_id):
        snapshot = KarmaSnapshot.reconciled(user_id, 4, -2, 10)

        assert (snapshot.post_karma, snapshot.comment_karma) == (4, -2)
        assert snapshot.award_karma == 10
        assert snapshot.total_karma == 12

    def test_absorbs_excess_in_most_negative_category(self, user_id):
        snapshot = KarmaSnapshot.reconciled(user_id, -10, -120, 0)

        assert snapshot.total_karma == KARMA_FLOOR
        assert snapshot.post_karma == -10
        assert snapshot.comment_karma == -89
        _assert_invariants(snapshot)
