"""Tests for review urgency scoring."""

from datetime import timedelta

import pytest

from reviewforge.engine import compute_priority
from reviewforge.engine.priority import (
    MAX_PRIORITY,
    MIN_PRIORITY,
    clamp_priority,
    days_overdue,
    days_since_last_review,
)


class TestDaysHelpers:
    """Tests for the elapsed-day helpers."""

    def test_never_reviewed(self, make_state, now) -> None:
        """Items never reviewed have zero elapsed days."""
        assert days_since_last_review(make_state(), now) == 0

    def test_future_review_clamped(self, make_state, now) -> None:
        """A last review after now counts as zero days."""
        state = make_state(last_reviewed=now + timedelta(days=2))

        assert days_since_last_review(state, now) == 0

    def test_days_overdue(self, make_state, now) -> None:
        """Overdue days are elapsed days beyond the interval."""
        state = make_state(interval=4, last_reviewed=now - timedelta(days=7, hours=3))

        assert days_since_last_review(state, now) == 7
        assert days_overdue(state, now) == 3


class TestComputePriority:
    """Tests for compute_priority()."""

    def test_new_item(self, make_state, now) -> None:
        """5 + 3 (mastery < 30) + 1 (accuracy < 0.6) = 9."""
        assert compute_priority(make_state(), now) == 9

    def test_mastered_item(self, make_state, now) -> None:
        """5 - 1 (mastered) = 4."""
        state = make_state(
            mastery_level=90,
            review_count=10,
            correct_answers=10,
            interval=6,
            last_reviewed=now - timedelta(days=2),
        )

        assert compute_priority(state, now) == 4

    def test_mid_mastery_bonus(self, make_state, now) -> None:
        """Mastery in [30, 50) adds 2."""
        state = make_state(mastery_level=40, review_count=4, correct_answers=4)

        assert compute_priority(state, now) == 7

    @pytest.mark.parametrize("days_late,expected", [(0, 5), (1, 6), (2, 6), (4, 7), (6, 8), (60, 8)])
    def test_overdue_bonus(self, make_state, now, days_late: int, expected: int) -> None:
        """Half a point per overdue day, capped at 3, halves rounding up."""
        state = make_state(
            mastery_level=60,
            review_count=5,
            correct_answers=5,
            interval=4,
            last_reviewed=now - timedelta(days=4 + days_late),
        )

        assert compute_priority(state, now) == expected

    def test_clamped_to_ten(self, make_state, now) -> None:
        """5 + 3 + 3 + 1 = 12 is clamped."""
        state = make_state(
            review_count=5, interval=1, last_reviewed=now - timedelta(days=30)
        )

        assert compute_priority(state, now) == MAX_PRIORITY

    def test_more_overdue_never_less_urgent(self, make_state, now) -> None:
        """Priority is non-decreasing in days overdue."""
        priorities = [
            compute_priority(
                make_state(
                    mastery_level=55,
                    review_count=3,
                    correct_answers=3,
                    interval=2,
                    last_reviewed=now - timedelta(days=2 + late),
                ),
                now,
            )
            for late in range(12)
        ]

        assert priorities == sorted(priorities)


class TestClampPriority:
    """Tests for clamp_priority()."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (-4, MIN_PRIORITY),
            (5.5, 6),
            (14, MAX_PRIORITY),
            (float("inf"), MAX_PRIORITY),
            (float("-inf"), MIN_PRIORITY),
        ],
    )
    def test_clamp(self, value: float, expected: int) -> None:
        """Rounded half up and kept within 1-10."""
        assert clamp_priority(value) == expected
