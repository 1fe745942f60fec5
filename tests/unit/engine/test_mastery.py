"""Tests for mastery estimation.

Organization
------------
- TestRecentAccuracy: Windowed accuracy over the event history
- TestConsistencyBonus: Regularity of study sessions
- TestEstimateMastery: The combined 0-100 score
"""

from datetime import timedelta

import pytest

from reviewforge.engine import (
    ReviewEvent,
    consistency_bonus,
    estimate_mastery,
    recent_accuracy,
)
from reviewforge.engine.mastery import repetition_bonus


def events_at(now, days_ago, accuracy=1.0):
    """Events with the given accuracy at now - d days, oldest first."""
    return [
        ReviewEvent(accuracy=accuracy, timestamp=now - timedelta(days=d))
        for d in sorted(days_ago, reverse=True)
    ]


class TestRecentAccuracy:
    """Tests for recent_accuracy()."""

    def test_empty_history_is_zero(self) -> None:
        """No history means no recent accuracy."""
        assert recent_accuracy([]) == 0.0

    def test_only_window_counts(self) -> None:
        """Older failures outside the window are ignored."""
        history = [ReviewEvent(accuracy=0.0)] * 3 + [ReviewEvent(accuracy=1.0)] * 5

        assert recent_accuracy(history) == pytest.approx(1.0)
        assert recent_accuracy(history, window=6) == pytest.approx(5 / 6)

    def test_quality_only_events_use_quality(self) -> None:
        """Events without accuracy contribute quality / 5."""
        history = [ReviewEvent(quality=5), ReviewEvent(quality=3)]

        assert recent_accuracy(history) == pytest.approx(0.8)


class TestConsistencyBonus:
    """Tests for consistency_bonus()."""

    def test_too_few_sessions(self, now) -> None:
        """Fewer than three sessions earn nothing."""
        assert consistency_bonus(events_at(now, [2, 1])) == 0.0

    def test_perfectly_regular_sessions(self, now) -> None:
        """Equal gaps give the full 20 points."""
        assert consistency_bonus(events_at(now, [3, 2, 1, 0])) == pytest.approx(20.0)

    def test_irregular_sessions(self, now) -> None:
        """Gaps of 1 and 3 days: CV 0.5 costs 5 points."""
        assert consistency_bonus(events_at(now, [4, 3, 0])) == pytest.approx(15.0)

    def test_simultaneous_sessions(self, now) -> None:
        """Sessions at one instant carry no spacing signal."""
        assert consistency_bonus(events_at(now, [0, 0, 0])) == 0.0

    def test_never_negative(self, now) -> None:
        """Wildly irregular gaps floor at zero."""
        bunched = [100 - 0.01 * i for i in range(9)]
        history = events_at(now, bunched + [0])

        assert consistency_bonus(history) == 0.0

    def test_untimestamped_events_ignored(self) -> None:
        """Events without timestamps do not count as sessions."""
        assert consistency_bonus([ReviewEvent(accuracy=1.0)] * 5) == 0.0


class TestEstimateMastery:
    """Tests for estimate_mastery()."""

    def test_new_item_has_no_mastery(self, make_state) -> None:
        """Nothing reviewed, nothing mastered."""
        assert estimate_mastery(make_state()) == 0

    def test_weighted_components(self, make_state, now) -> None:
        """30 (lifetime) + 15 (recent) + 0 (consistency) + 4 (repetitions) = 49."""
        state = make_state(review_count=4, correct_answers=3, repetitions=2)
        history = [
            ReviewEvent(accuracy=1.0, timestamp=now - timedelta(days=1)),
            ReviewEvent(accuracy=0.0, timestamp=now),
        ]

        assert estimate_mastery(state, history) == 49

    def test_difficulty_adjustments_scale_score(self, make_state, now) -> None:
        """Each net adjustment scales the score by 10%: 49 * 0.8 = 39.2."""
        state = make_state(
            review_count=4, correct_answers=3, repetitions=2, difficulty_adjustments=-2
        )
        history = [
            ReviewEvent(accuracy=1.0, timestamp=now - timedelta(days=1)),
            ReviewEvent(accuracy=0.0, timestamp=now),
        ]

        assert estimate_mastery(state, history) == 39

    def test_capped_at_hundred(self, make_state, now) -> None:
        """Perfect records clamp to 100."""
        state = make_state(review_count=10, correct_answers=10, repetitions=10)

        assert estimate_mastery(state, events_at(now, [4, 3, 2, 1, 0])) == 100

    def test_half_point_rounds_up(self, make_state) -> None:
        """A score of x.5 rounds up: 40 * 0.125 + 30 * 0.25 = 12.5 -> 13."""
        state = make_state(review_count=8, correct_answers=1)
        history = [ReviewEvent(accuracy=0.25)]

        assert estimate_mastery(state, history) == 13

    @pytest.mark.parametrize("repetitions,expected", [(-1, 0), (3, 6), (10, 20), (15, 20)])
    def test_repetition_bonus(self, repetitions: int, expected: float) -> None:
        """Two points per repetition, capped at 20."""
        assert repetition_bonus(repetitions) == expected
