"""Tests for the review queue builder and batch scheduling.

Organization
------------
- TestIsDue: Due-date filtering
- TestBuildQueue: Selection, ranking and truncation
- TestRecommendedSessionSize: Session sizing heuristic
- TestBatchSchedule: Planned reviews per learner
"""

from datetime import timedelta

import pytest

from reviewforge.core.exceptions import InvalidInputError
from reviewforge.engine import (
    ReviewType,
    batch_schedule,
    build_queue,
    recommended_session_size,
    schedule_review,
)
from reviewforge.engine.queue import is_due


class TestIsDue:
    """Tests for is_due()."""

    def test_past_due_date(self, make_state, now) -> None:
        """Items due before now are due."""
        assert is_due(make_state(next_review_date=now - timedelta(hours=1)), now)

    def test_future_due_date(self, make_state, now) -> None:
        """Items due after now are not."""
        assert not is_due(make_state(next_review_date=now + timedelta(hours=1)), now)

    def test_missing_due_date(self, make_state, now) -> None:
        """Items without a due date are due immediately."""
        assert is_due(make_state(next_review_date=None), now)

    def test_overdue_excluded_on_request(self, make_state, now) -> None:
        """Without overdue items only today's due items qualify."""
        yesterday = make_state(next_review_date=now - timedelta(days=1))
        this_morning = make_state(next_review_date=now - timedelta(hours=3))

        assert not is_due(yesterday, now, include_overdue=False)
        assert is_due(this_morning, now, include_overdue=False)


class TestBuildQueue:
    """Tests for build_queue()."""

    def test_only_due_items(self, make_state, now) -> None:
        """Items not yet due are left out."""
        states = [
            make_state("bayt", next_review_date=now - timedelta(days=1)),
            make_state("qalam", next_review_date=now + timedelta(days=1)),
        ]

        queue = build_queue(states, now)

        assert [q.item_id for q in queue] == ["bayt"]

    def test_ranked_by_priority(self, make_state, now) -> None:
        """Higher priority first."""
        mastered = make_state(
            "bayt", mastery_level=90, review_count=10, correct_answers=10
        )
        struggling = make_state("qalam")

        queue = build_queue([mastered, struggling], now)

        assert [q.item_id for q in queue] == ["qalam", "bayt"]
        assert queue[0].priority > queue[1].priority

    def test_ties_broken_by_due_date_then_id(self, make_state, now) -> None:
        """Earlier due dates win ties, then item ids."""
        states = [
            make_state("c", next_review_date=now - timedelta(hours=1)),
            make_state("b", next_review_date=now - timedelta(hours=2)),
            make_state("a", next_review_date=now - timedelta(hours=1)),
        ]

        queue = build_queue(states, now)

        assert [q.item_id for q in queue] == ["b", "a", "c"]

    def test_limit(self, make_state, now) -> None:
        """The queue is truncated to the limit."""
        states = [make_state(f"w{i}") for i in range(5)]

        assert len(build_queue(states, now, limit=2)) == 2
        assert build_queue(states, now, limit=0) == []

    def test_default_limit(self, make_state, now) -> None:
        """The configured limit of 50 applies by default."""
        states = [make_state(f"w{i:03d}") for i in range(60)]

        assert len(build_queue(states, now)) == 50

    def test_queue_item_fields(self, make_state, now) -> None:
        """Queue items carry type, age and mastery."""
        state = make_state(
            mastery_level=42,
            review_count=2,
            correct_answers=2,
            last_reviewed=now - timedelta(days=3),
            next_review_date=now - timedelta(days=1),
        )

        (item,) = build_queue([state], now)

        assert item.review_type is ReviewType.SPACED_REPETITION
        assert item.days_since_last_review == 3
        assert item.scheduled_date == now - timedelta(days=1)
        assert item.mastery_level == 42

    def test_history_drives_review_type(self, make_state, now, make_event) -> None:
        """Per-item history reaches the classifier."""
        state = make_state(repetitions=3)
        history = {"kitab": [make_event(response_ms=1000)] * 3}

        (item,) = build_queue([state], now, history=history)

        assert item.review_type is ReviewType.DIFFICULTY_ADJUSTMENT


class TestRecommendedSessionSize:
    """Tests for recommended_session_size()."""

    @pytest.mark.parametrize(
        "available,preferred,minutes,expected",
        [
            (100, None, None, 20),
            (12, None, None, 12),
            (3, None, None, 5),
            (100, 40, 90, 40),
            (100, 100, 300, 50),
            (100, 30, 15, 10),
        ],
    )
    def test_session_size(self, available, preferred, minutes, expected) -> None:
        """Smallest of available, preferred and time budget, within 5-50."""
        assert recommended_session_size(available, preferred, minutes) == expected


class TestBatchSchedule:
    """Tests for schedule_review() and batch_schedule()."""

    def test_schedule_uses_due_date(self, make_state, now) -> None:
        """The planned date is the item's due date."""
        due = now + timedelta(days=4)

        schedule = schedule_review(make_state(next_review_date=due), now)

        assert schedule.scheduled_date == due
        assert schedule.created_at == now
        assert schedule.priority == 9

    def test_one_schedule_per_state(self, make_state, now) -> None:
        """Every item gets a schedule, in input order."""
        states = [make_state("bayt"), make_state("qalam")]

        schedules = batch_schedule("u1", states, now)

        assert [s.item_id for s in schedules] == ["bayt", "qalam"]
        assert all(s.user_id == "u1" for s in schedules)

    def test_foreign_state_rejected(self, make_state, now) -> None:
        """States of another learner are an error."""
        with pytest.raises(InvalidInputError, match="belongs to u2"):
            batch_schedule("u1", [make_state(user_id="u2")], now)
