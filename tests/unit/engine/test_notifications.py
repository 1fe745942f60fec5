"""Tests for notification timing, frequency and content.

Organization
------------
- TestOptimalNotificationTime: Reminder time from study habits
- TestNotificationFrequency: Reminders per day by preference and queue size
- TestNotificationContent: Title, body and payload
- TestIsAppropriateTime: Quiet hours
- TestAdviseNotification: Bundled advice
- TestPlanDueReminder: Reminder for items due within a day
"""

from datetime import datetime, timedelta, timezone

import pytest

from reviewforge.core.exceptions import InvalidInputError
from reviewforge.engine import (
    PreferenceTier,
    QueueItem,
    ReviewType,
    UserStats,
    advise_notification,
    is_appropriate_time,
    notification_content,
    notification_frequency,
    optimal_notification_time,
    plan_due_reminder,
)

UTC = timezone.utc


def at_hour(hour: int, minute: int = 0) -> datetime:
    return datetime(2024, 3, 15, hour, minute, tzinfo=UTC)


def queue_item(item_id: str, scheduled_date: datetime) -> QueueItem:
    return QueueItem(
        item_id=item_id,
        priority=5,
        review_type=ReviewType.SPACED_REPETITION,
        days_since_last_review=0,
        scheduled_date=scheduled_date,
    )


class TestOptimalNotificationTime:
    """Tests for optimal_notification_time()."""

    def test_no_history_uses_default(self) -> None:
        """Nine o'clock when we know nothing."""
        time = optimal_notification_time(UserStats(user_id="u1"))

        assert (time.hour, time.minute) == (9, 0)

    @pytest.mark.parametrize(
        "study_hour,expected",
        [(6, 6), (8, 8), (12, 12), (13, 9), (18, 9), (19, 19), (23, 19), (3, 19)],
    )
    def test_follows_study_habit(self, study_hour: int, expected: int) -> None:
        """Morning learners keep their hour; others get 9:00 or 19:00."""
        stats = UserStats(user_id="u1", last_study_date=at_hour(study_hour, 40))

        assert optimal_notification_time(stats).hour == expected


class TestNotificationFrequency:
    """Tests for notification_frequency()."""

    def test_medium_tier(self, now) -> None:
        """Two reminders twelve hours apart."""
        stats = UserStats(user_id="u1", last_study_date=now)

        frequency = notification_frequency(stats, 10, now)

        assert frequency.daily_notifications == 2
        assert frequency.interval_hours == 12
        assert frequency.should_send_reminder is False

    def test_busy_queue_adds_reminder(self, now) -> None:
        """More than 20 items adds one reminder and shortens the gap."""
        stats = UserStats(user_id="u1", last_study_date=now)

        frequency = notification_frequency(stats, 25, now, "medium")

        assert (frequency.daily_notifications, frequency.interval_hours) == (3, 10)
        assert frequency.should_send_reminder is True

    def test_busy_queue_bounded(self, now) -> None:
        """High tier tops out at four reminders six hours apart."""
        stats = UserStats(user_id="u1", last_study_date=now)

        frequency = notification_frequency(stats, 40, now, PreferenceTier.HIGH)

        assert (frequency.daily_notifications, frequency.interval_hours) == (4, 6)

    def test_light_queue_bounded(self, now) -> None:
        """Low tier never drops below one reminder a day."""
        stats = UserStats(user_id="u1", last_study_date=now)

        frequency = notification_frequency(stats, 2, now, "low")

        assert (frequency.daily_notifications, frequency.interval_hours) == (1, 24)

    def test_missed_day_triggers_reminder(self, now) -> None:
        """A day without study asks for a reminder."""
        stats = UserStats(user_id="u1", last_study_date=now - timedelta(days=2))

        assert notification_frequency(stats, 3, now).should_send_reminder is True

    def test_unknown_preference_rejected(self, now) -> None:
        """Only low, medium and high are known."""
        with pytest.raises(InvalidInputError, match="preference"):
            notification_frequency(UserStats(user_id="u1"), 3, now, "hourly")


class TestNotificationContent:
    """Tests for notification_content()."""

    def test_overdue_items_lead(self, now) -> None:
        """Overdue items are counted separately."""
        queue = [
            queue_item("a", now - timedelta(days=2)),
            queue_item("b", now - timedelta(hours=1)),
            queue_item("c", now),
        ]

        content = notification_content(queue, UserStats(user_id="u1"), now)

        assert content.title == "2 Overdue Reviews"
        assert content.body == "You have 2 overdue words and 1 new reviews waiting."
        assert content.data == {
            "reviewCount": 3,
            "overdueCount": 2,
            "currentStreak": 0,
            "action": "open_review_queue",
        }

    def test_ready_items(self, now) -> None:
        """Without overdue items the queue size leads."""
        queue = [queue_item("a", now), queue_item("b", now)]

        content = notification_content(queue, UserStats(user_id="u1"), now)

        assert content.title == "2 Words Ready for Review"

    def test_empty_queue_mentions_streak(self, now) -> None:
        """An empty queue becomes a streak reminder."""
        stats = UserStats(user_id="u1", current_streak=4)

        content = notification_content([], stats, now)

        assert content.title == "Keep Your Streak Going!"
        assert content.body.startswith("Current streak: 4 days.")
        assert "Great 4-day streak! Keep it up!" in content.body

    def test_long_streak_celebrated(self, now) -> None:
        """Streaks of a week or more are amazing."""
        stats = UserStats(user_id="u1", current_streak=9)

        content = notification_content([queue_item("a", now)], stats, now)

        assert "Amazing 9-day streak!" in content.body

    def test_short_streak_not_mentioned(self, now) -> None:
        """Streaks under three days add nothing."""
        stats = UserStats(user_id="u1", current_streak=2)

        content = notification_content([queue_item("a", now)], stats, now)

        assert "streak" not in content.body


class TestIsAppropriateTime:
    """Tests for is_appropriate_time()."""

    @pytest.mark.parametrize(
        "hour,minute,expected",
        [(23, 0, False), (22, 0, False), (3, 0, False), (6, 59, False), (7, 0, True), (12, 0, True), (21, 59, True)],
    )
    def test_default_quiet_hours_wrap_midnight(self, hour, minute, expected) -> None:
        """22:00-07:00 is quiet, start inclusive and end exclusive."""
        assert is_appropriate_time(at_hour(hour, minute)) is expected

    def test_daytime_quiet_hours(self) -> None:
        """Non-wrapping quiet hours."""
        assert is_appropriate_time(at_hour(10), 9, 17) is False
        assert is_appropriate_time(at_hour(18), 9, 17) is True

    def test_equal_bounds_mean_no_quiet_hours(self) -> None:
        """Start == end disables quiet hours."""
        assert is_appropriate_time(at_hour(3), 5, 5) is True


class TestAdviseNotification:
    """Tests for advise_notification()."""

    def test_bundles_advice(self, now) -> None:
        """Timing, frequency, content and the quiet-hours check together."""
        stats = UserStats(user_id="u1", last_study_date=at_hour(8), current_streak=1)
        queue = [queue_item("a", now - timedelta(days=1))]

        advice = advise_notification(queue, stats, now, "high")

        assert advice.optimal_time.hour == 8
        assert advice.frequency.daily_notifications == 2
        assert advice.content.title == "1 Overdue Reviews"
        assert advice.is_appropriate_now is True

    def test_quiet_hours_flagged(self) -> None:
        """Advice at 23:00 is not appropriate to send."""
        late = at_hour(23)

        advice = advise_notification([], UserStats(user_id="u1"), late)

        assert advice.is_appropriate_now is False


class TestPlanDueReminder:
    """Tests for plan_due_reminder()."""

    def test_counts_items_due_within_a_day(self, make_state, now) -> None:
        """Items due in (now, now + 1 day] are counted; overdue ones are not."""
        states = [
            make_state("a", next_review_date=now + timedelta(hours=2)),
            make_state("b", next_review_date=now + timedelta(days=1)),
            make_state("c", next_review_date=now + timedelta(hours=25)),
            make_state("d", next_review_date=now - timedelta(hours=1)),
        ]

        plan = plan_due_reminder(states, UserStats(user_id="u1"), now)

        assert plan.items_due == 2
        assert plan.message == "You have 2 words ready for review!"
        assert plan.urgency == "normal"
        assert plan.scheduled_for == datetime(2024, 3, 16, 9, 0, tzinfo=UTC)

    def test_many_items_are_urgent(self, make_state, now) -> None:
        """More than 20 items makes the reminder urgent."""
        states = [
            make_state(f"w{i}", next_review_date=now + timedelta(hours=1)) for i in range(21)
        ]

        plan = plan_due_reminder(states, UserStats(user_id="u1"), now)

        assert plan.urgency == "high"
