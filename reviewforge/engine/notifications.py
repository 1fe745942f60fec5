"""Notification timing and content advice.

Pure decisions about when and how often to remind a learner and what the
reminder says. Delivery is someone else's job.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Sequence, Union

from reviewforge.core.config.scheduling import (
    DEFAULT_SCHEDULING_CONFIG,
    SchedulingConfig,
)
from reviewforge.core.exceptions import InvalidInputError
from reviewforge.engine.models import QueueItem, ReviewState, UserStats
from reviewforge.engine.queue import scheduled_for
from reviewforge.engine.timestamps import days_between, parse_timestamp

OPEN_REVIEW_QUEUE_ACTION = "open_review_queue"


class PreferenceTier(str, Enum):
    """How often the learner wants to be reminded."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, value: Union["PreferenceTier", str]) -> "PreferenceTier":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as e:
            raise InvalidInputError(
                f"Unknown notification preference: {value!r}", "preference", value
            ) from e


# (daily notifications, hours between notifications)
_TIER_FREQUENCY = {
    PreferenceTier.LOW: (1, 24),
    PreferenceTier.MEDIUM: (2, 12),
    PreferenceTier.HIGH: (3, 8),
}


@dataclass(frozen=True)
class NotificationTime:
    """Time of day, in the learner's clock, to send a reminder."""

    hour: int
    minute: int = 0


@dataclass(frozen=True)
class NotificationFrequency:
    """How many reminders per day and how far apart."""

    daily_notifications: int
    interval_hours: int
    should_send_reminder: bool


@dataclass(frozen=True)
class NotificationContent:
    """Reminder title, body and the structured payload for the app."""

    title: str
    body: str
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NotificationAdvice:
    """Everything the delivery layer needs to decide on a reminder."""

    optimal_time: NotificationTime
    frequency: NotificationFrequency
    content: NotificationContent
    is_appropriate_now: bool


@dataclass(frozen=True)
class ReminderPlan:
    """A reminder for items falling due within the next day."""

    user_id: str
    scheduled_for: datetime
    items_due: int
    message: str
    urgency: str


def optimal_notification_time(
    user_stats: UserStats,
    config: Optional[SchedulingConfig] = None,
) -> NotificationTime:
    """Suggest a reminder time from the hour the learner last studied.

    Morning learners are reminded at the same hour, afternoon learners in
    the morning, and evening or night learners in the evening. Without any
    study history the default time applies.
    """
    cfg = (config or DEFAULT_SCHEDULING_CONFIG).notification
    if user_stats.last_study_date is None:
        return NotificationTime(cfg.default_hour, cfg.default_minute)

    hour = user_stats.last_study_date.hour
    if cfg.morning_start_hour <= hour <= cfg.morning_end_hour:
        return NotificationTime(hour, cfg.default_minute)
    if cfg.morning_end_hour < hour <= cfg.afternoon_end_hour:
        return NotificationTime(cfg.afternoon_hour, cfg.default_minute)
    return NotificationTime(cfg.evening_hour, cfg.default_minute)


def notification_frequency(
    user_stats: UserStats,
    queue_size: int,
    now: datetime,
    preference: Union[PreferenceTier, str] = PreferenceTier.MEDIUM,
    config: Optional[SchedulingConfig] = None,
) -> NotificationFrequency:
    """Recommend reminder frequency for a preference tier and queue size.

    A busy queue adds a reminder and shortens the gap; a light queue removes
    one and lengthens it, within the configured bounds.
    """
    cfg = (config or DEFAULT_SCHEDULING_CONFIG).notification
    now = parse_timestamp(now, "now")
    daily, interval_hours = _TIER_FREQUENCY[PreferenceTier.parse(preference)]

    if queue_size > cfg.busy_queue:
        daily = min(daily + 1, cfg.max_daily)
        interval_hours = max(interval_hours - 2, cfg.min_interval_hours)
    elif queue_size < cfg.light_queue:
        daily = max(daily - 1, 1)
        interval_hours = min(interval_hours + 4, cfg.max_interval_hours)

    days_since_study = 0
    if user_stats.last_study_date is not None:
        days_since_study = days_between(now, user_stats.last_study_date)

    return NotificationFrequency(
        daily_notifications=daily,
        interval_hours=interval_hours,
        should_send_reminder=days_since_study >= 1 or queue_size > cfg.reminder_queue,
    )


def _streak_line(streak: int, config: SchedulingConfig) -> str:
    cfg = config.notification
    if streak >= cfg.streak_amazing_days:
        return f" Amazing {streak}-day streak! \N{FIRE}"
    if streak >= cfg.streak_great_days:
        return f" Great {streak}-day streak! Keep it up! \N{WHITE MEDIUM STAR}"
    return ""


def notification_content(
    queue: Sequence[QueueItem],
    user_stats: UserStats,
    now: datetime,
    config: Optional[SchedulingConfig] = None,
) -> NotificationContent:
    """Write the reminder text for a queue snapshot.

    Overdue items (due strictly before now) lead the message; otherwise the
    queue size does; with an empty queue the reminder is about the streak.
    """
    cfg = config or DEFAULT_SCHEDULING_CONFIG
    now = parse_timestamp(now, "now")
    total = len(queue)
    overdue = sum(1 for item in queue if now > item.scheduled_date)
    streak = user_stats.current_streak

    if overdue > 0:
        title = f"{overdue} Overdue Reviews"
        body = (
            f"You have {overdue} overdue words and {total - overdue} "
            f"new reviews waiting."
        )
    elif total > 0:
        title = f"{total} Words Ready for Review"
        body = f"Continue your learning journey with {total} vocabulary words."
    else:
        title = "Keep Your Streak Going!"
        body = f"Current streak: {streak} days. Check for new words to learn."

    body += _streak_line(streak, cfg)

    return NotificationContent(
        title=title,
        body=body,
        data={
            "reviewCount": total,
            "overdueCount": overdue,
            "currentStreak": streak,
            "action": OPEN_REVIEW_QUEUE_ACTION,
        },
    )


def is_appropriate_time(
    now: datetime,
    quiet_hours_start: Optional[int] = None,
    quiet_hours_end: Optional[int] = None,
    config: Optional[SchedulingConfig] = None,
) -> bool:
    """Check that `now` falls outside the quiet hours.

    Quiet hours cover [start, end). When start is later than end they wrap
    past midnight (22 to 7 silences 22:00-06:59). Equal start and end mean
    there are no quiet hours.

    Examples:
        >>> is_appropriate_time(datetime(2024, 1, 1, 23, 0), 22, 7)
        False
        >>> is_appropriate_time(datetime(2024, 1, 1, 12, 0), 22, 7)
        True
    """
    cfg = (config or DEFAULT_SCHEDULING_CONFIG).notification
    start = cfg.quiet_hours_start if quiet_hours_start is None else quiet_hours_start
    end = cfg.quiet_hours_end if quiet_hours_end is None else quiet_hours_end
    hour = parse_timestamp(now, "now").hour

    if start == end:
        return True
    if start < end:
        return not (start <= hour < end)
    return end <= hour < start


def advise_notification(
    queue: Sequence[QueueItem],
    user_stats: UserStats,
    now: datetime,
    preference: Union[PreferenceTier, str] = PreferenceTier.MEDIUM,
    config: Optional[SchedulingConfig] = None,
) -> NotificationAdvice:
    """Bundle timing, frequency, content and the quiet-hours check."""
    cfg = config or DEFAULT_SCHEDULING_CONFIG
    now = parse_timestamp(now, "now")
    return NotificationAdvice(
        optimal_time=optimal_notification_time(user_stats, cfg),
        frequency=notification_frequency(user_stats, len(queue), now, preference, cfg),
        content=notification_content(queue, user_stats, now, cfg),
        is_appropriate_now=is_appropriate_time(now, config=cfg),
    )


def plan_due_reminder(
    states: Iterable[ReviewState],
    user_stats: UserStats,
    now: datetime,
    config: Optional[SchedulingConfig] = None,
) -> ReminderPlan:
    """Plan tomorrow's reminder for items falling due in the next 24 hours.

    Items due between now and now + 1 day (inclusive) are counted. The
    reminder goes out tomorrow at the learner's optimal time.
    """
    cfg = config or DEFAULT_SCHEDULING_CONFIG
    now = parse_timestamp(now, "now")
    horizon = now + timedelta(days=1)

    due = sum(1 for s in states if now <= scheduled_for(s, now) <= horizon)
    at = optimal_notification_time(user_stats, cfg)

    return ReminderPlan(
        user_id=user_stats.user_id,
        scheduled_for=horizon.replace(
            hour=at.hour, minute=at.minute, second=0, microsecond=0
        ),
        items_due=due,
        message=f"You have {due} words ready for review!",
        urgency="high" if due > cfg.notification.urgent_reminder_count else "normal",
    )
