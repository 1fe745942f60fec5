"""Study streak calculation."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable

from reviewforge.engine.timestamps import calendar_day, parse_timestamp


def calculate_streak(review_dates: Iterable[datetime], now: datetime) -> int:
    """Count consecutive calendar days with at least one review, ending today.

    A learner who has not reviewed anything today has a streak of 0.

    Args:
        review_dates: Timestamps of past reviews, in any order
        now: Reference time; its calendar day is "today"

    Returns:
        Number of consecutive study days
    """
    days = {calendar_day(parse_timestamp(d, "review_date")) for d in review_dates}
    day = calendar_day(parse_timestamp(now, "now"))

    streak = 0
    while day in days:
        streak += 1
        day -= timedelta(days=1)
    return streak


def longest_streak(review_dates: Iterable[datetime]) -> int:
    """Length of the longest run of consecutive study days."""
    days = sorted({calendar_day(parse_timestamp(d, "review_date")) for d in review_dates})

    best = run = 0
    previous = None
    for day in days:
        run = run + 1 if previous is not None and day - previous == timedelta(days=1) else 1
        best = max(best, run)
        previous = day
    return best
