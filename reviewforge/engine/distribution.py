"""Daily review load distribution.

Caps how many reviews land on one calendar day. Days are processed in
order; when a day holds more than the cap, its highest-priority entries
stay and the rest move to the following day with their priority lowered
by one. Entries already scheduled on a day keep their place ahead of
entries carried in from earlier days, and carried entries fill whatever
capacity is left, moving on again when the day is full.

An entry's priority is lowered once, when it is first postponed, however
many days it ends up moving.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

from reviewforge.core.config.scheduling import (
    DEFAULT_SCHEDULING_CONFIG,
    SchedulingConfig,
)
from reviewforge.core.exceptions import InvalidInputError
from reviewforge.engine.models import ReviewSchedule
from reviewforge.engine.priority import MIN_PRIORITY
from reviewforge.engine.timestamps import calendar_day


def _by_priority(indices: List[int], schedules: Sequence[ReviewSchedule]) -> List[int]:
    # Stable: equal priorities keep their input order
    return sorted(indices, key=lambda i: -schedules[i].priority)


def distribute_load(
    schedules: Sequence[ReviewSchedule],
    max_per_day: Optional[int] = None,
    config: Optional[SchedulingConfig] = None,
) -> List[ReviewSchedule]:
    """Spread reviews so that no calendar day exceeds `max_per_day`.

    Args:
        schedules: Planned reviews, possibly spanning several days
        max_per_day: Daily cap (defaults to the configured cap)
        config: Scheduling thresholds

    Returns:
        The same number of schedules in input order. Postponed entries are
        new ReviewSchedule values with a later scheduled_date (same time of
        day) and priority lowered by one, never below 1.

    Raises:
        InvalidInputError: If max_per_day is smaller than 1
    """
    if max_per_day is None:
        max_per_day = (config or DEFAULT_SCHEDULING_CONFIG).distribution.max_per_day
    if max_per_day < 1:
        raise InvalidInputError(
            f"max_per_day must be at least 1, got {max_per_day}",
            "max_per_day",
            max_per_day,
        )

    by_day: Dict[date, List[int]] = {}
    for index, schedule in enumerate(schedules):
        by_day.setdefault(calendar_day(schedule.scheduled_date), []).append(index)

    result = list(schedules)
    pending_days = sorted(by_day)
    carried: List[int] = []
    day: Optional[date] = pending_days[0] if pending_days else None

    while day is not None:
        own = by_day.get(day, [])
        if len(own) > max_per_day:
            ranked = _by_priority(own, schedules)
            postponed = ranked[max_per_day:]
            for index in postponed:
                original = schedules[index]
                result[index] = replace(
                    original, priority=max(MIN_PRIORITY, original.priority - 1)
                )
            carried = _by_priority(carried + postponed, result)
            free = 0
        else:
            free = max_per_day - len(own)

        placed, carried = carried[:free], carried[free:]
        for index in placed:
            original_day = calendar_day(schedules[index].scheduled_date)
            result[index] = replace(
                result[index],
                scheduled_date=schedules[index].scheduled_date
                + timedelta(days=(day - original_day).days),
            )

        pending_days = [d for d in pending_days if d > day]
        if carried:
            day = day + timedelta(days=1)
        else:
            day = pending_days[0] if pending_days else None

    return result
