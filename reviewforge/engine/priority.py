"""Review urgency scoring.

Priority is an integer from 1 (can wait) to 10 (review now):

    5
    + min(3, days_overdue * 0.5)
    + 3 if mastery < 30, else + 2 if mastery < 50
    + 1 if lifetime accuracy < 0.6
    - 1 if mastery > mastery threshold
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from reviewforge.core.config.scheduling import (
    DEFAULT_SCHEDULING_CONFIG,
    SchedulingConfig,
)
from reviewforge.engine.models import ReviewState
from reviewforge.engine.numeric import clamp, round_half_up
from reviewforge.engine.timestamps import days_between, parse_timestamp

MIN_PRIORITY: int = 1
MAX_PRIORITY: int = 10


def days_since_last_review(state: ReviewState, now: datetime) -> int:
    """Whole days since the last review; 0 for items never reviewed."""
    if state.last_reviewed is None:
        return 0
    return max(0, days_between(now, state.last_reviewed))


def days_overdue(state: ReviewState, now: datetime) -> int:
    """Whole days past the item's interval."""
    return max(0, days_since_last_review(state, now) - state.interval)


def clamp_priority(value: float) -> int:
    """Clamp into the 1-10 priority range, then round half up."""
    return round_half_up(clamp(value, MIN_PRIORITY, MAX_PRIORITY))


def compute_priority(
    state: ReviewState,
    now: datetime,
    config: Optional[SchedulingConfig] = None,
) -> int:
    """Compute the review urgency of an item.

    Args:
        state: Current review state
        now: Reference time
        config: Scheduling thresholds

    Returns:
        Integer priority in [1, 10]
    """
    root = config or DEFAULT_SCHEDULING_CONFIG
    cfg = root.priority
    now = parse_timestamp(now, "now")

    priority = cfg.base
    priority += min(cfg.overdue_cap, days_overdue(state, now) * cfg.overdue_step)

    # Only the larger mastery bonus applies
    if state.mastery_level < cfg.very_low_mastery:
        priority += cfg.very_low_mastery_bonus
    elif state.mastery_level < cfg.low_mastery:
        priority += cfg.low_mastery_bonus

    if state.accuracy < cfg.poor_accuracy:
        priority += cfg.poor_accuracy_bonus

    if state.mastery_level > root.mastery.mastery_threshold:
        priority -= cfg.mastered_penalty

    return clamp_priority(priority)
