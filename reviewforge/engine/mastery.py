"""Mastery estimation.

Mastery is a derived 0-100 confidence score combining lifetime accuracy,
recent accuracy, the regularity of study sessions and the current
repetition streak:

    mastery = base_accuracy * 40          (0-40)
            + recent_accuracy * 30        (0-30)
            + consistency_bonus           (0-20 points)
            + min(20, repetitions * 2)    (0-20)

The sum is scaled by (1 + difficulty_adjustments * 0.1) and clamped.
"""

from __future__ import annotations

import statistics
from typing import List, Optional, Sequence

from reviewforge.core.config.scheduling import (
    DEFAULT_SCHEDULING_CONFIG,
    SchedulingConfig,
)
from reviewforge.engine.models import ReviewEvent, ReviewState
from reviewforge.engine.numeric import clamp, round_half_up
from reviewforge.engine.timestamps import SECONDS_PER_DAY

BASE_ACCURACY_POINTS: float = 40.0
RECENT_ACCURACY_POINTS: float = 30.0
MAX_CONSISTENCY_POINTS: float = 20.0
CONSISTENCY_CV_SCALE: float = 10.0
REPETITION_POINTS_EACH: float = 2.0
MAX_REPETITION_POINTS: float = 20.0


def recent_accuracy(
    history: Sequence[ReviewEvent],
    window: Optional[int] = None,
    config: Optional[SchedulingConfig] = None,
) -> float:
    """Mean accuracy (0-1) of the last `window` events, 0 with no history."""
    if window is None:
        window = (config or DEFAULT_SCHEDULING_CONFIG).mastery.recent_window
    recent = list(history)[-window:] if window > 0 else []
    if not recent:
        return 0.0
    return sum(clamp(e.observed_accuracy, 0.0, 1.0) for e in recent) / len(recent)


def _session_gaps_days(history: Sequence[ReviewEvent]) -> List[float]:
    stamps = sorted(e.timestamp for e in history if e.timestamp is not None)
    return [
        (later - earlier).total_seconds() / SECONDS_PER_DAY
        for earlier, later in zip(stamps, stamps[1:])
    ]


def consistency_bonus(
    history: Sequence[ReviewEvent],
    config: Optional[SchedulingConfig] = None,
) -> float:
    """Reward regular study: 20 points minus 10x the CV of session gaps.

    Needs at least `min_sessions_for_consistency` timestamped sessions.
    Sessions that all share one instant carry no spacing signal and score 0.
    """
    cfg = (config or DEFAULT_SCHEDULING_CONFIG).mastery
    timestamped = [e for e in history if e.timestamp is not None]
    if len(timestamped) < cfg.min_sessions_for_consistency:
        return 0.0

    gaps = _session_gaps_days(timestamped)
    mean = statistics.fmean(gaps)
    if mean <= 0:
        return 0.0

    cv = statistics.pstdev(gaps) / mean
    return max(0.0, MAX_CONSISTENCY_POINTS - cv * CONSISTENCY_CV_SCALE)


def repetition_bonus(repetitions: int) -> float:
    """Two points per consecutive success, capped at 20."""
    return min(MAX_REPETITION_POINTS, max(0, repetitions) * REPETITION_POINTS_EACH)


def estimate_mastery(
    state: ReviewState,
    history: Sequence[ReviewEvent] = (),
    config: Optional[SchedulingConfig] = None,
) -> int:
    """Estimate how well a learner knows an item.

    Args:
        state: Current review state
        history: Past review events for the item, most recent last
        config: Scheduling thresholds

    Returns:
        Integer mastery in [0, 100]
    """
    cfg = config or DEFAULT_SCHEDULING_CONFIG

    score = (
        state.accuracy * BASE_ACCURACY_POINTS
        + recent_accuracy(history, config=cfg) * RECENT_ACCURACY_POINTS
        + consistency_bonus(history, cfg)
        + repetition_bonus(state.repetitions)
    )
    score *= 1.0 + state.difficulty_adjustments * cfg.mastery.difficulty_adjustment_weight

    return round_half_up(clamp(score, 0, 100))
