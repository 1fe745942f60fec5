"""Quality estimation for a single review attempt.

Turns raw review signals into the 0-5 quality score the SM-2 algorithm
expects. Scores below 3 count as a failed recall.

    quality = round(5 * (0.6 * accuracy
                         + 0.2 * max(0, 1 - response_ms / (2 * optimal_ms))
                         + 0.2 * (6 - difficulty) / 5))
"""

from __future__ import annotations

import math
from typing import Optional

from reviewforge.core.config.scheduling import (
    DEFAULT_SCHEDULING_CONFIG,
    SchedulingConfig,
)
from reviewforge.core.exceptions import InvalidInputError
from reviewforge.engine.models import ReviewEvent
from reviewforge.engine.numeric import clamp, round_half_up

MIN_QUALITY: int = 0
MAX_QUALITY: int = 5
PASSING_QUALITY: int = 3


def is_passing(quality: int) -> bool:
    """SM-2 convention: quality 3 and above is a successful recall."""
    return quality >= PASSING_QUALITY


def clamp_quality(value: float) -> int:
    """Clamp any number into the 0-5 quality range, then round half up."""
    if math.isnan(value):
        raise InvalidInputError("quality must be a number, got NaN", "quality", value)
    return round_half_up(clamp(value, MIN_QUALITY, MAX_QUALITY))


def response_time_score(response_ms: float, optimal_ms: float) -> float:
    """Score latency on 0-1: instant is 1, twice the optimal latency is 0."""
    response_ms = max(0.0, float(response_ms))
    if optimal_ms <= 0:
        return 0.0
    return max(0.0, 1.0 - response_ms / (2.0 * optimal_ms))


def difficulty_score(difficulty: float) -> float:
    """Score subjective difficulty on 0.2-1.0: easy (1) is 1, very hard (5) is 0.2."""
    difficulty = clamp(float(difficulty), 1.0, 5.0)
    return (6.0 - difficulty) / 5.0


def estimate_quality(
    event: ReviewEvent,
    config: Optional[SchedulingConfig] = None,
) -> int:
    """Estimate the 0-5 quality of a review attempt.

    An explicit quality on the event wins over the weighted estimate.
    Out-of-range signals are clamped; hints lower the result by the
    configured penalty.

    Args:
        event: The review attempt
        config: Scheduling thresholds (defaults apply when omitted)

    Returns:
        Integer quality score in [0, 5]

    Raises:
        InvalidInputError: If the event carries no usable signal

    Examples:
        >>> estimate_quality(ReviewEvent(accuracy=1.0, response_ms=0, difficulty=1))
        5
        >>> estimate_quality(ReviewEvent(accuracy=0.0, response_ms=6000, difficulty=5))
        0
    """
    cfg = (config or DEFAULT_SCHEDULING_CONFIG).quality

    if event.quality is not None:
        return clamp_quality(event.quality)

    accuracy = event.accuracy
    if accuracy is None or math.isnan(accuracy) or math.isnan(float(event.response_ms)):
        raise InvalidInputError(
            "Review event has no usable accuracy or latency and no explicit quality",
            "accuracy",
            event.accuracy,
        )
    accuracy = clamp(accuracy, 0.0, 1.0)

    weighted = (
        accuracy * cfg.accuracy_weight
        + response_time_score(event.response_ms, cfg.optimal_response_ms)
        * cfg.response_time_weight
        + difficulty_score(event.difficulty) * cfg.difficulty_weight
    )
    quality = clamp_quality(weighted * MAX_QUALITY)

    if event.hints_used:
        quality = max(MIN_QUALITY, quality - cfg.hint_penalty)

    return quality
