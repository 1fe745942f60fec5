"""Modified SM-2 interval algorithm.

Implements the SuperMemo SM-2 update with a personalization layer:

1. EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02)), clamped.
2. Failure (q < 3): repetitions = 0, interval = 1.
   Success: repetitions += 1; interval = 1, then 6, then round(interval * EF').
3. Successful reviews are personalized:
   interval = round(interval * factor * (1 + weight * (accuracy - 0.5))).
4. interval is clamped to [1, max_interval].
5. next_review_date = now + interval days.

Every function takes `now` explicitly and never reads the system clock.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional, Sequence, Union

from reviewforge.core.config.scheduling import (
    DEFAULT_SCHEDULING_CONFIG,
    SchedulingConfig,
)
from reviewforge.core.exceptions import InvalidInputError
from reviewforge.engine.mastery import estimate_mastery
from reviewforge.engine.models import (
    DifficultyDirection,
    ReviewEvent,
    ReviewState,
    ReviewUpdate,
)
from reviewforge.engine.numeric import clamp, round_half_up
from reviewforge.engine.quality import clamp_quality, estimate_quality, is_passing
from reviewforge.engine.review_type import assess_difficulty
from reviewforge.engine.timestamps import parse_timestamp


def update_ease_factor(
    ease_factor: float,
    quality: int,
    config: Optional[SchedulingConfig] = None,
) -> float:
    """Apply the SM-2 ease factor formula and clamp to the configured bounds.

    Examples:
        >>> update_ease_factor(2.5, 4)
        2.5
        >>> round(update_ease_factor(2.5, 3), 2)
        2.36
    """
    cfg = (config or DEFAULT_SCHEDULING_CONFIG).interval
    diff = 5 - quality
    new_ease = ease_factor + (0.1 - diff * (0.08 + diff * 0.02))
    return clamp(new_ease, cfg.min_ease, cfg.max_ease)


def _success_interval(
    repetitions: int,
    prev_interval: int,
    ease_factor: float,
    config: SchedulingConfig,
) -> int:
    if repetitions == 1:
        return config.interval.first_interval
    if repetitions == 2:
        return config.interval.second_interval
    return round_half_up(prev_interval * ease_factor)


def _personalize(
    interval: int,
    factor: float,
    accuracy: Optional[float],
    config: SchedulingConfig,
) -> int:
    scaled = interval * factor
    if accuracy is not None:
        accuracy = clamp(accuracy, 0.0, 1.0)
        scaled *= 1.0 + config.interval.personalization_weight * (accuracy - 0.5)
    return round_half_up(scaled)


def apply_review(
    state: ReviewState,
    review: Union[int, ReviewEvent],
    now: datetime,
    personalization_factor: float = 1.0,
    config: Optional[SchedulingConfig] = None,
) -> ReviewUpdate:
    """Run the interval algorithm for one review.

    Args:
        state: Review state before the attempt
        review: A 0-5 quality score, or a ReviewEvent routed through
            estimate_quality
        now: Reference time; the next review is scheduled relative to it
        personalization_factor: Learner multiplier (see
            compute_personalization_factor)
        config: Scheduling thresholds

    Returns:
        ReviewUpdate with the new ease factor, interval, repetitions,
        next review date and the quality that was applied

    Examples:
        >>> state = ReviewState("u1", "w1", ease_factor=2.5, interval=1, repetitions=1)
        >>> update = apply_review(state, 4, now)
        >>> (update.repetitions, update.interval, update.ease_factor)
        (2, 6, 2.5)
    """
    cfg = config or DEFAULT_SCHEDULING_CONFIG
    now = parse_timestamp(now, "now")

    accuracy: Optional[float] = None
    if isinstance(review, ReviewEvent):
        quality = estimate_quality(review, cfg)
        accuracy = review.accuracy
    elif isinstance(review, bool) or not isinstance(review, (int, float)):
        raise InvalidInputError(
            "review must be a quality score or a ReviewEvent", "review", review
        )
    else:
        quality = clamp_quality(review)

    ease_factor = update_ease_factor(state.ease_factor, quality, cfg)

    if is_passing(quality):
        repetitions = state.repetitions + 1
        interval = _success_interval(repetitions, state.interval, ease_factor, cfg)
        interval = _personalize(interval, personalization_factor, accuracy, cfg)
    else:
        repetitions = 0
        interval = cfg.interval.initial_interval

    interval = int(clamp(interval, 1, cfg.interval.max_interval))

    return ReviewUpdate(
        ease_factor=ease_factor,
        interval=interval,
        repetitions=repetitions,
        next_review_date=now + timedelta(days=interval),
        quality=quality,
    )


def initialize_state(
    user_id: str,
    item_id: str,
    now: datetime,
    config: Optional[SchedulingConfig] = None,
) -> ReviewState:
    """Create the state of an item entering a learner's set."""
    cfg = (config or DEFAULT_SCHEDULING_CONFIG).interval
    now = parse_timestamp(now, "now")
    return ReviewState(
        user_id=user_id,
        item_id=item_id,
        ease_factor=cfg.default_ease,
        interval=cfg.initial_interval,
        repetitions=0,
        next_review_date=now + timedelta(days=cfg.initial_interval),
        created_at=now,
    )


def record_review(
    state: ReviewState,
    event: ReviewEvent,
    now: datetime,
    history: Sequence[ReviewEvent] = (),
    personalization_factor: float = 1.0,
    config: Optional[SchedulingConfig] = None,
) -> ReviewState:
    """Produce the full state after a review.

    Applies the interval algorithm, updates the lifetime counters and the
    running mean latency, records the modality, nets a difficulty
    adjustment when one is recommended and recomputes mastery with the
    event appended to the history.

    Args:
        state: Review state before the attempt
        event: The attempt; its timestamp defaults to now
        now: Reference time
        history: Earlier events for the item, most recent last
        personalization_factor: Learner multiplier
        config: Scheduling thresholds

    Returns:
        The new ReviewState
    """
    cfg = config or DEFAULT_SCHEDULING_CONFIG
    now = parse_timestamp(now, "now")
    if event.timestamp is None:
        event = replace(event, timestamp=now)

    update = apply_review(state, event, now, personalization_factor, cfg)

    review_count = state.review_count + 1
    response_ms = max(0.0, float(event.response_ms))
    average_response_ms = (
        state.average_response_ms * state.review_count + response_ms
    ) / review_count

    modalities = state.learning_modalities
    if event.modality and event.modality not in modalities:
        modalities = modalities + (event.modality,)

    updated = replace(
        state,
        ease_factor=update.ease_factor,
        interval=update.interval,
        repetitions=update.repetitions,
        last_reviewed=event.timestamp,
        next_review_date=update.next_review_date,
        review_count=review_count,
        correct_answers=state.correct_answers + (1 if event.correct else 0),
        average_response_ms=average_response_ms,
        learning_modalities=modalities,
    )

    full_history = list(history) + [event]
    assessment = assess_difficulty(updated, full_history, cfg)
    if assessment.direction is DifficultyDirection.INCREASE:
        updated = replace(updated, difficulty_adjustments=updated.difficulty_adjustments + 1)
    elif assessment.direction is DifficultyDirection.DECREASE:
        updated = replace(updated, difficulty_adjustments=updated.difficulty_adjustments - 1)

    return replace(
        updated, mastery_level=float(estimate_mastery(updated, full_history, cfg))
    )
