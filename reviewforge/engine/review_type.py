"""Review-type classification and difficulty assessment.

Classification is recomputed on every scheduling decision; nothing about it
is persisted:

    mastery > threshold and repetitions >= 5   -> mastery_check
    difficulty trigger fires                   -> difficulty_adjustment
    otherwise                                  -> spaced_repetition
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from reviewforge.core.config.scheduling import (
    DEFAULT_SCHEDULING_CONFIG,
    SchedulingConfig,
)
from reviewforge.engine.mastery import recent_accuracy
from reviewforge.engine.models import (
    DifficultyDirection,
    ReviewEvent,
    ReviewState,
    ReviewType,
)


@dataclass(frozen=True)
class DifficultyAssessment:
    """Whether an item's difficulty should change, and which way."""

    should_adjust: bool
    direction: DifficultyDirection
    reason: str


_MAINTAIN = DifficultyAssessment(
    should_adjust=False,
    direction=DifficultyDirection.MAINTAIN,
    reason="Current difficulty level is appropriate",
)


def assess_difficulty(
    state: ReviewState,
    history: Sequence[ReviewEvent],
    config: Optional[SchedulingConfig] = None,
) -> DifficultyAssessment:
    """Decide whether the item is too easy or too hard for the learner.

    Without any history there is nothing to judge, so difficulty is kept.
    """
    root = config or DEFAULT_SCHEDULING_CONFIG
    cfg = root.review_type
    if not history:
        return _MAINTAIN

    accuracy = recent_accuracy(history, root.mastery.recent_window)
    mean_response_ms = sum(max(0.0, e.response_ms) for e in history) / len(history)

    if (
        accuracy > cfg.easy_accuracy
        and mean_response_ms < cfg.fast_response_ms
        and state.repetitions >= cfg.min_repetitions_for_increase
    ):
        return DifficultyAssessment(
            should_adjust=True,
            direction=DifficultyDirection.INCREASE,
            reason="High accuracy and fast response times indicate the item may be too easy",
        )

    if (
        accuracy < cfg.difficulty_threshold
        and state.review_count >= cfg.min_reviews_for_decrease
    ):
        return DifficultyAssessment(
            should_adjust=True,
            direction=DifficultyDirection.DECREASE,
            reason="Low accuracy indicates the item may be too difficult",
        )

    return _MAINTAIN


def classify_review_type(
    state: ReviewState,
    history: Sequence[ReviewEvent] = (),
    config: Optional[SchedulingConfig] = None,
) -> ReviewType:
    """Pick the kind of review an item should get next."""
    cfg = config or DEFAULT_SCHEDULING_CONFIG

    if (
        state.mastery_level > cfg.mastery.mastery_threshold
        and state.repetitions >= cfg.review_type.mastery_check_repetitions
    ):
        return ReviewType.MASTERY_CHECK

    if assess_difficulty(state, history, cfg).should_adjust:
        return ReviewType.DIFFICULTY_ADJUSTMENT

    return ReviewType.SPACED_REPETITION


def quality_trend(
    qualities: Sequence[int],
    config: Optional[SchedulingConfig] = None,
) -> DifficultyDirection:
    """Suggest a difficulty change from the trend of recent quality scores.

    Looks at the last `trend_window` scores and needs at least
    `trend_min_reviews` of them.

    Examples:
        >>> quality_trend([5, 5, 4, 5, 5])
        <DifficultyDirection.INCREASE: 'increase'>
        >>> quality_trend([2, 1, 3])
        <DifficultyDirection.MAINTAIN: 'maintain'>
    """
    cfg = (config or DEFAULT_SCHEDULING_CONFIG).review_type
    recent = list(qualities)[-cfg.trend_window:]
    if len(recent) < cfg.trend_min_reviews:
        return DifficultyDirection.MAINTAIN

    mean = sum(recent) / len(recent)
    if mean >= cfg.trend_increase_quality:
        return DifficultyDirection.INCREASE
    if mean < cfg.trend_decrease_quality:
        return DifficultyDirection.DECREASE
    return DifficultyDirection.MAINTAIN
