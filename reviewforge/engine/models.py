"""Data model for the scheduling engine.

ReviewState is the per (user, item) memory state. It is created when an item
enters a learner's set, replaced after every review by the interval
algorithm, and persisted by an external store. ReviewEvent is one review
attempt; ReviewSchedule is a planned review produced by batch scheduling.

All dataclasses are frozen: engine functions return new values instead of
mutating their inputs. Timestamps given as ISO-8601 strings or epoch numbers
are normalized to aware UTC datetimes on construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Tuple

from reviewforge.core.exceptions import InvalidInputError
from reviewforge.engine.timestamps import parse_optional_timestamp, parse_timestamp


class ReviewType(str, Enum):
    """Kind of review a queued item should receive."""

    SPACED_REPETITION = "spaced_repetition"
    DIFFICULTY_ADJUSTMENT = "difficulty_adjustment"
    MASTERY_CHECK = "mastery_check"

    @classmethod
    def parse(cls, value: Any) -> "ReviewType":
        """Accept an enum member or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError as e:
            raise InvalidInputError(
                f"Unknown review type: {value!r}", "review_type", value
            ) from e


class DifficultyDirection(str, Enum):
    """Recommended change to an item's difficulty."""

    INCREASE = "increase"
    DECREASE = "decrease"
    MAINTAIN = "maintain"


def _set(obj: Any, name: str, value: Any) -> None:
    object.__setattr__(obj, name, value)


def _require_id(value: Any, field_name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{field_name} is required", field_name, value)


@dataclass(frozen=True)
class ReviewState:
    """Memory state of one item for one learner.

    Attributes:
        user_id: Learner identifier
        item_id: Item (word) identifier
        ease_factor: SM-2 ease factor, kept within the configured bounds
        interval: Days until the next review
        repetitions: Consecutive successful reviews since the last failure
        mastery_level: Derived 0-100 score, recomputed from history
        last_reviewed: Timestamp of the most recent review
        next_review_date: Timestamp when the item becomes due
        review_count: Lifetime number of reviews
        correct_answers: Lifetime number of correct reviews
        difficulty_adjustments: Net difficulty changes (+ harder, - easier)
        average_response_ms: Running mean response latency
        learning_modalities: Modalities the item has been studied in
        created_at: When the item entered the learner's set
    """

    user_id: str
    item_id: str
    ease_factor: float = 2.5
    interval: int = 1
    repetitions: int = 0
    mastery_level: float = 0.0
    last_reviewed: Optional[datetime] = None
    next_review_date: Optional[datetime] = None
    review_count: int = 0
    correct_answers: int = 0
    difficulty_adjustments: int = 0
    average_response_ms: float = 0.0
    learning_modalities: Tuple[str, ...] = ()
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        _require_id(self.user_id, "user_id")
        _require_id(self.item_id, "item_id")

        for name in ("review_count", "correct_answers", "repetitions"):
            if getattr(self, name) < 0:
                raise InvalidInputError(
                    f"{name} must not be negative", name, getattr(self, name)
                )
        if self.correct_answers > self.review_count:
            raise InvalidInputError(
                f"correct_answers ({self.correct_answers}) exceeds "
                f"review_count ({self.review_count})",
                "correct_answers",
                self.correct_answers,
            )

        _set(self, "last_reviewed", parse_optional_timestamp(self.last_reviewed, "last_reviewed"))
        _set(
            self,
            "next_review_date",
            parse_optional_timestamp(self.next_review_date, "next_review_date"),
        )
        _set(self, "created_at", parse_optional_timestamp(self.created_at, "created_at"))
        _set(self, "learning_modalities", tuple(self.learning_modalities))

    @property
    def accuracy(self) -> float:
        """Lifetime accuracy (0-1), zero before the first review."""
        return self.correct_answers / max(1, self.review_count)


@dataclass(frozen=True)
class ReviewEvent:
    """One review attempt.

    Attributes:
        accuracy: Fraction correct (0-1); a bool is read as 0 or 1. May be
            omitted when an explicit quality is given
        response_ms: Response latency in milliseconds
        difficulty: Subjective difficulty, 1 (easy) to 5 (very hard)
        timestamp: When the attempt happened
        is_correct: Whether the attempt counts as correct; derived from
            accuracy >= 0.5 when omitted
        modality: Study modality used (e.g. "audio", "visual")
        hints_used: Whether hints were revealed
        quality: Explicit 0-5 quality that bypasses estimation
    """

    accuracy: Optional[float] = None
    response_ms: float = 0.0
    difficulty: int = 3
    timestamp: Optional[datetime] = None
    is_correct: Optional[bool] = None
    modality: Optional[str] = None
    hints_used: bool = False
    quality: Optional[int] = None

    def __post_init__(self) -> None:
        if self.accuracy is not None:
            _set(self, "accuracy", float(self.accuracy))
        if self.accuracy is None and self.quality is None:
            raise InvalidInputError(
                "A review event needs an accuracy or an explicit quality",
                "accuracy",
                None,
            )
        _set(self, "timestamp", parse_optional_timestamp(self.timestamp, "timestamp"))

    @property
    def correct(self) -> bool:
        """Whether this attempt counts toward correct_answers."""
        if self.is_correct is not None:
            return bool(self.is_correct)
        if self.accuracy is not None:
            return self.accuracy >= 0.5
        return self.quality >= 3

    @property
    def observed_accuracy(self) -> float:
        """Accuracy signal, falling back to quality / 5 when only a quality was given."""
        if self.accuracy is not None:
            return self.accuracy
        return max(0.0, min(5.0, float(self.quality))) / 5.0


@dataclass(frozen=True)
class SessionRecord:
    """A review event archived by the session-history store."""

    user_id: str
    item_id: str
    event: ReviewEvent

    def __post_init__(self) -> None:
        _require_id(self.user_id, "user_id")
        _require_id(self.item_id, "item_id")
        if self.event.timestamp is None:
            raise InvalidInputError(
                "Archived review events need a timestamp", "timestamp", None
            )


@dataclass(frozen=True)
class ReviewUpdate:
    """Result of the interval algorithm for one review."""

    ease_factor: float
    interval: int
    repetitions: int
    next_review_date: datetime
    quality: int


@dataclass(frozen=True)
class ReviewSchedule:
    """A planned review.

    Only the load distributor revises scheduled_date and priority.
    """

    user_id: str
    item_id: str
    scheduled_date: datetime
    priority: int
    review_type: ReviewType = ReviewType.SPACED_REPETITION
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        _require_id(self.user_id, "user_id")
        _require_id(self.item_id, "item_id")
        _set(self, "scheduled_date", parse_timestamp(self.scheduled_date, "scheduled_date"))
        _set(self, "created_at", parse_optional_timestamp(self.created_at, "created_at"))
        _set(self, "review_type", ReviewType.parse(self.review_type))


@dataclass(frozen=True)
class QueueItem:
    """One entry of a ranked review queue."""

    item_id: str
    priority: int
    review_type: ReviewType
    days_since_last_review: int
    scheduled_date: datetime
    mastery_level: float = 0.0


@dataclass(frozen=True)
class UserStats:
    """Learner-level statistics consumed by the notification advisor.

    Attributes:
        user_id: Learner identifier
        current_streak: Consecutive study days ending today
        longest_streak: Best streak so far
        total_items_learned: Items in the learner's set
        average_accuracy: Lifetime accuracy (0-1)
        items_reviewed_today: Reviews completed today
        last_study_date: Timestamp of the last study session
        study_goal: Items per day the learner aims for
    """

    user_id: str
    current_streak: int = 0
    longest_streak: int = 0
    total_items_learned: int = 0
    average_accuracy: float = 0.0
    items_reviewed_today: int = 0
    last_study_date: Optional[datetime] = None
    study_goal: int = 20
    preferred_modalities: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        _set(
            self,
            "last_study_date",
            parse_optional_timestamp(self.last_study_date, "last_study_date"),
        )
        _set(self, "preferred_modalities", tuple(self.preferred_modalities))
