"""
Scheduling engine configuration.

Every numeric threshold the engine uses lives here. Engine functions take a
SchedulingConfig explicitly (defaulting to DEFAULT_SCHEDULING_CONFIG), so the
engine has no hidden shared state and tests can vary a single threshold.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class IntervalConfig:
    """SM-2 interval and ease factor bounds."""

    initial_interval: int = 1
    max_interval: int = 180  # ~6 months
    min_ease: float = 1.3
    max_ease: float = 2.5
    default_ease: float = 2.5
    first_interval: int = 1
    second_interval: int = 6
    personalization_weight: float = 0.3


@dataclass(frozen=True)
class QualityConfig:
    """Weights for turning raw review signals into a 0-5 quality score."""

    accuracy_weight: float = 0.6
    response_time_weight: float = 0.2
    difficulty_weight: float = 0.2
    optimal_response_ms: float = 3000.0
    hint_penalty: int = 1


@dataclass(frozen=True)
class MasteryConfig:
    """Mastery estimation settings."""

    recent_window: int = 5
    min_sessions_for_consistency: int = 3
    difficulty_adjustment_weight: float = 0.1
    mastery_threshold: float = 80.0


@dataclass(frozen=True)
class PriorityConfig:
    """Review urgency scoring (1-10)."""

    base: float = 5.0
    overdue_step: float = 0.5  # points per overdue day
    overdue_cap: float = 3.0
    low_mastery: float = 50.0
    low_mastery_bonus: float = 2.0
    very_low_mastery: float = 30.0
    very_low_mastery_bonus: float = 3.0
    poor_accuracy: float = 0.6
    poor_accuracy_bonus: float = 1.0
    mastered_penalty: float = 1.0


@dataclass(frozen=True)
class ReviewTypeConfig:
    """Thresholds for the difficulty-adjustment and mastery-check triggers."""

    difficulty_threshold: float = 0.6
    easy_accuracy: float = 0.9
    fast_response_ms: float = 2000.0
    min_repetitions_for_increase: int = 3
    min_reviews_for_decrease: int = 5
    mastery_check_repetitions: int = 5
    trend_window: int = 10
    trend_min_reviews: int = 5
    trend_increase_quality: float = 4.5
    trend_decrease_quality: float = 3.0


@dataclass(frozen=True)
class PersonalizationConfig:
    """User-level interval multiplier settings."""

    high_accuracy: float = 0.8
    high_accuracy_multiplier: float = 1.2
    low_accuracy: float = 0.6
    low_accuracy_multiplier: float = 0.8
    fast_response_ms: float = 3000.0
    fast_response_multiplier: float = 1.1
    slow_response_ms: float = 8000.0
    slow_response_multiplier: float = 0.9
    preferred_modality_multiplier: float = 1.15
    min_factor: float = 0.5
    max_factor: float = 2.0


@dataclass(frozen=True)
class QueueConfig:
    """Review queue and session sizing."""

    default_limit: int = 50
    include_overdue: bool = True
    preferred_session_size: int = 20
    session_minutes: float = 30.0
    minutes_per_item: float = 1.5
    min_session_size: int = 5
    max_session_size: int = 50


@dataclass(frozen=True)
class DistributionConfig:
    """Daily review load cap."""

    max_per_day: int = 30


@dataclass(frozen=True)
class NotificationConfig:
    """Notification timing and frequency heuristics."""

    quiet_hours_start: int = 22  # 10 PM
    quiet_hours_end: int = 7  # 7 AM
    default_hour: int = 9
    default_minute: int = 0
    morning_start_hour: int = 6
    morning_end_hour: int = 12
    afternoon_end_hour: int = 18
    afternoon_hour: int = 9
    evening_hour: int = 19
    busy_queue: int = 20
    light_queue: int = 5
    reminder_queue: int = 10
    max_daily: int = 4
    min_interval_hours: int = 6
    max_interval_hours: int = 24
    urgent_reminder_count: int = 20
    streak_great_days: int = 3
    streak_amazing_days: int = 7


@dataclass(frozen=True)
class SchedulingConfig:
    """All thresholds consumed by reviewforge.engine."""

    interval: IntervalConfig = field(default_factory=IntervalConfig)
    quality: QualityConfig = field(default_factory=QualityConfig)
    mastery: MasteryConfig = field(default_factory=MasteryConfig)
    priority: PriorityConfig = field(default_factory=PriorityConfig)
    review_type: ReviewTypeConfig = field(default_factory=ReviewTypeConfig)
    personalization: PersonalizationConfig = field(
        default_factory=PersonalizationConfig
    )
    queue: QueueConfig = field(default_factory=QueueConfig)
    distribution: DistributionConfig = field(default_factory=DistributionConfig)
    notification: NotificationConfig = field(default_factory=NotificationConfig)


DEFAULT_SCHEDULING_CONFIG = SchedulingConfig()
