"""Spaced-repetition scheduling engine.

Pure, synchronous functions over explicit inputs. Nothing here reads the
clock, touches storage or logs; callers pass `now` and a SchedulingConfig.

- models: ReviewState, ReviewEvent, ReviewSchedule and friends
- quality: review signals -> 0-5 quality score
- scheduler: modified SM-2 interval algorithm
- personalization: per-learner interval multiplier
- mastery: 0-100 mastery estimate
- review_type: review-type classifier and difficulty assessment
- priority: 1-10 urgency score
- queue: review queue builder and batch scheduling
- distribution: daily load cap
- notifications: reminder timing, frequency and content
- streak: study streak counter
"""

from __future__ import annotations

from reviewforge.engine.models import (
    DifficultyDirection,
    QueueItem,
    ReviewEvent,
    ReviewSchedule,
    ReviewState,
    ReviewType,
    ReviewUpdate,
    SessionRecord,
    UserStats,
)

from reviewforge.engine.quality import (
    estimate_quality,
    is_passing,
)

from reviewforge.engine.scheduler import (
    apply_review,
    initialize_state,
    record_review,
    update_ease_factor,
)

from reviewforge.engine.personalization import compute_personalization_factor

from reviewforge.engine.mastery import (
    consistency_bonus,
    estimate_mastery,
    recent_accuracy,
)

from reviewforge.engine.review_type import (
    DifficultyAssessment,
    assess_difficulty,
    classify_review_type,
    quality_trend,
)

from reviewforge.engine.priority import compute_priority

from reviewforge.engine.queue import (
    batch_schedule,
    build_queue,
    recommended_session_size,
    schedule_review,
)

from reviewforge.engine.distribution import distribute_load

from reviewforge.engine.notifications import (
    NotificationAdvice,
    NotificationContent,
    NotificationFrequency,
    NotificationTime,
    PreferenceTier,
    ReminderPlan,
    advise_notification,
    is_appropriate_time,
    notification_content,
    notification_frequency,
    optimal_notification_time,
    plan_due_reminder,
)

from reviewforge.engine.streak import calculate_streak, longest_streak

__all__ = [
    # Models
    "DifficultyDirection",
    "QueueItem",
    "ReviewEvent",
    "ReviewSchedule",
    "ReviewState",
    "ReviewType",
    "ReviewUpdate",
    "SessionRecord",
    "UserStats",
    # Quality
    "estimate_quality",
    "is_passing",
    # Interval algorithm
    "apply_review",
    "initialize_state",
    "record_review",
    "update_ease_factor",
    # Personalization
    "compute_personalization_factor",
    # Mastery
    "consistency_bonus",
    "estimate_mastery",
    "recent_accuracy",
    # Review type
    "DifficultyAssessment",
    "assess_difficulty",
    "classify_review_type",
    "quality_trend",
    # Priority and queue
    "compute_priority",
    "batch_schedule",
    "build_queue",
    "recommended_session_size",
    "schedule_review",
    # Load distribution
    "distribute_load",
    # Notifications
    "NotificationAdvice",
    "NotificationContent",
    "NotificationFrequency",
    "NotificationTime",
    "PreferenceTier",
    "ReminderPlan",
    "advise_notification",
    "is_appropriate_time",
    "notification_content",
    "notification_frequency",
    "optimal_notification_time",
    "plan_due_reminder",
    # Streak
    "calculate_streak",
    "longest_streak",
]
