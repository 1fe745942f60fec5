"""
Review service: fetch state, run the engine, write back.

ReviewService is the seam between the pure scheduling engine and the
outside world. It owns the reference to the stores, the configuration and
the optional cache; the engine functions it calls receive everything
explicitly.

Usage
-----
    states, history = get_stores(config)
    service = ReviewService(states, history, config.scheduling)

    service.enroll("u1", "kitab", now)
    service.submit_review("u1", "kitab", ReviewEvent(accuracy=1.0, response_ms=1800), now)
    queue = service.review_queue("u1", now)
"""

from collections import defaultdict
from dataclasses import replace
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from reviewforge.core.cache import Cache
from reviewforge.core.config.scheduling import (
    DEFAULT_SCHEDULING_CONFIG,
    SchedulingConfig,
)
from reviewforge.core.logging import get_logger
from reviewforge.engine import (
    NotificationAdvice,
    PreferenceTier,
    QueueItem,
    ReminderPlan,
    ReviewEvent,
    ReviewSchedule,
    ReviewState,
    SessionRecord,
    UserStats,
    advise_notification,
    batch_schedule,
    build_queue,
    calculate_streak,
    compute_personalization_factor,
    distribute_load,
    initialize_state,
    longest_streak,
    plan_due_reminder,
    record_review,
)
from reviewforge.engine.timestamps import calendar_day, parse_timestamp
from reviewforge.storage.base import ItemStateStore, SessionHistoryStore

logger = get_logger(__name__)

PERSONALIZATION_TTL_SECONDS = 15 * 60


class ReviewService:
    """
    Orchestrates review operations for learners.

    Attributes:
        states: Review state store
        history: Session history store
        config: Scheduling thresholds passed to every engine call
        cache: Optional cache for personalization factors
    """

    def __init__(
        self,
        states: ItemStateStore,
        history: SessionHistoryStore,
        config: Optional[SchedulingConfig] = None,
        cache: Optional[Cache] = None,
    ) -> None:
        self.states = states
        self.history = history
        self.config = config or DEFAULT_SCHEDULING_CONFIG
        self.cache = cache

    def enroll(self, user_id: str, item_id: str, now: datetime) -> ReviewState:
        """Add an item to a learner's set. Existing items are left untouched."""
        existing = self.states.get(user_id, item_id)
        if existing is not None:
            logger.debug("Item already enrolled", user_id=user_id, item_id=item_id)
            return existing

        state = initialize_state(user_id, item_id, now, self.config)
        self.states.put(state)
        logger.info("Enrolled item", user_id=user_id, item_id=item_id)
        return state

    def _performance(self, user_id: str) -> Tuple[float, float]:
        """Pooled (accuracy, mean response ms) over the learner's items."""
        key = f"personalization:{user_id}"
        if self.cache is not None:
            cached = self.cache.get(key)
            if cached is not None:
                return cached

        states = self.states.list_for_user(user_id)
        reviews = sum(s.review_count for s in states)
        correct = sum(s.correct_answers for s in states)
        accuracy = correct / reviews if reviews else 0.0
        avg_response_ms = (
            sum(s.average_response_ms * s.review_count for s in states) / reviews
            if reviews
            else 0.0
        )

        performance = (accuracy, avg_response_ms)
        if self.cache is not None:
            self.cache.set(key, performance, ttl_seconds=PERSONALIZATION_TTL_SECONDS)
        return performance

    def personalization_factor(
        self,
        user_id: str,
        session_modality: Optional[str] = None,
        preferred_modalities: Sequence[str] = (),
    ) -> float:
        """Learner multiplier from performance across all of their items."""
        accuracy, avg_response_ms = self._performance(user_id)
        return compute_personalization_factor(
            accuracy,
            avg_response_ms,
            preferred_modalities,
            session_modality,
            self.config,
        )

    def submit_review(
        self,
        user_id: str,
        item_id: str,
        event: ReviewEvent,
        now: datetime,
        user_profile: Optional[UserStats] = None,
    ) -> ReviewState:
        """
        Record one review attempt.

        Args:
            user_id: Learner identifier
            item_id: Item identifier
            event: The attempt; its timestamp defaults to now
            now: Reference time
            user_profile: Learner preferences (modalities) for personalization

        Returns:
            The stored, updated ReviewState

        Raises:
            RecordNotFoundError: If the item is not enrolled
            InvalidInputError: If the event cannot be interpreted
            StorageError: If the event cannot be archived; the stored state
                is left unchanged
        """
        now = parse_timestamp(now, "now")
        state = self.states.require(user_id, item_id)
        if event.timestamp is None:
            event = replace(event, timestamp=now)

        preferred = user_profile.preferred_modalities if user_profile else ()
        factor = self.personalization_factor(user_id, event.modality, preferred)

        updated = record_review(
            state,
            event,
            now,
            history=self.history.events_for(user_id, item_id),
            personalization_factor=factor,
            config=self.config,
        )
        self.history.append(SessionRecord(user_id=user_id, item_id=item_id, event=event))
        self.states.put(updated)

        if self.cache is not None:
            self.cache.delete(f"personalization:{user_id}")

        logger.info(
            "Recorded review",
            user_id=user_id,
            item_id=item_id,
            interval=updated.interval,
            repetitions=updated.repetitions,
            mastery=updated.mastery_level,
        )
        return updated

    def _history_by_item(self, user_id: str) -> Dict[str, List[ReviewEvent]]:
        grouped: Dict[str, List[ReviewEvent]] = defaultdict(list)
        for record in self.history.query(user_id):
            grouped[record.item_id].append(record.event)
        return grouped

    def review_queue(
        self,
        user_id: str,
        now: datetime,
        limit: Optional[int] = None,
        include_overdue: Optional[bool] = None,
    ) -> List[QueueItem]:
        """Ranked list of items due for review."""
        queue = build_queue(
            self.states.list_for_user(user_id),
            now,
            limit=limit,
            include_overdue=include_overdue,
            history=self._history_by_item(user_id),
            config=self.config,
        )
        logger.debug("Built review queue", user_id=user_id, size=len(queue))
        return queue

    def schedule_reviews(
        self,
        user_id: str,
        now: datetime,
        max_per_day: Optional[int] = None,
    ) -> List[ReviewSchedule]:
        """Plan every item's next review and spread them under the daily cap."""
        schedules = batch_schedule(
            user_id,
            self.states.list_for_user(user_id),
            now,
            history=self._history_by_item(user_id),
            config=self.config,
        )
        distributed = distribute_load(schedules, max_per_day, self.config)

        postponed = sum(
            1
            for before, after in zip(schedules, distributed)
            if before.scheduled_date != after.scheduled_date
        )
        logger.info(
            "Scheduled reviews",
            user_id=user_id,
            total=len(distributed),
            postponed=postponed,
        )
        return distributed

    def user_stats(
        self,
        user_id: str,
        now: datetime,
        preferred_modalities: Iterable[str] = (),
        study_goal: Optional[int] = None,
    ) -> UserStats:
        """Derive learner statistics from stored states and history."""
        now = parse_timestamp(now, "now")
        states = self.states.list_for_user(user_id)
        stamps = [r.event.timestamp for r in self.history.query(user_id)]

        reviews = sum(s.review_count for s in states)
        correct = sum(s.correct_answers for s in states)
        today = calendar_day(now)

        return UserStats(
            user_id=user_id,
            current_streak=calculate_streak(stamps, now),
            longest_streak=longest_streak(stamps),
            total_items_learned=len(states),
            average_accuracy=correct / reviews if reviews else 0.0,
            items_reviewed_today=sum(1 for t in stamps if calendar_day(t) == today),
            last_study_date=max(stamps) if stamps else None,
            study_goal=study_goal or self.config.queue.preferred_session_size,
            preferred_modalities=tuple(preferred_modalities),
        )

    def notification_advice(
        self,
        user_id: str,
        now: datetime,
        preference: Union[PreferenceTier, str] = PreferenceTier.MEDIUM,
        user_stats: Optional[UserStats] = None,
    ) -> NotificationAdvice:
        """Reminder timing, frequency and content for a learner right now."""
        stats = user_stats or self.user_stats(user_id, now)
        queue = self.review_queue(user_id, now)
        return advise_notification(queue, stats, now, preference, self.config)

    def due_reminder(
        self,
        user_id: str,
        now: datetime,
        user_stats: Optional[UserStats] = None,
    ) -> ReminderPlan:
        """Plan tomorrow's reminder for items falling due within a day."""
        stats = user_stats or self.user_stats(user_id, now)
        return plan_due_reminder(
            self.states.list_for_user(user_id), stats, now, self.config
        )
