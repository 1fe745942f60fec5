"""Review queue building and batch scheduling.

Selects the items that are due at a reference time, ranks them by priority
(highest first, earliest due date breaking ties) and truncates the result
to the session size.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Iterable, List, Mapping, Optional, Sequence

from reviewforge.core.config.scheduling import (
    DEFAULT_SCHEDULING_CONFIG,
    SchedulingConfig,
)
from reviewforge.core.exceptions import InvalidInputError
from reviewforge.engine.models import QueueItem, ReviewEvent, ReviewSchedule, ReviewState
from reviewforge.engine.numeric import clamp
from reviewforge.engine.priority import compute_priority, days_since_last_review
from reviewforge.engine.review_type import classify_review_type
from reviewforge.engine.timestamps import calendar_day, parse_timestamp

History = Mapping[str, Sequence[ReviewEvent]]


def scheduled_for(state: ReviewState, now: datetime) -> datetime:
    """When the item is due; items without a date are due immediately."""
    return state.next_review_date if state.next_review_date is not None else now


def is_due(state: ReviewState, now: datetime, include_overdue: bool = True) -> bool:
    """Check whether an item belongs in the queue at `now`.

    With include_overdue=False only items falling due today qualify; items
    whose due date lies on an earlier calendar day are left out.
    """
    due_at = scheduled_for(state, now)
    if due_at > now:
        return False
    if include_overdue:
        return True
    return calendar_day(due_at) == calendar_day(now)


def _item_history(history: Optional[History], item_id: str) -> Sequence[ReviewEvent]:
    if not history:
        return ()
    return history.get(item_id, ())


def build_queue(
    states: Iterable[ReviewState],
    now: datetime,
    limit: Optional[int] = None,
    include_overdue: Optional[bool] = None,
    history: Optional[History] = None,
    config: Optional[SchedulingConfig] = None,
) -> List[QueueItem]:
    """Build the ranked review queue for a learner.

    Args:
        states: Review states of the learner's items
        now: Reference time
        limit: Maximum queue length (defaults to the configured limit)
        include_overdue: Whether items due on earlier days are included
        history: Past review events per item id, most recent last
        config: Scheduling thresholds

    Returns:
        At most `limit` queue items, priority descending, due date ascending
    """
    cfg = config or DEFAULT_SCHEDULING_CONFIG
    now = parse_timestamp(now, "now")
    if limit is None:
        limit = cfg.queue.default_limit
    if include_overdue is None:
        include_overdue = cfg.queue.include_overdue
    if limit <= 0:
        return []

    queue: List[QueueItem] = []
    for state in states:
        if not is_due(state, now, include_overdue):
            continue
        events = _item_history(history, state.item_id)
        queue.append(
            QueueItem(
                item_id=state.item_id,
                priority=compute_priority(state, now, cfg),
                review_type=classify_review_type(state, events, cfg),
                days_since_last_review=days_since_last_review(state, now),
                scheduled_date=scheduled_for(state, now),
                mastery_level=state.mastery_level,
            )
        )

    queue.sort(key=lambda q: (-q.priority, q.scheduled_date, q.item_id))
    return queue[:limit]


def recommended_session_size(
    available: int,
    preferred_size: Optional[int] = None,
    session_minutes: Optional[float] = None,
    config: Optional[SchedulingConfig] = None,
) -> int:
    """Suggest how many items to review in one sitting.

    The smallest of the available items, the preferred size and what fits
    in the session at the configured minutes per item, clamped to the
    configured session bounds.
    """
    cfg = (config or DEFAULT_SCHEDULING_CONFIG).queue
    if preferred_size is None:
        preferred_size = cfg.preferred_session_size
    if session_minutes is None:
        session_minutes = cfg.session_minutes

    fits_in_time = math.floor(session_minutes / cfg.minutes_per_item)
    size = min(max(0, available), preferred_size, fits_in_time)
    return int(clamp(size, cfg.min_session_size, cfg.max_session_size))


def schedule_review(
    state: ReviewState,
    now: datetime,
    history: Sequence[ReviewEvent] = (),
    config: Optional[SchedulingConfig] = None,
) -> ReviewSchedule:
    """Create the planned review for one item."""
    cfg = config or DEFAULT_SCHEDULING_CONFIG
    now = parse_timestamp(now, "now")
    return ReviewSchedule(
        user_id=state.user_id,
        item_id=state.item_id,
        scheduled_date=scheduled_for(state, now),
        priority=compute_priority(state, now, cfg),
        review_type=classify_review_type(state, history, cfg),
        created_at=now,
    )


def batch_schedule(
    user_id: str,
    states: Iterable[ReviewState],
    now: datetime,
    history: Optional[History] = None,
    config: Optional[SchedulingConfig] = None,
) -> List[ReviewSchedule]:
    """Create planned reviews for every item of one learner.

    Raises:
        InvalidInputError: If a state belongs to a different learner
    """
    schedules = []
    for state in states:
        if state.user_id != user_id:
            raise InvalidInputError(
                f"State for item {state.item_id} belongs to {state.user_id}, "
                f"not {user_id}",
                "user_id",
                state.user_id,
            )
        events = _item_history(history, state.item_id)
        schedules.append(schedule_review(state, now, events, config))
    return schedules
