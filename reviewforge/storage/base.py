"""
Base Interfaces for Storage Backends.

The scheduling engine never reads or writes storage itself. Callers fetch a
ReviewState, run the engine and write the result back through these
interfaces, so backends can be swapped (JSONL, in-memory, a database)
without touching the engine.

Architecture Context
--------------------
    ┌─────────────────┐     ┌─────────────────┐
    │  ReviewService  │     │       CLI       │
    └────────┬────────┘     └────────┬────────┘
             └───────────┬───────────┘
                         │
        ┌────────────────┴────────────────┐
        │ ItemStateStore / SessionHistory │
        │         (abstract base)         │
        └────────────────┬────────────────┘
                 ┌───────┴───────┐
                 ↓               ↓
            ┌─────────┐     ┌─────────┐
            │  JSONL  │     │ Memory  │
            └─────────┘     └─────────┘

Key Data Structures
-------------------
**ReviewState**
    Per (user, item) memory state. Keyed by (user_id, item_id).

**SessionRecord**
    One archived review event. Queried by user, optionally by item and a
    [start, end) time range.
"""

from abc import ABC, abstractmethod
from dataclasses import fields, replace
from datetime import datetime
from typing import Any, List, Optional

from reviewforge.core.exceptions import InvalidInputError, RecordNotFoundError
from reviewforge.engine.models import ReviewEvent, ReviewState, SessionRecord

_KEY_FIELDS = frozenset(["user_id", "item_id"])
_STATE_FIELDS = frozenset(f.name for f in fields(ReviewState))


class ItemStateStore(ABC):
    """Store of ReviewState keyed by (user_id, item_id)."""

    @abstractmethod
    def get(self, user_id: str, item_id: str) -> Optional[ReviewState]:
        """Return the state, or None if the item is not in the learner's set."""
        pass

    @abstractmethod
    def put(self, state: ReviewState) -> None:
        """Insert or replace a state."""
        pass

    @abstractmethod
    def list_for_user(self, user_id: str) -> List[ReviewState]:
        """Return every state of one learner, ordered by item_id."""
        pass

    def require(self, user_id: str, item_id: str) -> ReviewState:
        """Like get(), but raises RecordNotFoundError for unknown keys."""
        state = self.get(user_id, item_id)
        if state is None:
            raise RecordNotFoundError(user_id, item_id)
        return state

    def update(self, user_id: str, item_id: str, **changes: Any) -> ReviewState:
        """Apply field changes to an existing state and store the result.

        Raises:
            RecordNotFoundError: If no state exists for the key
            InvalidInputError: If a change names an unknown or key field
        """
        unknown = set(changes) - _STATE_FIELDS
        if unknown or _KEY_FIELDS & set(changes):
            bad = sorted(unknown | (_KEY_FIELDS & set(changes)))
            raise InvalidInputError(
                f"Cannot update field(s): {', '.join(bad)}", "changes", bad
            )
        state = replace(self.require(user_id, item_id), **changes)
        self.put(state)
        return state


class SessionHistoryStore(ABC):
    """Append-only log of review events."""

    @abstractmethod
    def append(self, record: SessionRecord) -> None:
        """Archive one review event."""
        pass

    @abstractmethod
    def query(
        self,
        user_id: str,
        item_id: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[SessionRecord]:
        """Return matching records oldest first.

        Args:
            user_id: Learner to query
            item_id: Restrict to one item
            start: Inclusive lower bound on the event timestamp
            end: Exclusive upper bound on the event timestamp
        """
        pass

    def events_for(self, user_id: str, item_id: str) -> List[ReviewEvent]:
        """Review events of one item, oldest first."""
        return [r.event for r in self.query(user_id, item_id=item_id)]


def in_range(
    timestamp: datetime, start: Optional[datetime], end: Optional[datetime]
) -> bool:
    """Check timestamp against an inclusive start and exclusive end."""
    if start is not None and timestamp < start:
        return False
    if end is not None and timestamp >= end:
        return False
    return True
