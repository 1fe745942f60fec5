"""
In-memory storage backend.

Dictionary-backed stores for tests and throwaway sessions. Nothing is
persisted.
"""

from datetime import datetime
from typing import Dict, List, Optional, Tuple

from reviewforge.engine.models import ReviewState, SessionRecord
from reviewforge.engine.timestamps import parse_optional_timestamp
from reviewforge.storage.base import ItemStateStore, SessionHistoryStore, in_range


class InMemoryStateStore(ItemStateStore):
    """ReviewState store held in a dict."""

    def __init__(self) -> None:
        self._states: Dict[Tuple[str, str], ReviewState] = {}

    def get(self, user_id: str, item_id: str) -> Optional[ReviewState]:
        return self._states.get((user_id, item_id))

    def put(self, state: ReviewState) -> None:
        self._states[(state.user_id, state.item_id)] = state

    def list_for_user(self, user_id: str) -> List[ReviewState]:
        return sorted(
            (s for (uid, _), s in self._states.items() if uid == user_id),
            key=lambda s: s.item_id,
        )


class InMemoryHistoryStore(SessionHistoryStore):
    """Session history held in a list."""

    def __init__(self) -> None:
        self._records: List[SessionRecord] = []

    def append(self, record: SessionRecord) -> None:
        self._records.append(record)

    def query(
        self,
        user_id: str,
        item_id: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[SessionRecord]:
        start = parse_optional_timestamp(start, "start")
        end = parse_optional_timestamp(end, "end")
        matches = [
            r
            for r in self._records
            if r.user_id == user_id
            and (item_id is None or r.item_id == item_id)
            and in_range(r.event.timestamp, start, end)
        ]
        return sorted(matches, key=lambda r: r.event.timestamp)
