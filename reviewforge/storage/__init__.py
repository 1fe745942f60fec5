"""Review state and session history storage.

The scheduling engine is storage-agnostic; these collaborators are used by
the service layer and the CLI.
"""

from reviewforge.storage.base import ItemStateStore, SessionHistoryStore
from reviewforge.storage.factory import get_stores
from reviewforge.storage.jsonl import JSONLHistoryStore, JSONLStateStore
from reviewforge.storage.memory import InMemoryHistoryStore, InMemoryStateStore
from reviewforge.storage.records import ReviewStateRecord, SessionRecordModel

__all__ = [
    "ItemStateStore",
    "SessionHistoryStore",
    "get_stores",
    "JSONLHistoryStore",
    "JSONLStateStore",
    "InMemoryHistoryStore",
    "InMemoryStateStore",
    "ReviewStateRecord",
    "SessionRecordModel",
]
