"""
JSONL file-based storage backend.

Simple file-based storage for a single learner device or small datasets.
Review states are held in memory and the file is rewritten on every put;
session history is append-only and scanned on query.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Dict, Generator, List, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from reviewforge.core.exceptions import InvalidInputError, StorageError
from reviewforge.engine.models import ReviewState, SessionRecord
from reviewforge.engine.timestamps import parse_optional_timestamp
from reviewforge.storage.base import ItemStateStore, SessionHistoryStore, in_range
from reviewforge.storage.records import ReviewStateRecord, SessionRecordModel


class _Logger:
    """Lazy logger holder.

    Avoids slow startup from rich library import.
    """

    _instance = None

    @classmethod
    def get(cls):
        """Get logger (lazy-loaded)."""
        if cls._instance is None:
            from reviewforge.core.logging import get_logger

            cls._instance = get_logger(__name__)
        return cls._instance


def _read_lines(path: Path) -> Generator[str, None, None]:
    """Yield non-empty lines of a JSONL file; nothing if it does not exist."""
    if not path.exists():
        return
    try:
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                stripped = line.strip()
                if stripped:
                    yield stripped
    except OSError as e:
        raise StorageError(f"Could not read {path}: {e}") from e


class JSONLStateStore(ItemStateStore):
    """
    JSONL file-based review state storage.

    One JSON object per (user, item). Lines that fail to parse are skipped
    with a warning so a single bad record does not lock a learner out.
    """

    def __init__(self, path: Path) -> None:
        """
        Initialize the store.

        Args:
            path: Path to the states JSONL file
        """
        self.path = path
        self._states: Dict[Tuple[str, str], ReviewState] = {}
        self._load()

    def _load(self) -> None:
        for line_number, line in enumerate(_read_lines(self.path), start=1):
            try:
                state = ReviewStateRecord.model_validate(json.loads(line)).to_state()
            except (json.JSONDecodeError, PydanticValidationError, InvalidInputError) as e:
                _Logger.get().warning(
                    "Skipping unreadable review state",
                    path=str(self.path),
                    line=line_number,
                    error=str(e),
                )
                continue
            self._states[(state.user_id, state.item_id)] = state

        _Logger.get().debug(
            "Loaded review states", path=str(self.path), count=len(self._states)
        )

    def _rebuild_file(self) -> None:
        """Rewrite the JSONL file from memory."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                for key in sorted(self._states):
                    record = ReviewStateRecord.from_state(self._states[key])
                    f.write(record.model_dump_json() + "\n")
        except OSError as e:
            raise StorageError(f"Could not write {self.path}: {e}") from e

    def get(self, user_id: str, item_id: str) -> Optional[ReviewState]:
        return self._states.get((user_id, item_id))

    def put(self, state: ReviewState) -> None:
        self._states[(state.user_id, state.item_id)] = state
        self._rebuild_file()

    def list_for_user(self, user_id: str) -> List[ReviewState]:
        return [
            self._states[key]
            for key in sorted(self._states)
            if key[0] == user_id
        ]


class JSONLHistoryStore(SessionHistoryStore):
    """Append-only JSONL session history."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def append(self, record: SessionRecord) -> None:
        try:
            line = SessionRecordModel.from_record(record).model_dump_json()
        except PydanticValidationError as e:
            raise StorageError(f"Cannot archive review for {record.item_id}: {e}") from e
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as e:
            raise StorageError(f"Could not append to {self.path}: {e}") from e

    def _iter_records(self) -> Generator[SessionRecord, None, None]:
        for line_number, line in enumerate(_read_lines(self.path), start=1):
            try:
                yield SessionRecordModel.model_validate(json.loads(line)).to_record()
            except (json.JSONDecodeError, PydanticValidationError, InvalidInputError) as e:
                _Logger.get().warning(
                    "Skipping unreadable session record",
                    path=str(self.path),
                    line=line_number,
                    error=str(e),
                )

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
            for r in self._iter_records()
            if r.user_id == user_id
            and (item_id is None or r.item_id == item_id)
            and in_range(r.event.timestamp, start, end)
        ]
        return sorted(matches, key=lambda r: r.event.timestamp)
