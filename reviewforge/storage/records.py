"""
Wire records for persisted review data.

Pydantic models that map the engine's dataclasses to JSON. Timestamps are
accepted as ISO-8601 strings, epoch numbers (seconds or milliseconds) or
datetimes and always written back as ISO-8601 UTC.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from reviewforge.engine.models import ReviewEvent, ReviewState, SessionRecord
from reviewforge.engine.quality import clamp_quality
from reviewforge.engine.timestamps import parse_optional_timestamp, parse_timestamp


class ReviewStateRecord(BaseModel):
    """Stored form of a ReviewState."""

    user_id: str = Field(..., min_length=1)
    item_id: str = Field(..., min_length=1)
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
    learning_modalities: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    @field_validator("last_reviewed", "next_review_date", "created_at", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: Any) -> Optional[datetime]:
        return parse_optional_timestamp(value)

    @classmethod
    def from_state(cls, state: ReviewState) -> "ReviewStateRecord":
        """Build a record from an engine state."""
        return cls(
            user_id=state.user_id,
            item_id=state.item_id,
            ease_factor=state.ease_factor,
            interval=state.interval,
            repetitions=state.repetitions,
            mastery_level=state.mastery_level,
            last_reviewed=state.last_reviewed,
            next_review_date=state.next_review_date,
            review_count=state.review_count,
            correct_answers=state.correct_answers,
            difficulty_adjustments=state.difficulty_adjustments,
            average_response_ms=state.average_response_ms,
            learning_modalities=list(state.learning_modalities),
            created_at=state.created_at,
        )

    def to_state(self) -> ReviewState:
        """Convert to an engine state (validates counters)."""
        data = self.model_dump()
        data["learning_modalities"] = tuple(self.learning_modalities)
        return ReviewState(**data)


class SessionRecordModel(BaseModel):
    """Stored form of an archived review event."""

    user_id: str = Field(..., min_length=1)
    item_id: str = Field(..., min_length=1)
    timestamp: datetime
    accuracy: Optional[float] = None
    response_ms: float = 0.0
    difficulty: float = 3.0
    is_correct: Optional[bool] = None
    modality: Optional[str] = None
    hints_used: bool = False
    quality: Optional[int] = None

    @field_validator("timestamp", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: Any) -> datetime:
        return parse_timestamp(value)

    @classmethod
    def from_record(cls, record: SessionRecord) -> "SessionRecordModel":
        """Build a wire record from an archived event.

        Explicit qualities are stored as the clamped 0-5 score.
        """
        event = record.event
        return cls(
            user_id=record.user_id,
            item_id=record.item_id,
            timestamp=event.timestamp,
            accuracy=event.accuracy,
            response_ms=event.response_ms,
            difficulty=event.difficulty,
            is_correct=event.is_correct,
            modality=event.modality,
            hints_used=event.hints_used,
            quality=None if event.quality is None else clamp_quality(event.quality),
        )

    def to_record(self) -> SessionRecord:
        """Convert to an engine session record."""
        return SessionRecord(
            user_id=self.user_id,
            item_id=self.item_id,
            event=ReviewEvent(
                accuracy=self.accuracy,
                response_ms=self.response_ms,
                difficulty=self.difficulty,
                timestamp=self.timestamp,
                is_correct=self.is_correct,
                modality=self.modality,
                hints_used=self.hints_used,
                quality=self.quality,
            ),
        )
