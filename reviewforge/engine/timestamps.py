"""Timestamp parsing and calendar arithmetic.

Timestamps cross the engine boundary as ISO-8601 strings, epoch numbers or
datetime objects. Everything is normalized to timezone-aware UTC datetimes so
that comparisons never mix naive and aware values.

Epoch numbers are seconds; values of 1e12 and above are taken as
milliseconds (the unit JavaScript clients send).
"""

from __future__ import annotations

import math
from datetime import date, datetime, timezone
from typing import Any, Optional

from reviewforge.core.exceptions import InvalidInputError

SECONDS_PER_DAY = 86400.0
EPOCH_MILLIS_THRESHOLD = 1e12


def parse_timestamp(value: Any, field: str = "timestamp") -> datetime:
    """Convert a datetime, ISO-8601 string or epoch number to aware UTC.

    Args:
        value: Value to convert
        field: Field name used in error messages

    Returns:
        Timezone-aware datetime in UTC

    Raises:
        InvalidInputError: If the value cannot be interpreted as a timestamp
    """
    if isinstance(value, datetime):
        return ensure_utc(value)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    if isinstance(value, bool):
        raise InvalidInputError(f"{field} must be a timestamp, got bool", field, value)

    if isinstance(value, (int, float)):
        return _from_epoch(float(value), field)

    if isinstance(value, str):
        return _from_iso(value, field)

    raise InvalidInputError(
        f"{field} must be a datetime, ISO-8601 string or epoch number, "
        f"got {type(value).__name__}",
        field,
        value,
    )


def parse_optional_timestamp(value: Any, field: str = "timestamp") -> Optional[datetime]:
    """Like parse_timestamp, but passes None (and empty strings) through."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_timestamp(value, field)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _from_epoch(value: float, field: str) -> datetime:
    if math.isnan(value) or math.isinf(value):
        raise InvalidInputError(f"{field} is not a finite epoch value", field, value)
    if abs(value) >= EPOCH_MILLIS_THRESHOLD:
        value = value / 1000.0
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise InvalidInputError(f"{field} is out of range: {value}", field, value) from e


def _from_iso(value: str, field: str) -> datetime:
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return ensure_utc(datetime.fromisoformat(text))
    except ValueError as e:
        raise InvalidInputError(
            f"{field} is not a valid ISO-8601 timestamp: {value!r}", field, value
        ) from e


def to_iso(value: datetime) -> str:
    """Format an aware datetime as ISO-8601 with a trailing Z."""
    return ensure_utc(value).isoformat().replace("+00:00", "Z")


def days_between(later: datetime, earlier: datetime) -> int:
    """Whole days elapsed from earlier to later (floored, may be negative)."""
    seconds = (ensure_utc(later) - ensure_utc(earlier)).total_seconds()
    return int(math.floor(seconds / SECONDS_PER_DAY))


def fractional_days(later: datetime, earlier: datetime) -> float:
    """Elapsed time from earlier to later in fractional days."""
    return (ensure_utc(later) - ensure_utc(earlier)).total_seconds() / SECONDS_PER_DAY


def calendar_day(value: datetime) -> date:
    """UTC calendar date of a timestamp."""
    return ensure_utc(value).date()
