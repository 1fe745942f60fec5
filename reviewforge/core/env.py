"""
Bounded environment variable readers for configuration overrides.

Each reader returns None (or the given default) when the variable is unset
or unusable, so callers only override configuration for values that were
actually supplied:

    cap = get_env_int("REVIEWFORGE_MAX_DAILY_REVIEWS", min_value=1, max_value=500)
    if cap is not None:
        ...
"""

from __future__ import annotations

import logging
import math
import os
from typing import Callable, FrozenSet, Optional, TypeVar

logger = logging.getLogger(__name__)

LOG_LEVELS: FrozenSet[str] = frozenset(
    ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
)

N = TypeVar("N", int, float)


def _read_number(
    name: str,
    parse: Callable[[str], N],
    default: Optional[N],
    min_value: Optional[N],
    max_value: Optional[N],
) -> Optional[N]:
    raw = os.environ.get(name)
    if raw is None:
        return default

    try:
        value = parse(raw.strip())
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not a {parse.__name__}")
        return default

    if isinstance(value, float) and math.isnan(value):
        logger.warning(f"Ignoring {name}={raw!r}: not a number")
        return default

    if min_value is not None and value < min_value:
        return min_value
    if max_value is not None and value > max_value:
        return max_value
    return value


def get_env_int(
    name: str,
    default: Optional[int] = None,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> Optional[int]:
    """Read an integer, clamped into [min_value, max_value].

    Example:
        >>> get_env_int("REVIEWFORGE_QUIET_HOURS_START", default=22, min_value=0, max_value=23)
        22  # If not set
    """
    return _read_number(name, int, default, min_value, max_value)


def get_env_float(
    name: str,
    default: Optional[float] = None,
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
) -> Optional[float]:
    """Read a float, clamped into [min_value, max_value]. NaN counts as unset."""
    return _read_number(name, float, default, min_value, max_value)


def get_env_choice(
    name: str,
    allowed: FrozenSet[str],
    default: Optional[str] = None,
) -> Optional[str]:
    """Read one of the allowed values, matched case-insensitively.

    Returns the canonical spelling from allowed, or default when the value
    is unset or not allowed.

    Example:
        >>> get_env_choice("REVIEWFORGE_LOG_LEVEL", LOG_LEVELS, default="INFO")
        'INFO'
    """
    raw = os.environ.get(name)
    if raw is None:
        return default

    by_lower = {choice.lower(): choice for choice in allowed}
    choice = by_lower.get(raw.strip().lower())
    if choice is None:
        logger.warning(f"Ignoring {name}={raw!r}: expected one of {sorted(allowed)}")
        return default
    return choice
