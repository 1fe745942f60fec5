"""Numeric helpers shared by the scheduling engine."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity.

    Python's round() uses banker's rounding (round(6.5) == 6); scheduling
    results must not depend on the parity of the integer part.

    Examples:
        >>> round_half_up(37.5)
        38
        >>> round_half_up(6.5)
        7
    """
    return int(math.floor(value + 0.5))


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into [lower, upper]."""
    return max(lower, min(upper, value))
