"""Per-learner interval multiplier.

Learners who answer accurately and quickly get longer intervals; learners
who struggle get shorter ones. The factor is derived on demand and may be
cached by callers, but it is never stored as authoritative state.
"""

from __future__ import annotations

from typing import Iterable, Optional

from reviewforge.core.config.scheduling import (
    DEFAULT_SCHEDULING_CONFIG,
    SchedulingConfig,
)
from reviewforge.engine.numeric import clamp

NEUTRAL_FACTOR: float = 1.0


def compute_personalization_factor(
    user_accuracy: float,
    avg_response_ms: float,
    preferred_modalities: Iterable[str] = (),
    session_modality: Optional[str] = None,
    config: Optional[SchedulingConfig] = None,
) -> float:
    """Compute the interval multiplier for a learner.

    Args:
        user_accuracy: Learner-level accuracy (0-1)
        avg_response_ms: Learner-level mean response latency in ms
        preferred_modalities: Modalities the learner prefers
        session_modality: Modality of the current session, if known
        config: Scheduling thresholds

    Returns:
        Multiplier in [min_factor, max_factor] (default 0.5-2.0)
    """
    cfg = (config or DEFAULT_SCHEDULING_CONFIG).personalization
    factor = NEUTRAL_FACTOR

    if user_accuracy > cfg.high_accuracy:
        factor *= cfg.high_accuracy_multiplier
    elif user_accuracy < cfg.low_accuracy:
        factor *= cfg.low_accuracy_multiplier

    # No latency data recorded yet: leave speed out of it
    if avg_response_ms > 0:
        if avg_response_ms < cfg.fast_response_ms:
            factor *= cfg.fast_response_multiplier
        elif avg_response_ms > cfg.slow_response_ms:
            factor *= cfg.slow_response_multiplier

    if session_modality and session_modality in set(preferred_modalities):
        factor *= cfg.preferred_modality_multiplier

    return clamp(factor, cfg.min_factor, cfg.max_factor)
