"""
Shared pytest fixtures and configuration for ReviewForge tests.

This file is automatically discovered by pytest and provides fixtures
that can be used across all test files.

Fixture Organization
--------------------
- **now**: Fixed reference time; no test reads the real clock
- **temp_dir**: Temporary directory for file operations
- **make_state / make_event**: ReviewState and ReviewEvent builders
- **scheduling_config**: Default scheduling thresholds
- **memory_service**: ReviewService over in-memory stores
"""

import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Generator

import pytest

from reviewforge.cli.console import set_verbose_mode
from reviewforge.core.cache import CacheConfig, InMemoryCache
from reviewforge.core.config import DEFAULT_SCHEDULING_CONFIG, SchedulingConfig
from reviewforge.engine import ReviewEvent, ReviewState
from reviewforge.service import ReviewService
from reviewforge.storage.memory import InMemoryHistoryStore, InMemoryStateStore

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


# ============================================================================
# Environment Isolation
# ============================================================================


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Remove REVIEWFORGE_* overrides and reset verbose mode around each test."""
    for name in list(os.environ):
        if name.startswith("REVIEWFORGE_"):
            monkeypatch.delenv(name, raising=False)
    yield
    set_verbose_mode(False)


# ============================================================================
# Time and Path Fixtures
# ============================================================================


@pytest.fixture
def now() -> datetime:
    """Fixed reference time: 2024-03-15 12:00 UTC."""
    return NOW


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory (cleaned up after test)
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ============================================================================
# Model Builders
# ============================================================================


@pytest.fixture
def make_state() -> Callable[..., ReviewState]:
    """Factory for ReviewState with sensible defaults.

    Example:
        def test_something(make_state, now):
            state = make_state(repetitions=3, last_reviewed=now - timedelta(days=4))
    """

    def _make(
        item_id: str = "kitab",
        user_id: str = "u1",
        **overrides: Any,
    ) -> ReviewState:
        defaults: dict = {
            "ease_factor": 2.5,
            "interval": 1,
            "repetitions": 0,
            "next_review_date": NOW,
            "created_at": NOW - timedelta(days=30),
        }
        defaults.update(overrides)
        return ReviewState(user_id=user_id, item_id=item_id, **defaults)

    return _make


@pytest.fixture
def make_event() -> Callable[..., ReviewEvent]:
    """Factory for ReviewEvent; accuracy 1.0 and 1.8s latency unless overridden."""

    def _make(**overrides: Any) -> ReviewEvent:
        defaults: dict = {"accuracy": 1.0, "response_ms": 1800.0, "difficulty": 3}
        defaults.update(overrides)
        return ReviewEvent(**defaults)

    return _make


# ============================================================================
# Configuration and Service Fixtures
# ============================================================================


@pytest.fixture
def scheduling_config() -> SchedulingConfig:
    """Default scheduling thresholds."""
    return DEFAULT_SCHEDULING_CONFIG


@pytest.fixture
def memory_service() -> ReviewService:
    """ReviewService over empty in-memory stores with a cache."""
    return ReviewService(
        InMemoryStateStore(),
        InMemoryHistoryStore(),
        DEFAULT_SCHEDULING_CONFIG,
        cache=InMemoryCache(CacheConfig(max_size=16)),
    )
