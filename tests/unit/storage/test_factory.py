"""Tests for storage backend selection."""

from pathlib import Path

import pytest

from reviewforge.core.config import Config
from reviewforge.core.exceptions import ConfigValidationError
from reviewforge.storage import get_stores
from reviewforge.storage.jsonl import JSONLHistoryStore, JSONLStateStore
from reviewforge.storage.memory import InMemoryHistoryStore, InMemoryStateStore


class TestGetStores:
    """Tests for get_stores()."""

    def test_jsonl_default(self, temp_dir: Path) -> None:
        """JSONL stores point at the configured files."""
        config = Config.from_dict({}, temp_dir)

        states, history = get_stores(config)

        assert isinstance(states, JSONLStateStore)
        assert isinstance(history, JSONLHistoryStore)
        assert states.path == config.states_path
        assert history.path == config.history_path

    def test_memory_from_config(self, temp_dir: Path) -> None:
        """The backend is read from the configuration."""
        config = Config.from_dict({"storage": {"backend": "memory"}}, temp_dir)

        states, history = get_stores(config)

        assert isinstance(states, InMemoryStateStore)
        assert isinstance(history, InMemoryHistoryStore)

    def test_override_is_case_insensitive(self, temp_dir: Path) -> None:
        """An explicit backend wins over the configuration."""
        states, _ = get_stores(Config.from_dict({}, temp_dir), backend="MEMORY")

        assert isinstance(states, InMemoryStateStore)

    def test_unknown_backend(self, temp_dir: Path) -> None:
        """Unknown backends are configuration errors."""
        with pytest.raises(ConfigValidationError, match="sqlite"):
            get_stores(Config.from_dict({}, temp_dir), backend="sqlite")
