"""
Storage Backend Factory.

Centralizes backend selection from configuration:

    get_stores(config)
        ├── "jsonl"  → JSONLStateStore + JSONLHistoryStore (files under data_dir)
        └── "memory" → InMemoryStateStore + InMemoryHistoryStore
"""

from typing import Optional, Tuple

from reviewforge.core.config import Config
from reviewforge.core.exceptions import ConfigValidationError
from reviewforge.core.logging import get_logger
from reviewforge.storage.base import ItemStateStore, SessionHistoryStore

logger = get_logger(__name__)


def get_stores(
    config: Config,
    backend: Optional[str] = None,
) -> Tuple[ItemStateStore, SessionHistoryStore]:
    """
    Create the state and history stores for a configuration.

    Args:
        config: ReviewForge configuration
        backend: Override backend type

    Returns:
        (state store, history store)

    Raises:
        ConfigValidationError: If the backend type is unknown
    """
    backend_type = (backend or config.storage.backend).lower()

    if backend_type == "jsonl":
        from reviewforge.storage.jsonl import JSONLHistoryStore, JSONLStateStore

        logger.debug("Using JSONL storage backend", data_path=str(config.data_path))
        return JSONLStateStore(config.states_path), JSONLHistoryStore(
            config.history_path
        )

    if backend_type == "memory":
        from reviewforge.storage.memory import InMemoryHistoryStore, InMemoryStateStore

        logger.debug("Using in-memory storage backend")
        return InMemoryStateStore(), InMemoryHistoryStore()

    raise ConfigValidationError(
        f"Unknown storage backend: {backend_type}",
        field="storage.backend",
        value=backend_type,
    )
