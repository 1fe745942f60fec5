"""
Cache collaborator for ReviewForge.

Callers that want to memoize derived values (for example a learner's
personalization factor) receive a Cache explicitly. There is no module-level
cache instance, and the scheduling engine never imports this module.

    cache = InMemoryCache(CacheConfig(ttl_seconds=900))
    service = ReviewService(states, history, config, cache=cache)
"""

import time
from dataclasses import dataclass, field
from threading import Lock
from typing import Any, Callable, Dict, Optional, Protocol

from reviewforge.core.exceptions import CacheError
from reviewforge.core.logging import get_logger

logger = get_logger(__name__)


class Cache(Protocol):
    """Minimal key-value cache interface."""

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value or None."""
        ...

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        """Store a value, optionally overriding the default TTL."""
        ...

    def delete(self, key: str) -> None:
        """Remove a key if present."""
        ...


@dataclass
class CacheEntry:
    """A single cache entry with metadata."""

    key: str
    value: Any
    created_at: float
    ttl_seconds: float
    hits: int = 0
    last_accessed: float = field(default_factory=time.time)

    def is_expired(self, now: float) -> bool:
        """Check if entry has expired."""
        return (now - self.created_at) > self.ttl_seconds

    def touch(self, now: float) -> None:
        """Update access time and hit count."""
        self.last_accessed = now
        self.hits += 1


@dataclass
class CacheConfig:
    """Cache configuration."""

    enabled: bool = True
    max_size: int = 1000  # Maximum entries
    ttl_seconds: float = 3600  # 1 hour default


class InMemoryCache:
    """
    LRU cache with TTL expiration.

    Features:
    - Thread-safe operations
    - TTL-based expiration (per entry override)
    - LRU eviction when full
    - Cache statistics
    """

    def __init__(
        self,
        config: Optional[CacheConfig] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config or CacheConfig()
        if self.config.max_size < 1:
            raise CacheError(f"max_size must be at least 1, got {self.config.max_size}")
        self._clock = clock
        self._cache: Dict[str, CacheEntry] = {}
        self._lock = Lock()
        self._stats = {
            "hits": 0,
            "misses": 0,
            "evictions": 0,
        }

    def get(self, key: str) -> Optional[Any]:
        """
        Get a cached value.

        Args:
            key: Cache key.

        Returns:
            Cached value or None if not found/expired.
        """
        if not self.config.enabled:
            return None

        now = self._clock()
        with self._lock:
            entry = self._cache.get(key)

            if entry is None:
                self._stats["misses"] += 1
                return None

            if entry.is_expired(now):
                del self._cache[key]
                self._stats["misses"] += 1
                return None

            entry.touch(now)
            self._stats["hits"] += 1
            return entry.value

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        """
        Cache a value.

        Args:
            key: Cache key.
            value: Value to store.
            ttl_seconds: Optional per-entry TTL.
        """
        if not self.config.enabled:
            return

        now = self._clock()
        with self._lock:
            if key not in self._cache:
                while len(self._cache) >= self.config.max_size:
                    self._evict_lru()

            self._cache[key] = CacheEntry(
                key=key,
                value=value,
                created_at=now,
                ttl_seconds=(
                    self.config.ttl_seconds if ttl_seconds is None else ttl_seconds
                ),
                last_accessed=now,
            )

    def delete(self, key: str) -> None:
        """Remove a key if present."""
        with self._lock:
            self._cache.pop(key, None)

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._cache.clear()

    def _evict_lru(self) -> None:
        """Evict least recently used entry."""
        if not self._cache:
            return

        lru_key = min(
            self._cache.keys(),
            key=lambda k: self._cache[k].last_accessed,
        )
        del self._cache[lru_key]
        self._stats["evictions"] += 1
        logger.debug("Evicted cache entry", key=lru_key)

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            total = self._stats["hits"] + self._stats["misses"]
            hit_rate = self._stats["hits"] / total if total > 0 else 0.0

            return {
                "entries": len(self._cache),
                "max_size": self.config.max_size,
                "hits": self._stats["hits"],
                "misses": self._stats["misses"],
                "evictions": self._stats["evictions"],
                "hit_rate": f"{hit_rate:.2%}",
            }
