"""
Caching utilities.

Provides an explicit, injectable TTL cache. Owners construct one and pass it
to whatever needs it; there is no module-level cache instance.
"""

import threading
import time
from collections.abc import Callable
from typing import Any

import structlog
from cachetools import TTLCache

from labcheck.core.config.cache_config import CacheConfig

logger = structlog.get_logger(__name__)


class ExpiringCache:
    """
    Thread-safe TTL cache with an injectable clock.

    Entries expire `ttl` seconds after they were stored; when the cache is
    full the least recently used entry is evicted.

    Example:
        cache = ExpiringCache(maxsize=100, ttl=60)
        cache.set("key", "value")
        value = cache.get("key")
    """

    def __init__(
        self,
        maxsize: int = 1024,
        ttl: float = 60,
        timer: Callable[[], float] = time.monotonic,
        enabled: bool = True,
    ):
        """
        Initialize the cache.

        Args:
            maxsize: Maximum number of entries in cache
            ttl: Time to live in seconds
            timer: Clock returning seconds; tests pass a fake one
            enabled: When False every lookup misses and nothing is stored
        """
        self._cache: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl, timer=timer)
        self._lock = threading.RLock()
        self.maxsize = maxsize
        self.ttl = ttl
        self.enabled = enabled

    @classmethod
    def from_config(cls, cache_config: CacheConfig, timer: Callable[[], float] = time.monotonic) -> "ExpiringCache":
        return cls(
            maxsize=cache_config.maxsize,
            ttl=cache_config.ttl,
            timer=timer,
            enabled=cache_config.enable_cache,
        )

    def get(self, key: str) -> Any | None:
        """
        Get cached value if not expired.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found, expired or caching disabled
        """
        if not self.enabled:
            return None
        with self._lock:
            value = self._cache.get(key)
        if value is None:
            logger.debug("Cache miss", key=key)
        else:
            logger.debug("Cache hit", key=key)
        return value

    def set(self, key: str, value: Any) -> None:
        """Store a value; it expires after the configured TTL."""
        if not self.enabled:
            return
        with self._lock:
            self._cache[key] = value
        logger.debug("Cached entry", key=key)

    def invalidate(self, key: str) -> None:
        """
        Invalidate a specific cache entry.

        Args:
            key: Cache key to invalidate
        """
        with self._lock:
            removed = self._cache.pop(key, None)
        if removed is not None:
            logger.debug("Invalidated cache entry", key=key)

    def clear(self) -> None:
        """Clear all cached values."""
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
        logger.debug("Cleared cache entries", count=count)

    def size(self) -> int:
        """
        Get current cache size.

        Returns:
            Number of live entries in cache
        """
        with self._lock:
            self._cache.expire()
            return len(self._cache)
