"""In-memory caching service for fetched product pages.

This module provides a process-local cache with per-entry TTL, lazy expiry
on lookup, a periodic background sweep, and pattern-based invalidation.
Nothing is persisted: all entries are lost when the process exits.
"""

import asyncio
import fnmatch
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import structlog

from pricecompare.config import settings

logger = structlog.get_logger(__name__)


@dataclass
class CacheEntry:
    """A cached value and the monotonic instant at which it expires."""

    key: str
    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class CacheService:
    """Async in-memory cache service.

    Provides simple key-value caching with TTL, pattern matching,
    and periodic eviction of expired entries. All public accessors are
    async so the service can be swapped for a networked store without
    touching callers.

    The store is unbounded in entry count. Concurrent writers to the same
    key are not coordinated: the last write wins.
    """

    def __init__(
        self,
        default_ttl: int = 24 * 60 * 60,
        sweep_interval: int = 60 * 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize cache service.

        Args:
            default_ttl: Time-to-live in seconds used when set() gets no ttl
            sweep_interval: Seconds between background sweeps of expired keys
            clock: Monotonic time source, injectable for tests
        """
        self.default_ttl = default_ttl
        self.sweep_interval = sweep_interval
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._hits = 0
        self._misses = 0
        self._sweeper: Optional[asyncio.Task] = None
        self.logger = logger.bind(service="cache_service")

    def _lookup(self, key: str) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            # Lazy eviction
            del self._entries[key]
            self.logger.debug("cache_expired", key=key)
            return None
        return entry

    async def get(self, key: str) -> Optional[Any]:
        """Get a value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value, or None if not found or expired
        """
        entry = self._lookup(key)

        if entry is not None:
            self._hits += 1
            self.logger.debug("cache_hit", key=key)
            return entry.value

        self._misses += 1
        self.logger.debug("cache_miss", key=key)
        return None

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """Set a value in cache with TTL.

        Overwrites any previous value for the key and restarts its TTL.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time-to-live in seconds (default: the service default_ttl)

        Returns:
            True if stored, False if the ttl was not positive
        """
        ttl = self.default_ttl if ttl is None else ttl
        if ttl <= 0:
            self.logger.warning("cache_set_rejected", key=key, ttl=ttl)
            return False

        self._entries[key] = CacheEntry(
            key=key,
            value=value,
            expires_at=self._clock() + ttl,
        )

        self.logger.debug(
            "cache_set",
            key=key,
            ttl=ttl,
            value_length=len(value) if hasattr(value, "__len__") else None,
        )

        return True

    async def delete(self, key: str) -> bool:
        """Delete a key from cache.

        Args:
            key: Cache key to delete

        Returns:
            True if a live key was deleted, False if not found or expired
        """
        existed = self._lookup(key) is not None
        self._entries.pop(key, None)

        self.logger.debug("cache_delete", key=key, deleted=existed)

        return existed

    async def has(self, key: str) -> bool:
        """Check whether a live (non-expired) entry exists for the key."""
        return self._lookup(key) is not None

    async def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching a glob pattern.

        Args:
            pattern: Glob pattern (e.g., "product:*", "search:*")

        Returns:
            Number of keys deleted
        """
        keys = [key for key in self._entries if fnmatch.fnmatchcase(key, pattern)]
        for key in keys:
            del self._entries[key]

        self.logger.info(
            "cache_pattern_delete",
            pattern=pattern,
            keys_deleted=len(keys),
        )

        return len(keys)

    async def clear(self) -> None:
        """Drop every entry and reset hit/miss counters."""
        self._entries.clear()
        self._hits = 0
        self._misses = 0
        self.logger.info("cache_cleared")

    def sweep(self) -> int:
        """Evict all expired entries.

        Returns:
            Number of entries evicted
        """
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]

        if expired:
            self.logger.info("cache_swept", evicted=len(expired), remaining=len(self._entries))

        return len(expired)

    def stats(self) -> Dict[str, int]:
        """Return hit/miss counters and the current number of stored keys."""
        return {
            "hits": self._hits,
            "misses": self._misses,
            "keys": len(self._entries),
        }

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self.sweep_interval)
            self.sweep()

    def start(self) -> None:
        """Start the periodic sweep task on the running event loop."""
        if self._sweeper is None or self._sweeper.done():
            self._sweeper = asyncio.get_running_loop().create_task(self._sweep_loop())
            self.logger.info("cache_sweeper_started", interval=self.sweep_interval)

    async def close(self) -> None:
        """Stop the sweep task.

        This should be called on application shutdown.
        """
        if self._sweeper:
            self._sweeper.cancel()
            try:
                await self._sweeper
            except asyncio.CancelledError:
                pass
            self._sweeper = None
            self.logger.info("cache_sweeper_stopped")


# Process-wide instance used by the application wiring
_cache_instance: Optional[CacheService] = None


def get_cache_service() -> CacheService:
    """Get or create the process-wide cache service instance.

    Components receive the cache by injection; this accessor only exists
    for the application entry points that construct them.

    Returns:
        CacheService instance
    """
    global _cache_instance

    if _cache_instance is None:
        _cache_instance = CacheService(
            default_ttl=settings.CACHE_DEFAULT_TTL_SECONDS,
            sweep_interval=settings.CACHE_SWEEP_INTERVAL_SECONDS,
        )
        logger.info(
            "cache_service_initialized",
            default_ttl=settings.CACHE_DEFAULT_TTL_SECONDS,
        )

    return _cache_instance


def product_cache_key(url: str) -> str:
    """Generate cache key for a product page URL.

    Args:
        url: Raw product URL, used verbatim

    Returns:
        Cache key string
    """
    return f"product:{url}"


def search_cache_key(query: str) -> str:
    """Generate cache key for a search query.

    Args:
        query: Free-text search query

    Returns:
        Cache key string
    """
    return f"search:{query.lower()}"
