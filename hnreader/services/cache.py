"""
TTLCache - Async-compatible key/value cache with a fixed time-to-live.

Features:
- Memory-based store keyed by opaque strings
- TTL measured from insertion, independent of access
- Lazy expiry: expired entries are evicted when read
- Last write wins for every key
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Generic, TypeVar

from loguru import logger

T = TypeVar("T")

DEFAULT_TTL = timedelta(minutes=5)


@dataclass
class CacheEntry(Generic[T]):
    """A single cache entry with its insertion time."""

    data: T
    timestamp: datetime

    def age(self, now: datetime) -> timedelta:
        return now - self.timestamp

    def is_expired(self, now: datetime, ttl: timedelta) -> bool:
        """Check if entry is older than the TTL."""
        return self.age(now) > ttl


class TTLCache:
    """
    In-memory cache with per-entry expiry.

    Values of any type may be stored; the cache does not know what a key
    holds. A missing key and an expired key both read as the `get` default.

    Usage:
        cache = TTLCache()

        data = await cache.get("item_8863")
        if data is None:
            data = await fetch_item(8863)
            await cache.set("item_8863", data)
    """

    def __init__(
        self,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = datetime.now,
        debug: bool = False,
    ):
        self._memory: dict[str, CacheEntry[Any]] = {}
        self._ttl = ttl
        self._clock = clock
        self._debug = debug
        self._lock = asyncio.Lock()
        self._stats = CacheStats()

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    async def get(self, key: str, default: Any = None) -> Any:
        """
        Get value from cache.

        Returns the stored value, or `default` if the key was never set or
        its entry has outlived the TTL (the entry is dropped in that case).
        Pass a sentinel as `default` to tell a cached None from a miss.
        """
        async with self._lock:
            entry = self._memory.get(key)
            if entry is None:
                self._stats.misses += 1
                self._log(f"MISS: {key}")
                return default

            if entry.is_expired(self._clock(), self._ttl):
                del self._memory[key]
                self._stats.expirations += 1
                self._stats.misses += 1
                self._log(f"EXPIRED: {key}")
                return default

            self._stats.hits += 1
            self._log(f"HIT: {key}")
            return entry.data

    async def set(self, key: str, data: Any) -> None:
        """Store a value, replacing whatever the key held before."""
        async with self._lock:
            self._memory[key] = CacheEntry(data=data, timestamp=self._clock())
            self._log(f"SET: {key} (TTL: {self._ttl.total_seconds()}s)")

    async def clear(self) -> None:
        """Clear all cache entries."""
        async with self._lock:
            count = len(self._memory)
            self._memory.clear()
            logger.info(f"API cache cleared ({count} entries)")

    def size(self) -> int:
        """Number of stored entries, including ones not yet evicted."""
        return len(self._memory)

    def get_stats(self) -> "CacheStats":
        """Get cache statistics."""
        self._stats.size = len(self._memory)
        return self._stats

    def _log(self, message: str) -> None:
        """Log debug message if debug mode is enabled."""
        if self._debug:
            logger.debug(f"[TTLCache] {message}")


@dataclass
class CacheStats:
    """Cache statistics."""

    hits: int = 0
    misses: int = 0
    expirations: int = 0
    size: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return self.hits / total

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "expirations": self.expirations,
            "size": self.size,
            "hit_rate": f"{self.hit_rate:.2%}",
        }
