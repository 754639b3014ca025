"""Thread-safe in-memory cache implementation.

Used to keep navigation database lookups across uplinks: fix, airway
and procedure searches are pure functions of the loaded data.

Features:
- Thread-safe with RLock
- Optional TTL (time-to-live)
- Optional size bound with FIFO eviction
- Hit/miss statistics
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")

_MISSING = object()


@dataclass
class InMemoryCache(Generic[T]):
    """Thread-safe in-memory cache with optional TTL.

    Unlike a plain dict, empty results are cached too: an empty fix
    search is as expensive as a successful one.

    Attributes:
        default_ttl_seconds: Default time-to-live for entries (None = no expiry)
        max_size: Maximum number of entries (None = unlimited)
        name: Cache name for logging

    Example:
        cache = InMemoryCache[tuple](name="navdata", max_size=10_000)
        fixes = cache.get_or_compute("fix:BOPTA", lambda: db.search_fixes("BOPTA"))
    """

    default_ttl_seconds: Optional[float] = None
    max_size: Optional[int] = None
    name: str = "cache"

    _store: Dict[str, Tuple[Any, float]] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    _hits: int = field(default=0, repr=False)
    _misses: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"cache.{self.name}")

    def _lookup(self, key: str) -> Any:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                self._misses += 1
                return _MISSING

            value, expiry = entry
            if time.time() > expiry:
                del self._store[key]
                self._logger.debug("Cache entry expired", extra={"key": key})
                self._misses += 1
                return _MISSING

            self._hits += 1
            return value

    def get(self, key: str) -> Optional[T]:
        """Get a value from the cache.

        Args:
            key: The cache key.

        Returns:
            The cached value, or None if not found or expired.
        """
        value = self._lookup(key)
        return None if value is _MISSING else value

    def set(self, key: str, value: T, ttl: Optional[float] = None) -> None:
        """Set a value in the cache.

        Args:
            key: The cache key.
            value: The value to cache.
            ttl: Optional TTL override for this entry.
        """
        with self._lock:
            if self.max_size is not None and len(self._store) >= self.max_size and key not in self._store:
                oldest_key = next(iter(self._store))
                del self._store[oldest_key]
                self._logger.debug(
                    "Cache evicted entry",
                    extra={"key": oldest_key, "reason": "max_size"},
                )

            effective_ttl = ttl if ttl is not None else self.default_ttl_seconds
            expiry = time.time() + effective_ttl if effective_ttl is not None else float("inf")
            self._store[key] = (value, expiry)

    def get_or_compute(self, key: str, compute_fn: Callable[[], T]) -> T:
        """Get from cache or compute and cache the value.

        Args:
            key: The cache key.
            compute_fn: Function to compute the value if not cached.

        Returns:
            The cached or computed value.
        """
        value = self._lookup(key)
        if value is not _MISSING:
            return value

        # Computed outside the lock; concurrent misses may compute twice.
        computed = compute_fn()
        self.set(key, computed)
        return computed

    def clear(self) -> int:
        """Clear all entries from the cache.

        Returns:
            Number of entries that were cleared.
        """
        with self._lock:
            count = len(self._store)
            self._store.clear()
            self._hits = 0
            self._misses = 0
            self._logger.info("Cache cleared", extra={"entries_cleared": count})
            return count

    def size(self) -> int:
        with self._lock:
            return len(self._store)

    def stats(self) -> Dict[str, Any]:
        """Return hit/miss counts and size."""
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0.0
            return {
                "size": len(self._store),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate_percent": round(hit_rate, 1),
            }
