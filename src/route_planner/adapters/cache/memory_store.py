"""
In-process cache store.

Per-worker dict of regions. Acceptable for development, tests and
single-worker deployments; use RedisCacheStore to share entries across
workers.
"""

import threading
import time
from datetime import timedelta
from typing import Callable, Dict, Optional, Tuple

from src.route_planner.ports.cache_store import CacheRegion

# (value, expires_at on the store clock)
_Entry = Tuple[bytes, float]


class InMemoryCacheStore:
    """
    Thread-safe in-memory CacheStore.

    Expired entries are dropped lazily when read; there is no background
    sweeper.

    Attributes:
        _regions: Entries per region, keyed by cache key.
        _clock: Monotonic clock in seconds (injectable for tests).
        _lock: Lock for thread-safe access.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """
        Initialize an empty store.

        Args:
            clock: Monotonic time source in seconds.
        """
        self._regions: Dict[CacheRegion, Dict[str, _Entry]] = {
            region: {} for region in CacheRegion
        }
        self._clock = clock
        self._lock = threading.Lock()

    def get(self, region: CacheRegion, key: str) -> Optional[bytes]:
        """Get a cached value or None if missing or expired."""
        with self._lock:
            entries = self._regions[region]
            entry = entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                del entries[key]
                return None
            return value

    def put(self, region: CacheRegion, key: str, value: bytes, ttl: timedelta) -> None:
        """Store a value, replacing any previous entry."""
        with self._lock:
            expires_at = self._clock() + ttl.total_seconds()
            self._regions[region][key] = (value, expires_at)

    def evict(self, region: CacheRegion, key: str) -> None:
        """Remove a single key."""
        with self._lock:
            self._regions[region].pop(key, None)

    def clear(self, region: CacheRegion) -> None:
        """Remove every key of the region."""
        with self._lock:
            self._regions[region].clear()

    def size(self, region: CacheRegion) -> int:
        """Number of stored entries, expired ones included until read."""
        with self._lock:
            return len(self._regions[region])
