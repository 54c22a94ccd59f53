"""
Cache Store port interface.

Defines the region-scoped key/value protocol that every cache backend
implements. Values are opaque bytes; serialization belongs to the
cache-aside layer.
"""

from __future__ import annotations

from datetime import timedelta
from enum import Enum
from typing import Optional, Protocol, runtime_checkable


class CacheRegion(Enum):
    """Independently TTL'd namespace of cache keys."""

    ROUTES = "routes"
    LOCATIONS = "locations"
    TRANSPORTATIONS = "transportations"


@runtime_checkable
class CacheStore(Protocol):
    """
    Protocol for cache backends.

    Backends:
    - InMemoryCacheStore: per-process dict, for development and tests
    - RedisCacheStore: shared across workers
    - InstrumentedCacheStore: logging wrapper around either of the above

    Single-key operations must be atomic; no cross-key transaction is
    expected. All methods may raise CacheUnavailableError.
    """

    def get(self, region: CacheRegion, key: str) -> Optional[bytes]:
        """
        Get a cached value.

        Returns:
            Stored bytes if present and unexpired, None otherwise.
        """
        ...

    def put(self, region: CacheRegion, key: str, value: bytes, ttl: timedelta) -> None:
        """Store a value under key, expiring after ttl."""
        ...

    def evict(self, region: CacheRegion, key: str) -> None:
        """Remove a single key (no-op if absent)."""
        ...

    def clear(self, region: CacheRegion) -> None:
        """Remove every key of the region."""
        ...
