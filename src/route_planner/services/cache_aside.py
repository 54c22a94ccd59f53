"""
Cache-aside layer.

Wraps a CacheStore with region TTLs, JSON serialization through pydantic
TypeAdapters, and a soft failure policy: an unreachable cache never fails
a request, it only makes it slower.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, TypeVar

from pydantic import TypeAdapter

from src.route_planner.config import CacheSettings
from src.route_planner.exceptions import CacheUnavailableError
from src.route_planner.ports.cache_store import CacheRegion, CacheStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Key of the cached "list everything" lookup in entity regions
ALL_ENTRIES_KEY = "all"


def route_cache_key(origin_id: int, destination_id: int, travel_date: date) -> str:
    """
    Key of a cached route search.

    Example:
        >>> route_cache_key(1, 4, date(2025, 1, 6))
        'route:1:4:2025-01-06'
    """
    return f"route:{origin_id}:{destination_id}:{travel_date.isoformat()}"


def entity_cache_key(entity_id: int) -> str:
    """Key of a single cached location or transportation."""
    return str(entity_id)


class CacheAside:
    """
    Read-through caching with region-wide invalidation.

    Concurrent misses on one key are not coalesced; each computes the value
    and the last write wins.

    Attributes:
        _store: Backend CacheStore (usually instrumented).
        _settings: Cache switch and region TTLs.
    """

    def __init__(self, store: CacheStore, settings: CacheSettings) -> None:
        """
        Initialize the cache-aside layer.

        Args:
            store: Cache backend.
            settings: Cache settings (enabled flag, TTLs).
        """
        self._store = store
        self._settings = settings

    @property
    def enabled(self) -> bool:
        return self._settings.enabled

    def read_through(
        self,
        region: CacheRegion,
        key: str,
        loader: Callable[[], T],
        adapter: TypeAdapter,
    ) -> T:
        """
        Return the cached value for key, computing and storing it on a miss.

        Args:
            region: Cache region of the key.
            key: Cache key within the region.
            loader: Computes the value on a miss. Its exceptions propagate
                and nothing is cached.
            adapter: TypeAdapter for the value type (JSON encode/decode).

        Returns:
            The cached or freshly loaded value.
        """
        if not self._settings.enabled:
            return loader()

        cached = self._get(region, key)
        if cached is not None:
            try:
                return adapter.validate_json(cached)
            except ValueError as e:
                logger.warning(
                    "Discarding undecodable cache entry [%s] key=%s: %s",
                    region.value,
                    key,
                    e,
                )

        value = loader()
        self._put(region, key, adapter.dump_json(value))
        return value

    def evict_regions(self, *regions: CacheRegion) -> None:
        """
        Clear whole regions, in the given order.

        Not atomic across regions; a failed clear is logged and skipped.
        """
        if not self._settings.enabled:
            return
        for region in regions:
            try:
                self._store.clear(region)
            except CacheUnavailableError as e:
                logger.warning("Cache clear failed for region %s: %s", region.value, e)

    def _get(self, region: CacheRegion, key: str):
        try:
            return self._store.get(region, key)
        except CacheUnavailableError as e:
            logger.warning(
                "Cache read failed [%s] key=%s, loading from source: %s",
                region.value,
                key,
                e,
            )
            return None

    def _put(self, region: CacheRegion, key: str, value: bytes) -> None:
        try:
            self._store.put(region, key, value, self._settings.ttl_for(region))
        except CacheUnavailableError as e:
            logger.warning("Cache write failed [%s] key=%s: %s", region.value, key, e)
