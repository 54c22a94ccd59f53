"""
Redis cache store.

Shares cache entries across workers. Keys are namespaced as
"{prefix}{region}::{key}" so one region can be cleared with a SCAN.
"""

import logging
from datetime import timedelta
from typing import List, Optional

import redis
from redis.exceptions import RedisError

from src.route_planner.exceptions import CacheUnavailableError
from src.route_planner.ports.cache_store import CacheRegion

logger = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "route-planner:"
_DELETE_BATCH_SIZE = 500


class RedisCacheStore:
    """
    CacheStore backed by a Redis server.

    Every redis.exceptions.RedisError is re-raised as CacheUnavailableError,
    so the cache-aside layer can fall back to the loader.
    """

    def __init__(
        self,
        client: Optional[redis.Redis] = None,
        url: str = "redis://localhost:6379/0",
        key_prefix: str = DEFAULT_KEY_PREFIX,
        socket_timeout: float = 2.0,
    ) -> None:
        """
        Initialize the store.

        Args:
            client: Pre-built Redis client. Built from url if None.
            url: Redis connection URL.
            key_prefix: Namespace prepended to every key.
            socket_timeout: Connect and read timeout in seconds.
        """
        if client is None:
            client = redis.Redis.from_url(
                url,
                socket_connect_timeout=socket_timeout,
                socket_timeout=socket_timeout,
            )
        self._client = client
        self._prefix = key_prefix

    def _key(self, region: CacheRegion, key: str) -> str:
        return f"{self._prefix}{region.value}::{key}"

    def get(self, region: CacheRegion, key: str) -> Optional[bytes]:
        try:
            value = self._client.get(self._key(region, key))
        except RedisError as e:
            raise CacheUnavailableError(f"Redis GET failed: {e}") from e
        if value is None:
            return None
        if isinstance(value, str):
            return value.encode("utf-8")
        return value

    def put(self, region: CacheRegion, key: str, value: bytes, ttl: timedelta) -> None:
        ttl_ms = max(1, int(ttl.total_seconds() * 1000))
        try:
            self._client.set(self._key(region, key), value, px=ttl_ms)
        except RedisError as e:
            raise CacheUnavailableError(f"Redis SET failed: {e}") from e

    def evict(self, region: CacheRegion, key: str) -> None:
        try:
            self._client.delete(self._key(region, key))
        except RedisError as e:
            raise CacheUnavailableError(f"Redis DELETE failed: {e}") from e

    def clear(self, region: CacheRegion) -> None:
        """Delete every key of the region in batches."""
        pattern = f"{self._prefix}{region.value}::*"
        deleted = 0
        try:
            batch: List = []
            for redis_key in self._client.scan_iter(match=pattern):
                batch.append(redis_key)
                if len(batch) >= _DELETE_BATCH_SIZE:
                    deleted += self._client.delete(*batch)
                    batch = []
            if batch:
                deleted += self._client.delete(*batch)
        except RedisError as e:
            raise CacheUnavailableError(f"Redis region clear failed: {e}") from e
        logger.debug("Cleared %d keys from region %s", deleted, region.value)

    def close(self) -> None:
        """Release the connection pool."""
        self._client.close()
