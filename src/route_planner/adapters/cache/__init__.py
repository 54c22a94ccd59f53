"""
Cache store adapters.
"""

from src.route_planner.adapters.cache.logging_store import (
    CacheEvent,
    CacheEventRecorder,
    CacheEventType,
    InstrumentedCacheStore,
)
from src.route_planner.adapters.cache.memory_store import InMemoryCacheStore
from src.route_planner.adapters.cache.redis_store import RedisCacheStore

__all__ = [
    "CacheEvent",
    "CacheEventRecorder",
    "CacheEventType",
    "InMemoryCacheStore",
    "InstrumentedCacheStore",
    "RedisCacheStore",
]
