"""
Cache instrumentation.

InstrumentedCacheStore wraps any CacheStore, forwards every call and
reports each successful operation as a DEBUG log record plus a CacheEvent
delivered to registered listeners.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Callable, Iterable, List, Optional

from src.route_planner.ports.cache_store import CacheRegion, CacheStore

logger = logging.getLogger(__name__)


class CacheEventType(Enum):
    """Kind of cache operation observed."""

    HIT = "HIT"
    MISS = "MISS"
    PUT = "PUT"
    EVICT = "EVICT"
    CLEAR = "CLEAR"


@dataclass(frozen=True)
class CacheEvent:
    """One observed cache operation. key is None for region clears."""

    event: CacheEventType
    region: CacheRegion
    key: Optional[str] = None


CacheListener = Callable[[CacheEvent], None]


class CacheEventRecorder:
    """
    Thread-safe listener that keeps every event it receives.

    Usage:
        >>> recorder = CacheEventRecorder()
        >>> store = InstrumentedCacheStore(InMemoryCacheStore(), [recorder])
        >>> store.get(CacheRegion.ROUTES, "route:1:2:2025-01-06")
        >>> recorder.events[0].event
        <CacheEventType.MISS: 'MISS'>
    """

    def __init__(self) -> None:
        self._events: List[CacheEvent] = []
        self._lock = threading.Lock()

    def __call__(self, event: CacheEvent) -> None:
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> List[CacheEvent]:
        """Snapshot of the recorded events, oldest first."""
        with self._lock:
            return list(self._events)

    def of_type(
        self, event_type: CacheEventType, region: Optional[CacheRegion] = None
    ) -> List[CacheEvent]:
        """Recorded events of one type, optionally restricted to a region."""
        return [
            e
            for e in self.events
            if e.event is event_type and (region is None or e.region is region)
        ]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()


class InstrumentedCacheStore:
    """
    Logging decorator for a CacheStore.

    Results and exceptions of the delegate pass through unchanged; a failed
    call emits no event.
    """

    def __init__(
        self,
        delegate: CacheStore,
        listeners: Iterable[CacheListener] = (),
    ) -> None:
        """
        Initialize the wrapper.

        Args:
            delegate: Store receiving the forwarded calls.
            listeners: Callables notified with a CacheEvent per operation.
        """
        self._delegate = delegate
        self._listeners: List[CacheListener] = list(listeners)

    @property
    def delegate(self) -> CacheStore:
        return self._delegate

    def add_listener(self, listener: CacheListener) -> None:
        self._listeners.append(listener)

    def get(self, region: CacheRegion, key: str) -> Optional[bytes]:
        value = self._delegate.get(region, key)
        event_type = CacheEventType.MISS if value is None else CacheEventType.HIT
        self._emit(CacheEvent(event_type, region, key))
        return value

    def put(self, region: CacheRegion, key: str, value: bytes, ttl: timedelta) -> None:
        self._delegate.put(region, key, value, ttl)
        self._emit(CacheEvent(CacheEventType.PUT, region, key))

    def evict(self, region: CacheRegion, key: str) -> None:
        self._delegate.evict(region, key)
        self._emit(CacheEvent(CacheEventType.EVICT, region, key))

    def clear(self, region: CacheRegion) -> None:
        self._delegate.clear(region)
        self._emit(CacheEvent(CacheEventType.CLEAR, region))

    def _emit(self, event: CacheEvent) -> None:
        """Log the event and notify listeners."""
        if event.key is None:
            logger.debug(
                "CACHE %s [%s]",
                event.event.value,
                event.region.value,
                extra={
                    "cache_event": event.event.value,
                    "cache_region": event.region.value,
                    "cache_key": None,
                },
            )
        else:
            logger.debug(
                "CACHE %s [%s] key=%s",
                event.event.value,
                event.region.value,
                event.key,
                extra={
                    "cache_event": event.event.value,
                    "cache_region": event.region.value,
                    "cache_key": event.key,
                },
            )

        for listener in self._listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("Cache listener %r failed on %s", listener, event)
