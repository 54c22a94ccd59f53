"""
RoutePlanner Use Case - Public API for the transfer network.

This module provides the main entry point for route searches and network
administration. It acts as a Facade/Factory, handling dependency
initialization and providing a clean interface for consumers.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from src.route_planner.adapters.algorithms.pattern_enumerator import (
    PatternRouteEnumerator,
)
from src.route_planner.adapters.cache.logging_store import (
    CacheListener,
    InstrumentedCacheStore,
)
from src.route_planner.adapters.cache.memory_store import InMemoryCacheStore
from src.route_planner.adapters.cache.redis_store import RedisCacheStore
from src.route_planner.adapters.repositories.database import SqliteDatabase
from src.route_planner.adapters.repositories.location_repo import (
    SqliteLocationRepository,
)
from src.route_planner.adapters.repositories.transportation_repo import (
    SqliteTransportationRepository,
)
from src.route_planner.application.sample_network import seed_sample_network
from src.route_planner.config import CacheSettings, Settings
from src.route_planner.ports.cache_store import CacheStore
from src.route_planner.ports.route_enumerator import RouteEnumerator
from src.route_planner.schemas.route import Itinerary
from src.route_planner.services.cache_aside import CacheAside
from src.route_planner.services.location_service import LocationService
from src.route_planner.services.route_service import RouteService, TravelDate
from src.route_planner.services.transportation_service import TransportationService

logger = logging.getLogger(__name__)


def build_cache_store(settings: CacheSettings) -> CacheStore:
    """Create the backend store selected by the cache settings."""
    if settings.backend == "redis":
        logger.info("Using redis cache store at %s", settings.redis_url)
        return RedisCacheStore(url=settings.redis_url, key_prefix=settings.key_prefix)
    return InMemoryCacheStore()


class RoutePlanner:
    """
    Public API for route searches and network administration.

    Example usage:
        >>> with RoutePlanner(Settings(db_path=":memory:")) as planner:
        ...     planner.seed_sample_network()
        ...     routes = planner.find_routes(1, 5, "2025-01-06")
        ...     for route in routes:
        ...         print(" -> ".join(route.location_codes))

    Attributes:
        locations: Location use cases.
        transportations: Transportation use cases.
        cache_store: Instrumented cache store.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        database: Optional[SqliteDatabase] = None,
        cache_store: Optional[CacheStore] = None,
        enumerator: Optional[RouteEnumerator] = None,
        cache_listeners: Iterable[CacheListener] = (),
    ) -> None:
        """
        Initialize the planner with optional custom dependencies.

        Args:
            settings: Application settings. Defaults to Settings().
            database: Custom database. If None, opens settings.db_path.
            cache_store: Custom backend store. If None, chosen by settings.
            enumerator: Custom algorithm. If None, uses PatternRouteEnumerator.
            cache_listeners: Callables receiving every CacheEvent.
        """
        self._settings = settings or Settings()

        self._database = database or SqliteDatabase(self._settings.db_path)
        self._owns_database = database is None

        backend = cache_store or build_cache_store(self._settings.cache)
        self._backend = backend
        self._owns_backend = cache_store is None
        self.cache_store = InstrumentedCacheStore(backend, cache_listeners)
        cache = CacheAside(self.cache_store, self._settings.cache)

        location_repo = SqliteLocationRepository(self._database)
        transportation_repo = SqliteTransportationRepository(self._database)

        self._enumerator = enumerator or PatternRouteEnumerator()

        self.locations = LocationService(location_repo, cache)
        self.transportations = TransportationService(
            transportation_repo, location_repo, cache
        )
        self._route_service = RouteService(
            locations=self.locations,
            edge_source=transportation_repo,
            enumerator=self._enumerator,
            cache=cache,
        )

        if self._settings.seed_sample_data:
            self.seed_sample_network()

        logger.info(
            "RoutePlanner initialized with %s (cache: %s, enabled=%s)",
            self._enumerator.name,
            type(backend).__name__,
            self._settings.cache.enabled,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def algorithm_name(self) -> str:
        """Get the name of the route enumeration algorithm being used."""
        return self._enumerator.name

    def find_routes(
        self,
        origin_id: int,
        destination_id: int,
        travel_date: TravelDate,
    ) -> List[Itinerary]:
        """
        Find every itinerary between two locations on a date.

        See RouteService.find_routes for the error contract.
        """
        return self._route_service.find_routes(origin_id, destination_id, travel_date)

    def seed_sample_network(self) -> bool:
        """Insert the sample network if the database has no locations."""
        return seed_sample_network(self.locations, self.transportations)

    def shutdown(self) -> None:
        """
        Clean shutdown of the planner.

        Closes the database connection and cache client if the planner
        opened them.
        """
        if self._owns_database:
            self._database.close()
        if self._owns_backend and hasattr(self._backend, "close"):
            self._backend.close()
        logger.info("RoutePlanner shutdown complete")

    def __enter__(self) -> "RoutePlanner":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit with cleanup."""
        self.shutdown()
