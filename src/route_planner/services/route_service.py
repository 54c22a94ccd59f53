"""
Route Service - Domain orchestrator for route searches.

Coordinates the interaction between:
- LocationLookup (endpoint validation)
- CacheAside (routes region)
- EdgeSource (relevant schedule edges for the weekday)
- RouteEnumerator (itinerary composition)
"""

from __future__ import annotations

import logging
import time
from datetime import date, datetime
from typing import TYPE_CHECKING, List, Union

from pydantic import TypeAdapter

from src.route_planner.exceptions import InvalidInputError
from src.route_planner.ports.cache_store import CacheRegion
from src.route_planner.schemas.route import Itinerary
from src.route_planner.services.cache_aside import route_cache_key

if TYPE_CHECKING:
    from src.route_planner.ports.edge_source import EdgeSource
    from src.route_planner.ports.repositories import LocationLookup
    from src.route_planner.ports.route_enumerator import RouteEnumerator
    from src.route_planner.services.cache_aside import CacheAside

logger = logging.getLogger(__name__)

ITINERARY_LIST = TypeAdapter(List[Itinerary])

TravelDate = Union[date, datetime, str]


def parse_travel_date(travel_date: TravelDate) -> date:
    """
    Normalize a travel date.

    Args:
        travel_date: A date, a datetime (its date part is used) or an ISO
            'YYYY-MM-DD' string.

    Returns:
        The calendar date.

    Raises:
        InvalidInputError: If the value is not a valid date.
    """
    if isinstance(travel_date, datetime):
        return travel_date.date()
    if isinstance(travel_date, date):
        return travel_date
    if isinstance(travel_date, str):
        try:
            return date.fromisoformat(travel_date.strip())
        except ValueError as e:
            raise InvalidInputError(
                f"Invalid date {travel_date!r}, expected YYYY-MM-DD"
            ) from e
    raise InvalidInputError(f"Invalid date {travel_date!r}, expected YYYY-MM-DD")


class RouteService:
    """
    Domain service for finding single-flight itineraries.

    Orchestrates the search:
    1. Normalizes the travel date
    2. Resolves origin, then destination
    3. Reads the routes region through the cache
    4. On a miss, loads relevant edges and enumerates itineraries

    This service is stateless and thread-safe.

    Attributes:
        _locations: Location lookup used to validate endpoints.
        _edge_source: Provider of schedule edges.
        _enumerator: Algorithm composing itineraries.
        _cache: Cache-aside layer.
    """

    def __init__(
        self,
        locations: LocationLookup,
        edge_source: EdgeSource,
        enumerator: RouteEnumerator,
        cache: CacheAside,
    ) -> None:
        self._locations = locations
        self._edge_source = edge_source
        self._enumerator = enumerator
        self._cache = cache

    def find_routes(
        self,
        origin_id: int,
        destination_id: int,
        travel_date: TravelDate,
    ) -> List[Itinerary]:
        """
        Find every valid itinerary from origin to destination on a date.

        Args:
            origin_id: Origin location id.
            destination_id: Destination location id.
            travel_date: Travel date (date, datetime or 'YYYY-MM-DD').

        Returns:
            Itineraries in pattern order; empty list when none exist.

        Raises:
            InvalidInputError: If the date is malformed.
            NotFoundError: If origin or destination does not exist.
            EdgeSourceError: If schedule edges cannot be loaded.
        """
        start_time = time.perf_counter()

        day = parse_travel_date(travel_date)
        origin = self._locations.get_location(origin_id)
        destination = self._locations.get_location(destination_id)

        key = route_cache_key(origin_id, destination_id, day)
        itineraries = self._cache.read_through(
            CacheRegion.ROUTES,
            key,
            lambda: self._compute(origin_id, destination_id, day),
            ITINERARY_LIST,
        )

        total_time = time.perf_counter() - start_time
        logger.info(
            "Route search %s -> %s on %s completed: %d routes in %.3fms",
            origin.code,
            destination.code,
            day.isoformat(),
            len(itineraries),
            total_time * 1000,
        )
        return itineraries

    def _compute(self, origin_id: int, destination_id: int, day: date) -> List[Itinerary]:
        """Load edges for the weekday and enumerate itineraries (cache miss path)."""
        weekday = day.isoweekday()

        load_start = time.perf_counter()
        edges = self._edge_source.relevant_edges(origin_id, destination_id, weekday)
        load_time = time.perf_counter() - load_start

        algo_start = time.perf_counter()
        itineraries = self._enumerator.enumerate_routes(edges, origin_id, destination_id)
        algo_time = time.perf_counter() - algo_start

        logger.debug(
            "Computed %d routes from %d edges (weekday %d) "
            "(edges: %.3fms, %s: %.3fms)",
            len(itineraries),
            len(edges),
            weekday,
            load_time * 1000,
            self._enumerator.name,
            algo_time * 1000,
        )
        return itineraries
