"""
Shared fixtures for route planner tests.

Provides a small Istanbul/London network of locations and a factory for
schedule edges between them.
"""

from typing import Callable, Iterable

import pytest

from src.route_planner.adapters.cache.logging_store import CacheEventRecorder
from src.route_planner.adapters.cache.memory_store import InMemoryCacheStore
from src.route_planner.application.route_planner import RoutePlanner
from src.route_planner.config import CacheSettings, Settings
from src.route_planner.schemas.location import Location
from src.route_planner.schemas.transportation import ScheduleEdge, TransportMode

EVERY_DAY = (1, 2, 3, 4, 5, 6, 7)

EdgeFactory = Callable[..., ScheduleEdge]


# =============================================================================
# LOCATIONS
# =============================================================================


@pytest.fixture
def taksim() -> Location:
    return Location("Taksim Square", "Turkey", "Istanbul", "CCIST", id=1)


@pytest.fixture
def istanbul_airport() -> Location:
    return Location("Istanbul Airport", "Turkey", "Istanbul", "IST", id=2)


@pytest.fixture
def heathrow() -> Location:
    return Location("London Heathrow", "UK", "London", "LHR", id=3)


@pytest.fixture
def wembley() -> Location:
    return Location("Wembley Stadium", "UK", "London", "WEMB", id=4)


@pytest.fixture
def sabiha() -> Location:
    return Location("Sabiha Gokcen Airport", "Turkey", "Istanbul", "SAW", id=5)


@pytest.fixture
def locations_by_code(taksim, istanbul_airport, heathrow, wembley, sabiha) -> dict:
    """All fixture locations keyed by code."""
    return {
        loc.code: loc
        for loc in (taksim, istanbul_airport, heathrow, wembley, sabiha)
    }


# =============================================================================
# EDGES
# =============================================================================


@pytest.fixture
def make_edge(locations_by_code) -> EdgeFactory:
    """
    Factory for schedule edges between fixture locations.

    Usage:
        make_edge(10, "IST", "LHR", TransportMode.FLIGHT, days=(1, 3))
    """

    def _make(
        edge_id: int,
        origin_code: str,
        destination_code: str,
        mode: TransportMode,
        days: Iterable[int] = EVERY_DAY,
    ) -> ScheduleEdge:
        return ScheduleEdge(
            id=edge_id,
            origin=locations_by_code[origin_code],
            destination=locations_by_code[destination_code],
            mode=mode,
            operating_days=frozenset(days),
        )

    return _make


# =============================================================================
# APPLICATION
# =============================================================================


@pytest.fixture
def cache_recorder() -> CacheEventRecorder:
    return CacheEventRecorder()


@pytest.fixture
def planner(cache_recorder):
    """RoutePlanner on a throwaway in-memory database with the sample network."""
    settings = Settings(db_path=":memory:", cache=CacheSettings())
    with RoutePlanner(
        settings,
        cache_store=InMemoryCacheStore(),
        cache_listeners=[cache_recorder],
    ) as route_planner:
        route_planner.seed_sample_network()
        cache_recorder.clear()
        yield route_planner
