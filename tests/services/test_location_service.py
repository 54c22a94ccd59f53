"""
Tests for LocationService.

Tests cover:
- Cached reads and NotFoundError
- Create/update/delete validation
- Cache invalidation order on writes
"""

from unittest.mock import MagicMock, call

import pytest

from src.route_planner.adapters.cache.memory_store import InMemoryCacheStore
from src.route_planner.config import CacheSettings
from src.route_planner.exceptions import (
    DuplicateLocationCodeError,
    LocationInUseError,
    NotFoundError,
)
from src.route_planner.ports.cache_store import CacheRegion
from src.route_planner.ports.repositories import LocationRepository
from src.route_planner.schemas.location import Location
from src.route_planner.services.cache_aside import CacheAside
from src.route_planner.services.location_service import LocationService


@pytest.fixture
def repository(istanbul_airport, heathrow) -> MagicMock:
    repo = MagicMock(spec=LocationRepository)
    stored = {istanbul_airport.id: istanbul_airport, heathrow.id: heathrow}
    repo.get.side_effect = stored.get
    repo.list_all.return_value = list(stored.values())
    repo.exists_by_code.side_effect = lambda code: code in {"IST", "LHR"}
    repo.add.side_effect = lambda loc: loc.with_id(10)
    repo.update.side_effect = lambda loc: loc
    repo.delete.return_value = True
    return repo


@pytest.fixture
def store() -> MagicMock:
    store = MagicMock(wraps=InMemoryCacheStore())
    return store


@pytest.fixture
def service(repository, store) -> LocationService:
    return LocationService(repository, CacheAside(store, CacheSettings()))


NEW_LOCATION = Location("Sabiha Gokcen Airport", "Turkey", "Istanbul", "SAW")


class TestReads:
    def test_get_location_is_cached(self, service, repository, istanbul_airport):
        assert service.get_location(istanbul_airport.id) == istanbul_airport
        assert service.get_location(istanbul_airport.id) == istanbul_airport

        repository.get.assert_called_once_with(istanbul_airport.id)

    def test_get_missing_location(self, service):
        with pytest.raises(NotFoundError, match="Location not found with id: 42"):
            service.get_location(42)

    def test_missing_location_is_not_cached(self, service, repository):
        for _ in range(2):
            with pytest.raises(NotFoundError):
                service.get_location(42)
        assert repository.get.call_count == 2

    def test_list_locations_is_cached(self, service, repository):
        first = service.list_locations()
        second = service.list_locations()

        assert first == second
        assert [loc.code for loc in first] == ["IST", "LHR"]
        repository.list_all.assert_called_once()


class TestWrites:
    def test_create(self, service, repository):
        created = service.create_location(NEW_LOCATION)

        assert created.id == 10
        repository.add.assert_called_once_with(NEW_LOCATION)

    def test_create_duplicate_code(self, service, repository):
        with pytest.raises(DuplicateLocationCodeError, match="IST already exists"):
            service.create_location(Location("Other", "Turkey", "Istanbul", "IST"))
        repository.add.assert_not_called()

    def test_update(self, service, repository, istanbul_airport):
        changed = Location("Istanbul Airport", "Turkey", "Istanbul", "ISL")

        updated = service.update_location(istanbul_airport.id, changed)

        assert updated.id == istanbul_airport.id
        assert updated.code == "ISL"

    def test_update_keeping_own_code(self, service, istanbul_airport):
        renamed = Location("Istanbul New Airport", "Turkey", "Istanbul", "IST")

        updated = service.update_location(istanbul_airport.id, renamed)

        assert updated.name == "Istanbul New Airport"

    def test_update_to_taken_code(self, service, istanbul_airport):
        clash = Location("Istanbul Airport", "Turkey", "Istanbul", "LHR")
        with pytest.raises(DuplicateLocationCodeError):
            service.update_location(istanbul_airport.id, clash)

    def test_update_missing(self, service, repository):
        with pytest.raises(NotFoundError):
            service.update_location(42, NEW_LOCATION)
        repository.update.assert_not_called()

    def test_delete(self, service, repository, heathrow):
        service.delete_location(heathrow.id)
        repository.delete.assert_called_once_with(heathrow.id)

    def test_delete_missing(self, service, repository):
        with pytest.raises(NotFoundError):
            service.delete_location(42)
        repository.delete.assert_not_called()

    def test_delete_in_use_propagates(self, service, repository, store, istanbul_airport):
        repository.delete.side_effect = LocationInUseError(istanbul_airport.id)

        with pytest.raises(LocationInUseError):
            service.delete_location(istanbul_airport.id)
        store.clear.assert_not_called()


class TestInvalidation:
    @pytest.mark.parametrize(
        "write",
        [
            lambda s, loc: s.create_location(NEW_LOCATION),
            lambda s, loc: s.update_location(loc.id, NEW_LOCATION),
            lambda s, loc: s.delete_location(loc.id),
        ],
        ids=["create", "update", "delete"],
    )
    def test_write_clears_routes_then_locations(self, service, store, istanbul_airport, write):
        write(service, istanbul_airport)

        assert store.clear.call_args_list == [
            call(CacheRegion.ROUTES),
            call(CacheRegion.LOCATIONS),
        ]

    def test_read_after_write_reloads(self, service, repository, istanbul_airport):
        service.list_locations()
        service.create_location(NEW_LOCATION)
        service.list_locations()

        assert repository.list_all.call_count == 2
