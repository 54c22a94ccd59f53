"""
Location Service - cached location lookups and writes.
"""

import logging
from typing import List

from pydantic import TypeAdapter

from src.route_planner.exceptions import DuplicateLocationCodeError, NotFoundError
from src.route_planner.ports.cache_store import CacheRegion
from src.route_planner.ports.repositories import LocationLookup, LocationRepository
from src.route_planner.schemas.location import Location
from src.route_planner.services.cache_aside import (
    ALL_ENTRIES_KEY,
    CacheAside,
    entity_cache_key,
)

logger = logging.getLogger(__name__)

LOCATION = TypeAdapter(Location)
LOCATION_LIST = TypeAdapter(List[Location])


class LocationService(LocationLookup):
    """
    Location use cases.

    Reads go through the locations cache region. Every successful write
    clears the routes region first, then the locations region.
    """

    def __init__(self, repository: LocationRepository, cache: CacheAside) -> None:
        self._repository = repository
        self._cache = cache

    def list_locations(self) -> List[Location]:
        return self._cache.read_through(
            CacheRegion.LOCATIONS,
            ALL_ENTRIES_KEY,
            self._repository.list_all,
            LOCATION_LIST,
        )

    def get_location(self, location_id: int) -> Location:
        """
        Return a location by id.

        Raises:
            NotFoundError: If no location has this id.
        """
        return self._cache.read_through(
            CacheRegion.LOCATIONS,
            entity_cache_key(location_id),
            lambda: self._load(location_id),
            LOCATION,
        )

    def create_location(self, location: Location) -> Location:
        """
        Store a new location.

        Raises:
            DuplicateLocationCodeError: If the code is already taken.
        """
        if self._repository.exists_by_code(location.code):
            raise DuplicateLocationCodeError(location.code)

        created = self._repository.add(location)
        self._invalidate()
        logger.info("Created location %s (id=%d)", created.code, created.id)
        return created

    def update_location(self, location_id: int, location: Location) -> Location:
        """
        Overwrite a location's fields.

        Raises:
            NotFoundError: If no location has this id.
            DuplicateLocationCodeError: If the new code belongs to another location.
        """
        existing = self._load(location_id)
        if location.code != existing.code and self._repository.exists_by_code(location.code):
            raise DuplicateLocationCodeError(location.code)

        updated = self._repository.update(location.with_id(location_id))
        self._invalidate()
        logger.info("Updated location %s (id=%d)", updated.code, location_id)
        return updated

    def delete_location(self, location_id: int) -> None:
        """
        Delete a location.

        Raises:
            NotFoundError: If no location has this id.
            LocationInUseError: If a transportation still references it.
        """
        if self._repository.get(location_id) is None:
            raise NotFoundError("Location", location_id)

        self._repository.delete(location_id)
        self._invalidate()
        logger.info("Deleted location %d", location_id)

    def _load(self, location_id: int) -> Location:
        location = self._repository.get(location_id)
        if location is None:
            raise NotFoundError("Location", location_id)
        return location

    def _invalidate(self) -> None:
        self._cache.evict_regions(CacheRegion.ROUTES, CacheRegion.LOCATIONS)
