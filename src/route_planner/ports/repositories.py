"""
Repository port interfaces.

Defines the persistence contracts for locations and transportations,
plus the narrow location-lookup contract used by route searches.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from src.route_planner.schemas.location import Location
from src.route_planner.schemas.transportation import ScheduleEdge


class LocationLookup(ABC):
    """
    Resolves a location id for route searches.

    Implementations:
    - LocationService: cache-aside lookup backed by a LocationRepository
    """

    @abstractmethod
    def get_location(self, location_id: int) -> Location:
        """
        Return the location with the given id.

        Raises:
            NotFoundError: If no location has this id.
        """
        ...


class LocationRepository(ABC):
    """
    Persistence contract for locations.

    Writes are durable when the method returns.
    """

    @abstractmethod
    def get(self, location_id: int) -> Optional[Location]:
        """Return the location or None if absent."""
        ...

    @abstractmethod
    def list_all(self) -> List[Location]:
        """Return all locations ordered by id."""
        ...

    @abstractmethod
    def exists_by_code(self, code: str) -> bool:
        """Check whether a location code is already taken."""
        ...

    @abstractmethod
    def add(self, location: Location) -> Location:
        """
        Insert a location and return it with its new id.

        Raises:
            DuplicateLocationCodeError: If the code is already taken.
        """
        ...

    @abstractmethod
    def update(self, location: Location) -> Location:
        """
        Overwrite the stored location with the same id.

        Raises:
            DuplicateLocationCodeError: If the new code is already taken.
        """
        ...

    @abstractmethod
    def delete(self, location_id: int) -> bool:
        """
        Delete a location.

        Returns:
            True if a row was deleted, False if the id was absent.

        Raises:
            LocationInUseError: If a transportation still references it.
        """
        ...


class TransportationRepository(ABC):
    """Persistence contract for transportations (schedule edges)."""

    @abstractmethod
    def get(self, transportation_id: int) -> Optional[ScheduleEdge]:
        """Return the transportation or None if absent."""
        ...

    @abstractmethod
    def list_all(self) -> List[ScheduleEdge]:
        """Return all transportations ordered by id."""
        ...

    @abstractmethod
    def add(self, edge: ScheduleEdge) -> ScheduleEdge:
        """Insert a transportation and return it with its new id."""
        ...

    @abstractmethod
    def update(self, edge: ScheduleEdge) -> ScheduleEdge:
        """Overwrite the stored transportation with the same id."""
        ...

    @abstractmethod
    def delete(self, transportation_id: int) -> bool:
        """Delete a transportation; False if the id was absent."""
        ...
