"""
Transportation Service - cached transportation lookups and writes.
"""

import logging
from typing import Iterable, List, Union

from pydantic import TypeAdapter

from src.route_planner.exceptions import NotFoundError
from src.route_planner.ports.cache_store import CacheRegion
from src.route_planner.ports.repositories import (
    LocationRepository,
    TransportationRepository,
)
from src.route_planner.schemas.transportation import (
    ScheduleEdge,
    TransportMode,
    validate_distinct_endpoints,
    validate_operating_days,
)
from src.route_planner.services.cache_aside import (
    ALL_ENTRIES_KEY,
    CacheAside,
    entity_cache_key,
)

logger = logging.getLogger(__name__)

SCHEDULE_EDGE = TypeAdapter(ScheduleEdge)
SCHEDULE_EDGE_LIST = TypeAdapter(List[ScheduleEdge])


class TransportationService:
    """
    Transportation use cases.

    Writes validate in a fixed order: endpoints and operating days first,
    then the target transportation, then origin and destination locations.
    Every successful write clears the routes region first, then the
    transportations region.
    """

    def __init__(
        self,
        repository: TransportationRepository,
        locations: LocationRepository,
        cache: CacheAside,
    ) -> None:
        self._repository = repository
        self._locations = locations
        self._cache = cache

    def list_transportations(self) -> List[ScheduleEdge]:
        return self._cache.read_through(
            CacheRegion.TRANSPORTATIONS,
            ALL_ENTRIES_KEY,
            self._repository.list_all,
            SCHEDULE_EDGE_LIST,
        )

    def get_transportation(self, transportation_id: int) -> ScheduleEdge:
        """
        Return a transportation by id.

        Raises:
            NotFoundError: If no transportation has this id.
        """
        return self._cache.read_through(
            CacheRegion.TRANSPORTATIONS,
            entity_cache_key(transportation_id),
            lambda: self._load(transportation_id),
            SCHEDULE_EDGE,
        )

    def create_transportation(
        self,
        origin_id: int,
        destination_id: int,
        mode: Union[TransportMode, str],
        operating_days: Iterable[int],
    ) -> ScheduleEdge:
        """
        Store a new transportation.

        Raises:
            InvalidInputError: If endpoints coincide, the mode is unknown or
                operating days are empty or out of range.
            NotFoundError: If origin or destination does not exist.
        """
        days = self._validate(origin_id, destination_id, operating_days)
        mode = TransportMode.parse(mode)
        origin, destination = self._resolve_endpoints(origin_id, destination_id)

        created = self._repository.add(
            ScheduleEdge(
                origin=origin,
                destination=destination,
                mode=mode,
                operating_days=days,
            )
        )
        self._invalidate()
        logger.info(
            "Created transportation %d: %s %s -> %s",
            created.id,
            mode.value,
            origin.code,
            destination.code,
        )
        return created

    def update_transportation(
        self,
        transportation_id: int,
        origin_id: int,
        destination_id: int,
        mode: Union[TransportMode, str],
        operating_days: Iterable[int],
    ) -> ScheduleEdge:
        """
        Overwrite a transportation.

        Raises:
            InvalidInputError: As for create_transportation.
            NotFoundError: If the transportation, origin or destination
                does not exist.
        """
        days = self._validate(origin_id, destination_id, operating_days)
        mode = TransportMode.parse(mode)
        self._load(transportation_id)
        origin, destination = self._resolve_endpoints(origin_id, destination_id)

        updated = self._repository.update(
            ScheduleEdge(
                id=transportation_id,
                origin=origin,
                destination=destination,
                mode=mode,
                operating_days=days,
            )
        )
        self._invalidate()
        logger.info("Updated transportation %d", transportation_id)
        return updated

    def delete_transportation(self, transportation_id: int) -> None:
        """
        Delete a transportation.

        Raises:
            NotFoundError: If no transportation has this id.
        """
        if not self._repository.delete(transportation_id):
            raise NotFoundError("Transportation", transportation_id)

        self._invalidate()
        logger.info("Deleted transportation %d", transportation_id)

    @staticmethod
    def _validate(origin_id: int, destination_id: int, operating_days: Iterable[int]):
        validate_distinct_endpoints(origin_id, destination_id)
        return validate_operating_days(operating_days)

    def _resolve_endpoints(self, origin_id: int, destination_id: int):
        origin = self._locations.get(origin_id)
        if origin is None:
            raise NotFoundError("Origin location", origin_id)
        destination = self._locations.get(destination_id)
        if destination is None:
            raise NotFoundError("Destination location", destination_id)
        return origin, destination

    def _load(self, transportation_id: int) -> ScheduleEdge:
        edge = self._repository.get(transportation_id)
        if edge is None:
            raise NotFoundError("Transportation", transportation_id)
        return edge

    def _invalidate(self) -> None:
        self._cache.evict_regions(CacheRegion.ROUTES, CacheRegion.TRANSPORTATIONS)
