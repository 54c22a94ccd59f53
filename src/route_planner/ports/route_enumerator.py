"""
Route Enumerator port interface.

Defines the abstract contract for algorithms that compose itineraries
from a pre-filtered set of schedule edges.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Sequence

if TYPE_CHECKING:
    from src.route_planner.schemas.route import Itinerary
    from src.route_planner.schemas.transportation import ScheduleEdge


class RouteEnumerator(ABC):
    """
    Abstract interface for itinerary enumeration algorithms.

    Enumerators are pure: same edges in, same itineraries out. They do no
    I/O and keep no state between calls.

    Implementations:
    - PatternRouteEnumerator: fixed four-pattern single-flight topology
    """

    @abstractmethod
    def enumerate_routes(
        self,
        edges: Sequence[ScheduleEdge],
        origin_id: int,
        destination_id: int,
    ) -> List[Itinerary]:
        """
        Enumerate every valid itinerary from origin to destination.

        Args:
            edges: Edges returned by the EdgeSource for this search.
            origin_id: Requested origin location id.
            destination_id: Requested destination location id.

        Returns:
            Ordered list of itineraries (may be empty).
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Algorithm identifier.

        Returns:
            Human-readable algorithm name.
        """
        ...
