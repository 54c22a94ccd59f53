"""
Edge Source port interface.

Defines the abstract contract for the collaborator that supplies the
schedule edges relevant to one route search.
"""

from abc import ABC, abstractmethod
from typing import List

from src.route_planner.schemas.transportation import ScheduleEdge


class EdgeSource(ABC):
    """
    Abstract interface for schedule edge sources.

    The edge source does the heavy filtering: the route enumerator only
    partitions what it is given and never re-validates relevance.

    Implementations:
    - SqliteTransportationRepository: single SQL round-trip per search
    """

    @abstractmethod
    def relevant_edges(
        self,
        origin_id: int,
        destination_id: int,
        weekday: int,
    ) -> List[ScheduleEdge]:
        """
        Return the edges relevant to a search on the given weekday.

        The result holds every FLIGHT edge operating that weekday, plus
        every ground edge operating that weekday whose origin is
        origin_id or whose destination is destination_id. Edges carry
        fully materialized origin/destination Location snapshots.

        Args:
            origin_id: Requested origin location id.
            destination_id: Requested destination location id.
            weekday: ISO weekday, 1 (Monday) to 7 (Sunday).

        Returns:
            List of relevant ScheduleEdge objects.

        Raises:
            InvalidInputError: If weekday is outside [1, 7].
            EdgeSourceError: If the edges cannot be fetched.
        """
        ...
