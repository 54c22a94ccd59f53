"""
Pattern Route Enumerator - single-flight itinerary composition.

Applies the four itinerary patterns of the transfer network against an
EdgeIndex:
1. Direct flight (Origin -> Destination)
2. Ground transfer + Flight (Origin -> Airport -> Destination)
3. Flight + Ground transfer (Origin -> Airport -> Destination)
4. Ground + Flight + Ground (Origin -> Airport1 -> Airport2 -> Destination)
"""

import logging
from typing import Iterator, List, Sequence

from src.route_planner.adapters.algorithms.edge_index import EdgeIndex, build_edge_index
from src.route_planner.ports.route_enumerator import RouteEnumerator
from src.route_planner.schemas.route import Itinerary, Segment, SegmentKind
from src.route_planner.schemas.transportation import ScheduleEdge

logger = logging.getLogger(__name__)


class PatternRouteEnumerator(RouteEnumerator):
    """
    Enumerates every itinerary matching one of the four patterns.

    Patterns are evaluated independently and in fixed order; one network
    may satisfy several, yielding several itineraries. Results are neither
    deduplicated nor ranked.

    Attributes:
        _stable_order: If True, sort edges by id before indexing so the
            result order does not depend on the EdgeSource's order.
    """

    def __init__(self, stable_order: bool = False) -> None:
        """
        Initialize the enumerator.

        Args:
            stable_order: Sort input edges by identifier first. Default
                False keeps the EdgeSource's order.
        """
        self._stable_order = stable_order

    @property
    def name(self) -> str:
        """Algorithm identifier."""
        return "Four-Pattern Single-Flight Enumerator"

    def enumerate_routes(
        self,
        edges: Sequence[ScheduleEdge],
        origin_id: int,
        destination_id: int,
    ) -> List[Itinerary]:
        """
        Enumerate itineraries in pattern order 1, 2, 3, 4.

        Args:
            edges: Edges returned by the EdgeSource for this search.
            origin_id: Requested origin location id.
            destination_id: Requested destination location id.

        Returns:
            Ordered list of itineraries (empty if none match).
        """
        if self._stable_order:
            edges = sorted(edges, key=lambda e: (e.id is None, e.id or 0))

        index = build_edge_index(edges, origin_id, destination_id)

        logger.debug(
            "Edge index for %s -> %s: %d flights, %d transfers from origin, "
            "%d transfers to destination",
            origin_id,
            destination_id,
            len(index.flights),
            len(index.ground_from_origin),
            len(index.ground_to_destination),
        )

        itineraries: List[Itinerary] = []
        itineraries.extend(self._direct_flights(index))
        itineraries.extend(self._transfer_then_flight(index))
        itineraries.extend(self._flight_then_transfer(index))
        itineraries.extend(self._transfer_flight_transfer(index))
        return itineraries

    def _direct_flights(self, index: EdgeIndex) -> Iterator[Itinerary]:
        """Pattern 1: a flight straight from origin to destination."""
        for flight in index.flights_from(index.origin_id):
            if flight.destination_id == index.destination_id:
                yield Itinerary.from_segments(
                    [Segment.from_edge(flight, SegmentKind.FLIGHT)]
                )

    def _transfer_then_flight(self, index: EdgeIndex) -> Iterator[Itinerary]:
        """Pattern 2: ground transfer to an airport, then a flight to destination."""
        for transfer in index.ground_from_origin:
            for flight in index.flights_from(transfer.destination_id):
                if flight.destination_id == index.destination_id:
                    yield Itinerary.from_segments(
                        [
                            Segment.from_edge(transfer, SegmentKind.BEFORE_FLIGHT),
                            Segment.from_edge(flight, SegmentKind.FLIGHT),
                        ]
                    )

    def _flight_then_transfer(self, index: EdgeIndex) -> Iterator[Itinerary]:
        """Pattern 3: flight from origin, then ground transfer to destination."""
        for flight in index.flights_from(index.origin_id):
            for transfer in index.transfers_to_destination_from(flight.destination_id):
                yield Itinerary.from_segments(
                    [
                        Segment.from_edge(flight, SegmentKind.FLIGHT),
                        Segment.from_edge(transfer, SegmentKind.AFTER_FLIGHT),
                    ]
                )

    def _transfer_flight_transfer(self, index: EdgeIndex) -> Iterator[Itinerary]:
        """Pattern 4: ground transfer, flight, ground transfer."""
        for before in index.ground_from_origin:
            for flight in index.flights_from(before.destination_id):
                for after in index.transfers_to_destination_from(flight.destination_id):
                    yield Itinerary.from_segments(
                        [
                            Segment.from_edge(before, SegmentKind.BEFORE_FLIGHT),
                            Segment.from_edge(flight, SegmentKind.FLIGHT),
                            Segment.from_edge(after, SegmentKind.AFTER_FLIGHT),
                        ]
                    )
