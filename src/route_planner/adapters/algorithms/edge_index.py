"""
Edge Index - partition and lookup tables for one route search.

Classifies the edges supplied by the EdgeSource into flights and ground
transfers, and builds the per-airport lookup tables the enumerator uses
instead of nested linear scans.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence, Tuple

from src.route_planner.schemas.transportation import ScheduleEdge

# Shared empty result for airports without entries
_NO_EDGES: Tuple[ScheduleEdge, ...] = ()


@dataclass(frozen=True)
class EdgeIndex:
    """
    Immutable partition of the edges relevant to one search.

    All lists keep the relative order in which the EdgeSource returned
    the edges.

    Attributes:
        origin_id: Requested origin location id.
        destination_id: Requested destination location id.
        flights: Every FLIGHT edge.
        ground_from_origin: Ground edges departing the origin.
        ground_to_destination: Ground edges arriving at the destination.
        flights_by_origin: Flights keyed by departure location id.
        ground_to_dest_by_airport: Ground edges to the destination keyed
            by their departure location id (the airport they leave from).
    """

    origin_id: int
    destination_id: int
    flights: Tuple[ScheduleEdge, ...]
    ground_from_origin: Tuple[ScheduleEdge, ...]
    ground_to_destination: Tuple[ScheduleEdge, ...]
    flights_by_origin: Mapping[int, Tuple[ScheduleEdge, ...]]
    ground_to_dest_by_airport: Mapping[int, Tuple[ScheduleEdge, ...]]

    def flights_from(self, location_id: int) -> Tuple[ScheduleEdge, ...]:
        """O(1) access to flights departing a location."""
        return self.flights_by_origin.get(location_id, _NO_EDGES)

    def transfers_to_destination_from(self, airport_id: int) -> Tuple[ScheduleEdge, ...]:
        """O(1) access to ground edges from an airport to the destination."""
        return self.ground_to_dest_by_airport.get(airport_id, _NO_EDGES)


def build_edge_index(
    edges: Sequence[ScheduleEdge],
    origin_id: int,
    destination_id: int,
) -> EdgeIndex:
    """
    Build an EdgeIndex in a single O(E) pass.

    A ground edge from the origin straight to the destination lands in
    both ground lists. Ground-only itineraries are not composed from it.

    Args:
        edges: Edges returned by the EdgeSource for this search.
        origin_id: Requested origin location id.
        destination_id: Requested destination location id.

    Returns:
        EdgeIndex over the given edges.
    """
    flights: List[ScheduleEdge] = []
    ground_from_origin: List[ScheduleEdge] = []
    ground_to_destination: List[ScheduleEdge] = []
    flights_by_origin: Dict[int, List[ScheduleEdge]] = defaultdict(list)
    ground_by_airport: Dict[int, List[ScheduleEdge]] = defaultdict(list)

    for edge in edges:
        if edge.is_flight:
            flights.append(edge)
            flights_by_origin[edge.origin_id].append(edge)
            continue

        if edge.origin_id == origin_id:
            ground_from_origin.append(edge)
        if edge.destination_id == destination_id:
            ground_to_destination.append(edge)
            ground_by_airport[edge.origin_id].append(edge)

    return EdgeIndex(
        origin_id=origin_id,
        destination_id=destination_id,
        flights=tuple(flights),
        ground_from_origin=tuple(ground_from_origin),
        ground_to_destination=tuple(ground_to_destination),
        flights_by_origin={k: tuple(v) for k, v in flights_by_origin.items()},
        ground_to_dest_by_airport={k: tuple(v) for k, v in ground_by_airport.items()},
    )
