"""
Route (itinerary) schemas.

Defines the output contract of the route enumerator: an itinerary is an
ordered sequence of 1-3 segments containing exactly one flight.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from src.route_planner.schemas.location import Location
from src.route_planner.schemas.transportation import ScheduleEdge, TransportMode


class SegmentKind(Enum):
    """Role a schedule edge plays inside one itinerary."""

    BEFORE_FLIGHT = "BEFORE_FLIGHT"
    FLIGHT = "FLIGHT"
    AFTER_FLIGHT = "AFTER_FLIGHT"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    SegmentKind.BEFORE_FLIGHT: "Before Flight Transfer",
    SegmentKind.FLIGHT: "Flight",
    SegmentKind.AFTER_FLIGHT: "After Flight Transfer",
}

# Position each kind must occupy relative to the others
_KIND_ORDER = {
    SegmentKind.BEFORE_FLIGHT: 0,
    SegmentKind.FLIGHT: 1,
    SegmentKind.AFTER_FLIGHT: 2,
}

MAX_SEGMENTS = 3


@dataclass(frozen=True)
class Segment:
    """
    Immutable traversal of one schedule edge within an itinerary.

    Attributes:
        transportation_id: Identifier of the traversed schedule edge.
        mode: Transport mode of the edge.
        origin: Snapshot of the departure location.
        destination: Snapshot of the arrival location.
        kind: Role of the edge in the itinerary.
    """

    transportation_id: Optional[int]
    mode: TransportMode
    origin: Location
    destination: Location
    kind: SegmentKind

    @classmethod
    def from_edge(cls, edge: ScheduleEdge, kind: SegmentKind) -> "Segment":
        """Create a segment snapshot of a schedule edge."""
        return cls(
            transportation_id=edge.id,
            mode=edge.mode,
            origin=edge.origin,
            destination=edge.destination,
            kind=kind,
        )


@dataclass(frozen=True)
class Itinerary:
    """
    Immutable travel plan of 1-3 segments with exactly one flight.

    Ground segments, when present, connect to the flight: the before-flight
    transfer ends where the flight departs, the after-flight transfer
    starts where the flight lands.
    """

    segments: Tuple[Segment, ...]

    @property
    def num_segments(self) -> int:
        return len(self.segments)

    @property
    def flight_segment(self) -> Segment:
        """The single FLIGHT segment."""
        return next(s for s in self.segments if s.kind is SegmentKind.FLIGHT)

    @property
    def origin(self) -> Location:
        """Where the itinerary starts."""
        return self.segments[0].origin

    @property
    def destination(self) -> Location:
        """Where the itinerary ends."""
        return self.segments[-1].destination

    @property
    def kinds(self) -> List[SegmentKind]:
        return [s.kind for s in self.segments]

    @property
    def location_codes(self) -> List[str]:
        """Ordered list of location codes visited (e.g., ['CCIST', 'IST', 'LHR'])."""
        codes = [self.segments[0].origin.code]
        codes.extend(s.destination.code for s in self.segments)
        return codes

    @classmethod
    def from_segments(cls, segments: Sequence[Segment]) -> "Itinerary":
        """
        Factory method to create an Itinerary from segments.

        Args:
            segments: Ordered segments of the itinerary.

        Returns:
            Validated Itinerary instance.

        Raises:
            ValueError: If the segments break the single-flight structure.
        """
        if not 1 <= len(segments) <= MAX_SEGMENTS:
            raise ValueError(
                f"Itinerary must have 1-{MAX_SEGMENTS} segments, got {len(segments)}"
            )

        flights = [s for s in segments if s.kind is SegmentKind.FLIGHT]
        if len(flights) != 1:
            raise ValueError(
                f"Itinerary must contain exactly one flight, got {len(flights)}"
            )

        orders = [_KIND_ORDER[s.kind] for s in segments]
        if orders != sorted(set(orders)):
            raise ValueError(f"Segments out of order: {[s.kind.value for s in segments]}")

        for prev, nxt in zip(segments, segments[1:]):
            if prev.destination.id != nxt.origin.id:
                raise ValueError(
                    f"Segment {prev.destination.code} does not connect to "
                    f"{nxt.origin.code}"
                )

        return cls(segments=tuple(segments))
