"""
Schema definitions for the route planner.

Frozen dataclasses for the domain types and Pandera-validated DataFrames
as the storage boundary contracts.
"""

from .location import Location, LocationDataFrame, LocationSchema
from .route import Itinerary, Segment, SegmentKind
from .transportation import (
    ScheduleEdge,
    ScheduleEdgeDataFrame,
    ScheduleEdgeSchema,
    TransportMode,
)

__all__ = [
    # Locations
    "Location",
    "LocationSchema",
    "LocationDataFrame",
    # Schedule edges
    "TransportMode",
    "ScheduleEdge",
    "ScheduleEdgeSchema",
    "ScheduleEdgeDataFrame",
    # Routes
    "SegmentKind",
    "Segment",
    "Itinerary",
]
