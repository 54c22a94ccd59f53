"""
Transportation (schedule edge) schemas.

A schedule edge is one transportation between two locations, operated by a
single transport mode on a fixed set of ISO weekdays (Monday = 1).
Origin and destination are eager Location snapshots, so the routing
algorithm never performs lookups mid-search.
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Tuple, Union

import pandera as pa
from pandera.typing import DataFrame, Series

from src.route_planner.exceptions import InvalidInputError
from src.route_planner.schemas.location import Location

MONDAY = 1
SUNDAY = 7


class TransportMode(Enum):
    """Transport mode of a schedule edge."""

    FLIGHT = "FLIGHT"
    BUS = "BUS"
    SUBWAY = "SUBWAY"
    UBER = "UBER"

    @property
    def is_ground_transport(self) -> bool:
        """True for short ground transfers, False for the long-haul mode."""
        return self is not TransportMode.FLIGHT

    @classmethod
    def parse(cls, value: Union["TransportMode", str]) -> "TransportMode":
        """
        Coerce a member or a member name (case-insensitive) to TransportMode.

        Raises:
            InvalidInputError: If the value names no transport mode.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        valid = ", ".join(m.value for m in cls)
        raise InvalidInputError(
            f"Unknown transportation type {value!r}, expected one of: {valid}"
        )


def validate_weekday(weekday: int) -> int:
    """
    Validate an ISO weekday number.

    Raises:
        InvalidInputError: If weekday is not an int in [1, 7].
    """
    if isinstance(weekday, bool) or not isinstance(weekday, int):
        raise InvalidInputError(f"Weekday must be an integer, got {weekday!r}")
    if not MONDAY <= weekday <= SUNDAY:
        raise InvalidInputError(
            f"Weekday must be between {MONDAY} (Monday) and {SUNDAY} (Sunday), "
            f"got {weekday}"
        )
    return weekday


def validate_operating_days(days: Optional[Iterable[int]]) -> FrozenSet[int]:
    """
    Validate and normalize a collection of operating weekdays.

    Raises:
        InvalidInputError: If the collection is empty or holds a day
            outside [1, 7].
    """
    if days is None:
        raise InvalidInputError("Operating days are required")
    normalized = frozenset(days)
    if not normalized:
        raise InvalidInputError("Operating days are required")
    if not all(
        isinstance(day, int) and not isinstance(day, bool) and MONDAY <= day <= SUNDAY
        for day in normalized
    ):
        raise InvalidInputError(
            "Operating days must be between 1 (Monday) and 7 (Sunday)"
        )
    return normalized


def validate_distinct_endpoints(origin_id: Optional[int], destination_id: Optional[int]) -> None:
    """
    Reject an edge whose origin and destination are the same location.

    Raises:
        InvalidInputError: If both ids are known and equal.
    """
    if origin_id is not None and origin_id == destination_id:
        raise InvalidInputError("Origin and destination locations must be different")


@dataclass(frozen=True)
class ScheduleEdge:
    """
    Immutable transportation between two locations.

    Attributes:
        origin: Snapshot of the departure location.
        destination: Snapshot of the arrival location.
        mode: Transport mode.
        operating_days: ISO weekdays (1..7) on which the edge operates.
        id: Storage identifier, None until persisted.
    """

    origin: Location
    destination: Location
    mode: TransportMode
    operating_days: FrozenSet[int]
    id: Optional[int] = None

    def __post_init__(self) -> None:
        """Normalize operating days and validate edge invariants."""
        object.__setattr__(self, "mode", TransportMode.parse(self.mode))
        object.__setattr__(
            self, "operating_days", validate_operating_days(self.operating_days)
        )
        validate_distinct_endpoints(self.origin.id, self.destination.id)
        if self.origin.id is None and self.origin.code == self.destination.code:
            raise InvalidInputError("Origin and destination locations must be different")

    @property
    def origin_id(self) -> Optional[int]:
        return self.origin.id

    @property
    def destination_id(self) -> Optional[int]:
        return self.destination.id

    @property
    def is_flight(self) -> bool:
        return self.mode is TransportMode.FLIGHT

    @property
    def sorted_days(self) -> Tuple[int, ...]:
        """Operating days in ascending order (for display)."""
        return tuple(sorted(self.operating_days))

    def is_active_on(self, weekday: int) -> bool:
        """Check if the edge operates on the given ISO weekday."""
        return weekday in self.operating_days


def parse_operating_days(raw: str) -> FrozenSet[int]:
    """
    Parse a comma-separated day list (as produced by GROUP_CONCAT).

    Example:
        >>> sorted(parse_operating_days("3,1,2"))
        [1, 2, 3]
    """
    return frozenset(int(part) for part in str(raw).split(",") if part.strip())


class ScheduleEdgeSchema(pa.DataFrameModel):
    """
    Pandera schema for schedule edge rows joined with both locations.

    One row per transportation; location snapshot columns are prefixed
    with 'origin_' and 'destination_'.
    """

    transportation_id: Series[int] = pa.Field(ge=1)
    transportation_type: Series[str] = pa.Field(
        isin=[mode.value for mode in TransportMode],
        description="Transport mode name",
    )
    origin_id: Series[int] = pa.Field(ge=1)
    origin_name: Series[str] = pa.Field(nullable=False)
    origin_country: Series[str] = pa.Field(nullable=False)
    origin_city: Series[str] = pa.Field(nullable=False)
    origin_code: Series[str] = pa.Field(nullable=False)
    destination_id: Series[int] = pa.Field(ge=1)
    destination_name: Series[str] = pa.Field(nullable=False)
    destination_country: Series[str] = pa.Field(nullable=False)
    destination_city: Series[str] = pa.Field(nullable=False)
    destination_code: Series[str] = pa.Field(nullable=False)
    operating_days: Series[str] = pa.Field(
        nullable=False,
        str_matches=r"^[1-7](,[1-7])*$",
        description="Comma-separated ISO weekdays",
    )

    class Config:
        strict = False
        coerce = True
        name = "ScheduleEdgeSchema"

    @pa.dataframe_check
    def distinct_endpoints(cls, df: DataFrame) -> Series[bool]:
        """Origin and destination must differ on every row."""
        return df["origin_id"] != df["destination_id"]


ScheduleEdgeDataFrame = DataFrame[ScheduleEdgeSchema]
