"""
Location schemas.

Defines the immutable Location record used as an eager snapshot inside
schedule edges and segments, plus the Pandera contract for location rows
read from storage.
"""

from dataclasses import dataclass, replace
from typing import Optional

import pandera as pa
from pandera.typing import DataFrame, Series

from src.route_planner.exceptions import InvalidInputError

MIN_CODE_LENGTH = 3


@dataclass(frozen=True)
class Location:
    """
    Immutable location snapshot.

    Attributes:
        name: Display name (e.g., 'Istanbul Airport').
        country: Country name.
        city: City name.
        code: Unique short code, at least 3 characters (e.g., 'IST').
        id: Storage identifier, None until persisted.
    """

    name: str
    country: str
    city: str
    code: str
    id: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate fields after initialization."""
        for field_name in ("name", "country", "city"):
            value = getattr(self, field_name)
            if not isinstance(value, str) or not value.strip():
                raise InvalidInputError(f"{field_name.capitalize()} is required")
        if not isinstance(self.code, str) or not self.code.strip():
            raise InvalidInputError("Location code is required")
        if len(self.code.strip()) < MIN_CODE_LENGTH:
            raise InvalidInputError(
                f"Location code must be at least {MIN_CODE_LENGTH} characters"
            )

    def with_id(self, location_id: int) -> "Location":
        """Return a copy carrying the given storage id."""
        return replace(self, id=location_id)


class LocationSchema(pa.DataFrameModel):
    """
    Pandera schema for location rows loaded from storage.

    Validation happens once per query at the repository boundary.
    """

    id: Series[int] = pa.Field(ge=1, description="Location identifier")
    name: Series[str] = pa.Field(nullable=False, description="Display name")
    country: Series[str] = pa.Field(nullable=False, description="Country name")
    city: Series[str] = pa.Field(nullable=False, description="City name")
    location_code: Series[str] = pa.Field(
        nullable=False,
        unique=True,
        str_length={"min_value": MIN_CODE_LENGTH},
        description="Unique short code (e.g., 'IST')",
    )

    class Config:
        strict = False
        coerce = True
        name = "LocationSchema"


LocationDataFrame = DataFrame[LocationSchema]
