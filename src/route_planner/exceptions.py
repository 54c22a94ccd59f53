"""
Custom exceptions for the route planner.

Provides a hierarchy of exceptions for clear error handling
of route searches, entity lookups and cache access.
"""

from typing import Any


class RoutePlannerError(Exception):
    """Base exception for all route planner errors."""

    pass


class NotFoundError(RoutePlannerError, LookupError):
    """Raised when a location or transportation id does not resolve."""

    def __init__(self, entity: str, entity_id: Any) -> None:
        self.entity = entity
        self.entity_id = entity_id
        message = f"{entity} not found with id: {entity_id}"
        super().__init__(message)


class InvalidInputError(RoutePlannerError, ValueError):
    """Raised when request input is malformed (dates, weekdays, fields)."""

    pass


class ConflictError(RoutePlannerError):
    """Base exception for writes that clash with stored data."""

    pass


class DuplicateLocationCodeError(ConflictError):
    """Raised when a location code is already taken."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"Location with code {code} already exists")


class LocationInUseError(ConflictError):
    """Raised when deleting a location still referenced by a transportation."""

    def __init__(self, location_id: int) -> None:
        self.location_id = location_id
        super().__init__(
            f"Location {location_id} is still referenced by transportations"
        )


class CacheUnavailableError(RoutePlannerError):
    """
    Raised by cache stores when the backend cannot be reached.

    Soft failure: the cache-aside layer logs it and carries on uncached.
    """

    pass


class EdgeSourceError(RoutePlannerError):
    """Raised when schedule edges cannot be fetched for a route search."""

    pass
