"""
SQLite persistence adapters.
"""

from src.route_planner.adapters.repositories.database import SqliteDatabase
from src.route_planner.adapters.repositories.location_repo import (
    SqliteLocationRepository,
)
from src.route_planner.adapters.repositories.transportation_repo import (
    SqliteTransportationRepository,
)

__all__ = [
    "SqliteDatabase",
    "SqliteLocationRepository",
    "SqliteTransportationRepository",
]
