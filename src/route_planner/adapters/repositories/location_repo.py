"""
SQLite location repository.

Reads location rows through pandas, validates them against LocationSchema
and maps them to Location snapshots.
"""

import logging
import sqlite3
from typing import List, Optional

import pandas as pd

from src.route_planner.adapters.repositories.database import SqliteDatabase
from src.route_planner.exceptions import (
    DuplicateLocationCodeError,
    LocationInUseError,
)
from src.route_planner.ports.repositories import LocationRepository
from src.route_planner.schemas.location import Location, LocationSchema

logger = logging.getLogger(__name__)

_SELECT_LOCATIONS = """
    SELECT id, name, country, city, location_code
    FROM locations
"""


def locations_from_frame(df: pd.DataFrame) -> List[Location]:
    """
    Convert a validated location DataFrame to Location snapshots.

    Args:
        df: DataFrame conforming to LocationSchema.

    Returns:
        Locations in row order.
    """
    return [
        Location(
            id=int(row.id),
            name=row.name,
            country=row.country,
            city=row.city,
            code=row.location_code,
        )
        for row in df.itertuples(index=False)
    ]


class SqliteLocationRepository(LocationRepository):
    """
    LocationRepository backed by SqliteDatabase.

    Uniqueness of location codes and referential integrity are enforced by
    the database; constraint violations are translated to ConflictErrors.
    """

    def __init__(self, database: SqliteDatabase) -> None:
        self._db = database

    def _query(self, where: str = "", params: tuple = ()) -> List[Location]:
        df = self._db.read_frame(f"{_SELECT_LOCATIONS} {where} ORDER BY id", params)
        if df.empty:
            return []
        return locations_from_frame(LocationSchema.validate(df))

    def get(self, location_id: int) -> Optional[Location]:
        rows = self._query("WHERE id = ?", (location_id,))
        return rows[0] if rows else None

    def list_all(self) -> List[Location]:
        return self._query()

    def exists_by_code(self, code: str) -> bool:
        with self._db.transaction() as cursor:
            cursor.execute(
                "SELECT 1 FROM locations WHERE location_code = ? LIMIT 1", (code,)
            )
            return cursor.fetchone() is not None

    def add(self, location: Location) -> Location:
        try:
            with self._db.transaction() as cursor:
                cursor.execute(
                    "INSERT INTO locations (name, country, city, location_code) "
                    "VALUES (?, ?, ?, ?)",
                    (location.name, location.country, location.city, location.code),
                )
                new_id = cursor.lastrowid
        except sqlite3.IntegrityError as e:
            raise DuplicateLocationCodeError(location.code) from e

        logger.debug("Inserted location %s with id %d", location.code, new_id)
        return location.with_id(new_id)

    def update(self, location: Location) -> Location:
        try:
            with self._db.transaction() as cursor:
                cursor.execute(
                    "UPDATE locations SET name = ?, country = ?, city = ?, "
                    "location_code = ? WHERE id = ?",
                    (
                        location.name,
                        location.country,
                        location.city,
                        location.code,
                        location.id,
                    ),
                )
        except sqlite3.IntegrityError as e:
            raise DuplicateLocationCodeError(location.code) from e

        logger.debug("Updated location %d", location.id)
        return location

    def delete(self, location_id: int) -> bool:
        try:
            with self._db.transaction() as cursor:
                cursor.execute("DELETE FROM locations WHERE id = ?", (location_id,))
                deleted = cursor.rowcount > 0
        except sqlite3.IntegrityError as e:
            raise LocationInUseError(location_id) from e

        if deleted:
            logger.debug("Deleted location %d", location_id)
        return deleted
