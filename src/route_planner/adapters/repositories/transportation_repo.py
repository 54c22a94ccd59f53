"""
SQLite transportation repository and Edge Source.

Transportations are loaded joined with both endpoint locations, so every
ScheduleEdge carries eager Location snapshots. The same adapter answers
the per-search "relevant edges" query used by route searches.
"""

import logging
import sqlite3
from typing import List, Optional

import pandas as pd
import pandera.errors

from src.route_planner.adapters.repositories.database import SqliteDatabase
from src.route_planner.exceptions import EdgeSourceError
from src.route_planner.ports.edge_source import EdgeSource
from src.route_planner.ports.repositories import TransportationRepository
from src.route_planner.schemas.location import Location
from src.route_planner.schemas.transportation import (
    ScheduleEdge,
    ScheduleEdgeSchema,
    TransportMode,
    parse_operating_days,
    validate_weekday,
)

logger = logging.getLogger(__name__)

_SELECT_EDGES = """
    SELECT
        t.id AS transportation_id,
        t.transportation_type,
        o.id AS origin_id,
        o.name AS origin_name,
        o.country AS origin_country,
        o.city AS origin_city,
        o.location_code AS origin_code,
        d.id AS destination_id,
        d.name AS destination_name,
        d.country AS destination_country,
        d.city AS destination_city,
        d.location_code AS destination_code,
        (
            SELECT GROUP_CONCAT(od.day_of_week)
            FROM transportation_operating_days od
            WHERE od.transportation_id = t.id
        ) AS operating_days
    FROM transportations t
    JOIN locations o ON o.id = t.origin_location_id
    JOIN locations d ON d.id = t.destination_location_id
"""

# Every flight plus ground edges touching the requested endpoints,
# restricted to edges operating on the weekday
_RELEVANT_FILTER = """
    WHERE EXISTS (
        SELECT 1 FROM transportation_operating_days od
        WHERE od.transportation_id = t.id AND od.day_of_week = ?
    )
    AND (
        t.transportation_type = ?
        OR t.origin_location_id = ?
        OR t.destination_location_id = ?
    )
"""


def edges_from_frame(df: pd.DataFrame) -> List[ScheduleEdge]:
    """
    Convert a validated schedule edge DataFrame to ScheduleEdges.

    Args:
        df: DataFrame conforming to ScheduleEdgeSchema.

    Returns:
        ScheduleEdges in row order.
    """
    edges: List[ScheduleEdge] = []
    for row in df.itertuples(index=False):
        origin = Location(
            id=int(row.origin_id),
            name=row.origin_name,
            country=row.origin_country,
            city=row.origin_city,
            code=row.origin_code,
        )
        destination = Location(
            id=int(row.destination_id),
            name=row.destination_name,
            country=row.destination_country,
            city=row.destination_city,
            code=row.destination_code,
        )
        edges.append(
            ScheduleEdge(
                id=int(row.transportation_id),
                origin=origin,
                destination=destination,
                mode=TransportMode(row.transportation_type),
                operating_days=parse_operating_days(row.operating_days),
            )
        )
    return edges


class SqliteTransportationRepository(TransportationRepository, EdgeSource):
    """
    Transportation persistence and Edge Source backed by SqliteDatabase.

    Edges are always returned ordered by transportation id.
    """

    def __init__(self, database: SqliteDatabase) -> None:
        self._db = database

    def _query(self, where: str = "", params: tuple = ()) -> List[ScheduleEdge]:
        df = self._db.read_frame(f"{_SELECT_EDGES} {where} ORDER BY t.id", params)
        if df.empty:
            return []
        return edges_from_frame(ScheduleEdgeSchema.validate(df))

    # -------------------------------------------------------------------------
    # EdgeSource
    # -------------------------------------------------------------------------

    def relevant_edges(
        self,
        origin_id: int,
        destination_id: int,
        weekday: int,
    ) -> List[ScheduleEdge]:
        """
        Fetch the edges that can take part in a search.

        Raises:
            InvalidInputError: If weekday is outside [1, 7].
            EdgeSourceError: If the query or row validation fails.
        """
        validate_weekday(weekday)
        params = (weekday, TransportMode.FLIGHT.value, origin_id, destination_id)

        try:
            edges = self._query(_RELEVANT_FILTER, params)
        except (
            sqlite3.Error,
            pd.errors.DatabaseError,
            pandera.errors.SchemaError,
        ) as e:
            raise EdgeSourceError(f"Failed to load schedule edges: {e}") from e

        logger.debug(
            "Loaded %d relevant edges for %s -> %s on weekday %d",
            len(edges),
            origin_id,
            destination_id,
            weekday,
        )
        return edges

    # -------------------------------------------------------------------------
    # TransportationRepository
    # -------------------------------------------------------------------------

    def get(self, transportation_id: int) -> Optional[ScheduleEdge]:
        rows = self._query("WHERE t.id = ?", (transportation_id,))
        return rows[0] if rows else None

    def list_all(self) -> List[ScheduleEdge]:
        return self._query()

    def add(self, edge: ScheduleEdge) -> ScheduleEdge:
        with self._db.transaction() as cursor:
            cursor.execute(
                "INSERT INTO transportations "
                "(origin_location_id, destination_location_id, transportation_type) "
                "VALUES (?, ?, ?)",
                (edge.origin_id, edge.destination_id, edge.mode.value),
            )
            new_id = cursor.lastrowid
            self._write_days(cursor, new_id, edge)

        logger.debug("Inserted transportation %d (%s)", new_id, edge.mode.value)
        return ScheduleEdge(
            id=new_id,
            origin=edge.origin,
            destination=edge.destination,
            mode=edge.mode,
            operating_days=edge.operating_days,
        )

    def update(self, edge: ScheduleEdge) -> ScheduleEdge:
        with self._db.transaction() as cursor:
            cursor.execute(
                "UPDATE transportations SET origin_location_id = ?, "
                "destination_location_id = ?, transportation_type = ? WHERE id = ?",
                (edge.origin_id, edge.destination_id, edge.mode.value, edge.id),
            )
            cursor.execute(
                "DELETE FROM transportation_operating_days WHERE transportation_id = ?",
                (edge.id,),
            )
            self._write_days(cursor, edge.id, edge)

        logger.debug("Updated transportation %d", edge.id)
        return edge

    def delete(self, transportation_id: int) -> bool:
        with self._db.transaction() as cursor:
            cursor.execute(
                "DELETE FROM transportations WHERE id = ?", (transportation_id,)
            )
            deleted = cursor.rowcount > 0

        if deleted:
            logger.debug("Deleted transportation %d", transportation_id)
        return deleted

    @staticmethod
    def _write_days(cursor: sqlite3.Cursor, transportation_id: int, edge: ScheduleEdge) -> None:
        cursor.executemany(
            "INSERT INTO transportation_operating_days "
            "(transportation_id, day_of_week) VALUES (?, ?)",
            [(transportation_id, day) for day in edge.sorted_days],
        )
