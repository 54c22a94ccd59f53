"""
Database module for the transfer network.

Provides the SqliteDatabase class owning the single SQLite connection,
the table layout, and the locking shared by both repositories.
"""

import logging
import sqlite3
import threading
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

import pandas as pd

logger = logging.getLogger(__name__)

IN_MEMORY = ":memory:"


class SqliteDatabase:
    """
    SQLite database manager for locations and transportations.

    One connection is shared between threads; every access holds a
    re-entrant lock, so reads and writes are serialised.

    Attributes:
        path: Path to the database file, or ":memory:".

    Example:
        >>> db = SqliteDatabase(":memory:")
        >>> with db.transaction() as cursor:
        ...     _ = cursor.execute("SELECT COUNT(*) FROM locations")
        >>> db.close()
    """

    def __init__(self, path: str = "route_planner.db") -> None:
        """
        Open the connection and create tables.

        Args:
            path: Path to the SQLite database file.
        """
        logger.debug("Connecting to database: %s", path)
        self.path = path
        self._lock = threading.RLock()
        self._conn: Optional[sqlite3.Connection] = sqlite3.connect(
            path, check_same_thread=False
        )
        self._conn.execute("PRAGMA foreign_keys = ON")
        self._create_tables()

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise sqlite3.ProgrammingError("Database connection is closed")
        return self._conn

    def _create_tables(self) -> None:
        """
        Create database tables if they do not exist.

        Creates three tables:
            - locations: Named places with a unique code
            - transportations: Directed edges between two locations
            - transportation_operating_days: ISO weekdays per edge
        """
        with self.transaction() as cursor:
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS locations (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    country TEXT NOT NULL,
                    city TEXT NOT NULL,
                    location_code TEXT NOT NULL UNIQUE
                )
            ''')

            cursor.execute('''
                CREATE TABLE IF NOT EXISTS transportations (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    origin_location_id INTEGER NOT NULL REFERENCES locations(id),
                    destination_location_id INTEGER NOT NULL REFERENCES locations(id),
                    transportation_type TEXT NOT NULL,
                    CHECK (origin_location_id <> destination_location_id)
                )
            ''')

            cursor.execute('''
                CREATE TABLE IF NOT EXISTS transportation_operating_days (
                    transportation_id INTEGER NOT NULL
                        REFERENCES transportations(id) ON DELETE CASCADE,
                    day_of_week INTEGER NOT NULL
                        CHECK (day_of_week BETWEEN 1 AND 7),
                    PRIMARY KEY (transportation_id, day_of_week)
                )
            ''')

            cursor.execute(
                "CREATE INDEX IF NOT EXISTS idx_transportation_type "
                "ON transportations (transportation_type)"
            )
            cursor.execute(
                "CREATE INDEX IF NOT EXISTS idx_transportation_origin "
                "ON transportations (origin_location_id)"
            )
            cursor.execute(
                "CREATE INDEX IF NOT EXISTS idx_transportation_destination "
                "ON transportations (destination_location_id)"
            )

        logger.debug("Database tables created/verified")

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Cursor]:
        """
        Run statements atomically.

        Commits when the block exits normally and rolls back when it
        raises; the exception propagates.
        """
        with self._lock:
            conn = self.connection
            cursor = conn.cursor()
            try:
                yield cursor
                conn.commit()
            except BaseException:
                conn.rollback()
                raise
            finally:
                cursor.close()

    def read_frame(self, query: str, params: Sequence = ()) -> pd.DataFrame:
        """
        Run a SELECT and load the result into a DataFrame.

        Args:
            query: SQL query with '?' placeholders.
            params: Positional query parameters.

        Returns:
            Raw DataFrame (unvalidated).
        """
        logger.debug("Executing query: %s with params: %s", query, list(params))
        with self._lock:
            return pd.read_sql(query, self.connection, params=list(params))

    def close(self) -> None:
        """Close the connection (idempotent)."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                logger.debug("Database connection closed: %s", self.path)
