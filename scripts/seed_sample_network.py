#!/usr/bin/env python3
"""
Seed a route planner database with the sample transfer network.

Inserts eight Istanbul/Ankara/London locations and fifteen
transportations. Does nothing when the database already holds locations.

Usage:
    python scripts/seed_sample_network.py
    python scripts/seed_sample_network.py --db route_planner.db --log-level DEBUG
"""

import logging
from pathlib import Path
from typing import Optional

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.route_planner.application import RoutePlanner
from src.route_planner.config import Settings, load_settings
from src.route_planner.logging_config import setup_logging
from src.route_planner.ports.cache_store import CacheStore

logger = logging.getLogger(__name__)


def main(
    db_path: Optional[str] = None,
    log_level: Optional[str] = None,
    cache_store: Optional[CacheStore] = None,
) -> bool:
    """
    Seed the database.

    Args:
        db_path: SQLite database file. Defaults to ROUTE_PLANNER_DB_PATH.
        log_level: Log level name. Defaults to ROUTE_PLANNER_LOG_LEVEL.
        cache_store: Cache backend to evict after the inserts. Defaults to
            the backend selected by the ROUTE_PLANNER_CACHE_* settings, so
            running servers sharing it drop their cached lookups.

    Returns:
        True if the sample network was inserted.
    """
    env_settings = load_settings()
    setup_logging(log_level or env_settings.log_level)

    settings = Settings(
        db_path=db_path or env_settings.db_path,
        log_level=log_level or env_settings.log_level,
        seed_sample_data=False,
        cache=env_settings.cache,
    )

    with RoutePlanner(settings, cache_store=cache_store) as planner:
        inserted = planner.seed_sample_network()

    if inserted:
        logger.info("Sample network written to %s", settings.db_path)
    else:
        logger.info("Database %s already populated, nothing to do", settings.db_path)
    return inserted


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Seed the sample transfer network")
    parser.add_argument("--db", type=str, help="SQLite database file")
    parser.add_argument("--log-level", type=str, help="Log level (DEBUG, INFO, ...)")
    args = parser.parse_args()

    main(db_path=args.db, log_level=args.log_level)
