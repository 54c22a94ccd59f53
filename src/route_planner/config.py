"""
Configuration module for the route planner.

Loads environment variables (optionally from a .env file) into frozen
settings objects, so os.getenv calls are not scattered around the codebase.
"""

import os
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Mapping, Optional

from dotenv import load_dotenv

from src.route_planner.ports.cache_store import CacheRegion

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

CACHE_BACKENDS = ("memory", "redis")


@dataclass(frozen=True)
class CacheSettings:
    """
    Cache configuration.

    Attributes:
        enabled: When False, every lookup goes straight to storage.
        backend: 'memory' or 'redis'.
        redis_url: Connection URL used by the redis backend.
        key_prefix: Namespace prepended to redis keys.
        routes_ttl: Lifetime of cached route search results.
        locations_ttl: Lifetime of cached location lookups.
        transportations_ttl: Lifetime of cached transportation lookups.
    """

    enabled: bool = True
    backend: str = "memory"
    redis_url: str = "redis://localhost:6379/0"
    key_prefix: str = "route-planner:"
    routes_ttl: timedelta = timedelta(minutes=10)
    locations_ttl: timedelta = timedelta(minutes=30)
    transportations_ttl: timedelta = timedelta(minutes=30)

    def __post_init__(self) -> None:
        if self.backend not in CACHE_BACKENDS:
            raise ValueError(
                f"Unknown cache backend {self.backend!r}, "
                f"expected one of: {', '.join(CACHE_BACKENDS)}"
            )
        for region in CacheRegion:
            if self.ttl_for(region) <= timedelta(0):
                raise ValueError(f"TTL for region {region.value} must be positive")

    def ttl_for(self, region: CacheRegion) -> timedelta:
        """Return the TTL configured for a cache region."""
        if region is CacheRegion.ROUTES:
            return self.routes_ttl
        if region is CacheRegion.LOCATIONS:
            return self.locations_ttl
        return self.transportations_ttl


@dataclass(frozen=True)
class Settings:
    """
    Application settings.

    Attributes:
        db_path: SQLite database file (':memory:' for a throwaway database).
        log_level: Root log level name.
        seed_sample_data: Seed the sample network at start-up when empty.
        cache: Cache configuration.
    """

    db_path: str = "route_planner.db"
    log_level: str = "INFO"
    seed_sample_data: bool = False
    cache: CacheSettings = field(default_factory=CacheSettings)


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got {raw!r}")


def _parse_minutes(name: str, raw: str) -> timedelta:
    try:
        minutes = float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number of minutes, got {raw!r}") from e
    if minutes <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return timedelta(minutes=minutes)


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    use_dotenv: bool = True,
) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        environ: Variables to read. Defaults to os.environ.
        use_dotenv: Load a .env file into os.environ first.

    Returns:
        Populated Settings.

    Raises:
        ValueError: If a variable holds a malformed value.
    """
    if use_dotenv:
        load_dotenv()
    env = os.environ if environ is None else environ

    def get(name: str, default: str) -> str:
        return env.get(name, default)

    backend = get("ROUTE_PLANNER_CACHE_BACKEND", "memory").strip().lower()
    if backend not in CACHE_BACKENDS:
        raise ValueError(
            f"ROUTE_PLANNER_CACHE_BACKEND must be one of {', '.join(CACHE_BACKENDS)}, "
            f"got {backend!r}"
        )

    cache = CacheSettings(
        enabled=_parse_bool(
            "ROUTE_PLANNER_CACHE_ENABLED", get("ROUTE_PLANNER_CACHE_ENABLED", "true")
        ),
        backend=backend,
        redis_url=get("ROUTE_PLANNER_REDIS_URL", "redis://localhost:6379/0"),
        key_prefix=get("ROUTE_PLANNER_CACHE_KEY_PREFIX", "route-planner:"),
        routes_ttl=_parse_minutes(
            "ROUTE_PLANNER_ROUTES_TTL_MINUTES",
            get("ROUTE_PLANNER_ROUTES_TTL_MINUTES", "10"),
        ),
        locations_ttl=_parse_minutes(
            "ROUTE_PLANNER_LOCATIONS_TTL_MINUTES",
            get("ROUTE_PLANNER_LOCATIONS_TTL_MINUTES", "30"),
        ),
        transportations_ttl=_parse_minutes(
            "ROUTE_PLANNER_TRANSPORTATIONS_TTL_MINUTES",
            get("ROUTE_PLANNER_TRANSPORTATIONS_TTL_MINUTES", "30"),
        ),
    )

    return Settings(
        db_path=get("ROUTE_PLANNER_DB_PATH", "route_planner.db"),
        log_level=get("ROUTE_PLANNER_LOG_LEVEL", "INFO").strip().upper(),
        seed_sample_data=_parse_bool(
            "ROUTE_PLANNER_SEED_SAMPLE_DATA",
            get("ROUTE_PLANNER_SEED_SAMPLE_DATA", "false"),
        ),
        cache=cache,
    )
