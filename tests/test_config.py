"""
Tests for settings loading and logging setup.

Tests cover:
- Defaults and every environment override
- Malformed values naming the offending variable
- Root logger configuration and level names
"""

import io
import logging
from datetime import timedelta

import pytest

from src.route_planner.config import CacheSettings, Settings, load_settings
from src.route_planner.logging_config import resolve_level, setup_logging
from src.route_planner.ports.cache_store import CacheRegion


# =============================================================================
# SETTINGS
# =============================================================================


class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings(environ={}, use_dotenv=False)

        assert settings == Settings()
        assert settings.db_path == "route_planner.db"
        assert settings.log_level == "INFO"
        assert settings.seed_sample_data is False
        assert settings.cache.enabled is True
        assert settings.cache.backend == "memory"
        assert settings.cache.redis_url == "redis://localhost:6379/0"
        assert settings.cache.key_prefix == "route-planner:"
        assert settings.cache.ttl_for(CacheRegion.ROUTES) == timedelta(minutes=10)
        assert settings.cache.ttl_for(CacheRegion.LOCATIONS) == timedelta(minutes=30)
        assert settings.cache.ttl_for(CacheRegion.TRANSPORTATIONS) == timedelta(minutes=30)

    def test_every_override(self):
        settings = load_settings(
            environ={
                "ROUTE_PLANNER_DB_PATH": ":memory:",
                "ROUTE_PLANNER_LOG_LEVEL": "debug",
                "ROUTE_PLANNER_SEED_SAMPLE_DATA": "yes",
                "ROUTE_PLANNER_CACHE_ENABLED": "off",
                "ROUTE_PLANNER_CACHE_BACKEND": "Redis",
                "ROUTE_PLANNER_REDIS_URL": "redis://cache:6379/1",
                "ROUTE_PLANNER_CACHE_KEY_PREFIX": "rp:",
                "ROUTE_PLANNER_ROUTES_TTL_MINUTES": "2.5",
                "ROUTE_PLANNER_LOCATIONS_TTL_MINUTES": "60",
                "ROUTE_PLANNER_TRANSPORTATIONS_TTL_MINUTES": "5",
            },
            use_dotenv=False,
        )

        assert settings.db_path == ":memory:"
        assert settings.log_level == "DEBUG"
        assert settings.seed_sample_data is True
        assert settings.cache.enabled is False
        assert settings.cache.backend == "redis"
        assert settings.cache.redis_url == "redis://cache:6379/1"
        assert settings.cache.key_prefix == "rp:"
        assert settings.cache.routes_ttl == timedelta(seconds=150)
        assert settings.cache.locations_ttl == timedelta(hours=1)
        assert settings.cache.transportations_ttl == timedelta(minutes=5)

    @pytest.mark.parametrize("raw, expected", [("1", True), ("TRUE", True), ("no", False), (" 0 ", False)])
    def test_boolean_spellings(self, raw, expected):
        settings = load_settings(
            environ={"ROUTE_PLANNER_CACHE_ENABLED": raw}, use_dotenv=False
        )
        assert settings.cache.enabled is expected

    @pytest.mark.parametrize(
        "name, value",
        [
            ("ROUTE_PLANNER_CACHE_ENABLED", "maybe"),
            ("ROUTE_PLANNER_SEED_SAMPLE_DATA", "sometimes"),
            ("ROUTE_PLANNER_CACHE_BACKEND", "memcached"),
            ("ROUTE_PLANNER_ROUTES_TTL_MINUTES", "ten"),
            ("ROUTE_PLANNER_LOCATIONS_TTL_MINUTES", "0"),
            ("ROUTE_PLANNER_TRANSPORTATIONS_TTL_MINUTES", "-5"),
        ],
    )
    def test_malformed_value_names_variable(self, name, value):
        with pytest.raises(ValueError, match=name):
            load_settings(environ={name: value}, use_dotenv=False)

    def test_cache_settings_validate(self):
        with pytest.raises(ValueError, match="Unknown cache backend"):
            CacheSettings(backend="disk")
        with pytest.raises(ValueError, match="routes"):
            CacheSettings(routes_ttl=timedelta(0))


# =============================================================================
# LOGGING
# =============================================================================


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_installs_single_handler(self):
        setup_logging("debug", stream=io.StringIO())
        setup_logging("WARNING", stream=io.StringIO())

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1

    def test_record_format(self):
        stream = io.StringIO()
        setup_logging(logging.INFO, stream=stream)

        logging.getLogger("src.route_planner.test").info("searching %s", "IST")

        line = stream.getvalue()
        assert "[INFO] src.route_planner.test" in line
        assert line.rstrip().endswith("- searching IST")
        assert "\033[" not in line

    def test_quiet_loggers_raised_to_warning(self):
        setup_logging("DEBUG", stream=io.StringIO())
        assert logging.getLogger("httpx").level == logging.WARNING

    @pytest.mark.parametrize("level, expected", [("info", logging.INFO), (" Debug ", logging.DEBUG), (30, 30)])
    def test_resolve_level(self, level, expected):
        assert resolve_level(level) == expected

    def test_unknown_level(self):
        with pytest.raises(ValueError, match="Unknown log level: CHATTY"):
            setup_logging("chatty")
