"""
Fixtures for FastAPI endpoint tests.

Provides a TestClient whose planner dependency is the seeded in-memory
planner from the root conftest.
"""

import pytest
from fastapi.testclient import TestClient

from src.api.routes_api import app, get_planner


@pytest.fixture
def client(planner):
    """TestClient bound to the seeded sample network."""
    app.dependency_overrides[get_planner] = lambda: planner
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def location_payload() -> dict:
    return {
        "name": "Ataturk Airport",
        "country": "Turkey",
        "city": "Istanbul",
        "location_code": "ISL",
    }


@pytest.fixture
def transportation_payload() -> dict:
    return {
        "origin_location_id": 2,
        "destination_location_id": 5,
        "transportation_type": "UBER",
        "operating_days": [3, 1],
    }
