"""
Domain services for the route planner.
"""

from src.route_planner.services.cache_aside import CacheAside
from src.route_planner.services.location_service import LocationService
from src.route_planner.services.route_service import RouteService
from src.route_planner.services.transportation_service import TransportationService

__all__ = [
    "CacheAside",
    "LocationService",
    "RouteService",
    "TransportationService",
]
