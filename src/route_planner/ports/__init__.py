"""
Port interfaces for the route planner.

Ports define the abstract interfaces (ABCs and Protocols) that the domain
layer uses to communicate with external systems. This follows the
Ports and Adapters (Hexagonal) architecture pattern.
"""

from src.route_planner.ports.cache_store import CacheRegion, CacheStore
from src.route_planner.ports.edge_source import EdgeSource
from src.route_planner.ports.repositories import (
    LocationLookup,
    LocationRepository,
    TransportationRepository,
)
from src.route_planner.ports.route_enumerator import RouteEnumerator

__all__ = [
    "CacheRegion",
    "CacheStore",
    "EdgeSource",
    "LocationLookup",
    "LocationRepository",
    "RouteEnumerator",
    "TransportationRepository",
]
