"""
Application layer - public entry points.
"""

from src.route_planner.application.route_planner import RoutePlanner
from src.route_planner.application.sample_network import seed_sample_network

__all__ = ["RoutePlanner", "seed_sample_network"]
