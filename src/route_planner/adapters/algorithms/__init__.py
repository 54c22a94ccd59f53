"""
Algorithm adapters for route composition.
"""

from src.route_planner.adapters.algorithms.edge_index import (
    EdgeIndex,
    build_edge_index,
)
from src.route_planner.adapters.algorithms.pattern_enumerator import (
    PatternRouteEnumerator,
)

__all__ = [
    "EdgeIndex",
    "PatternRouteEnumerator",
    "build_edge_index",
]
