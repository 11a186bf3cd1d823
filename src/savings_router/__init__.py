"""Capacitated vehicle routing with the Clarke-Wright savings heuristic."""

from .models.domain import Coordinate, Depot, Node, NodeType
from .services.geospatial import distance
from .services.routing import (
    RoutingDeadlineExceeded,
    clark_wright_merge,
    cluster_by_nearest_depot,
    compute_savings,
    multi_depot_route,
)

__all__ = [
    "Coordinate",
    "Depot",
    "Node",
    "NodeType",
    "RoutingDeadlineExceeded",
    "clark_wright_merge",
    "cluster_by_nearest_depot",
    "compute_savings",
    "distance",
    "multi_depot_route",
]
