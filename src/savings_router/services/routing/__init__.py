"""Savings-based route construction."""

from .clarke_wright import RouteMerger, clark_wright_merge
from .clustering import cluster_by_nearest_depot, nearest_depot
from .deadline import RoutingDeadlineExceeded
from .multi_depot import multi_depot_route
from .savings import compute_savings, rank_savings

__all__ = [
    "RouteMerger",
    "RoutingDeadlineExceeded",
    "clark_wright_merge",
    "cluster_by_nearest_depot",
    "compute_savings",
    "multi_depot_route",
    "nearest_depot",
    "rank_savings",
]
