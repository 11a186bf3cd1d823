"""Nearest-depot clustering of vendors and their orders."""

from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

from ...models.domain import Coordinate, Depot, DepotId, Node
from ..geospatial import distance
from .models import ClusteringResult, IssueKind, RoutingIssue, VendorOrderCluster

logger = logging.getLogger(__name__)


def nearest_depot(depots: Sequence[Depot], location: Coordinate) -> Optional[Depot]:
    """Return the closest depot; the first one listed wins a tie."""

    best: Optional[Depot] = None
    best_distance = math.inf
    for depot in depots:
        candidate = distance(depot.location, location)
        if candidate < best_distance:
            best = depot
            best_distance = candidate
    return best


def orders_for_vendor(vendor: Node, orders: Sequence[Node]) -> list[Node]:
    return [order for order in orders if order.vendor_id == vendor.node_id]


def cluster_by_nearest_depot(
    depots: Sequence[Depot],
    vendors: Sequence[Node],
    orders: Sequence[Node],
) -> ClusteringResult:
    """Group each vendor with its orders under the depot nearest to the vendor."""

    clusters: dict[DepotId, list[VendorOrderCluster]] = {}
    issues: list[RoutingIssue] = []

    for vendor in vendors:
        depot = nearest_depot(depots, vendor.location)
        if depot is None:
            logger.warning("No depot available for vendor %s", vendor.node_id)
            issues.append(
                RoutingIssue(
                    kind=IssueKind.NO_DEPOT_AVAILABLE,
                    node_id=vendor.node_id,
                    depot_id=None,
                    detail="Depot list is empty.",
                )
            )
            continue
        cluster = VendorOrderCluster(vendor=vendor, orders=orders_for_vendor(vendor, orders))
        clusters.setdefault(depot.depot_id, []).append(cluster)

    vendor_ids = {vendor.node_id for vendor in vendors}
    for order in orders:
        if order.vendor_id not in vendor_ids:
            logger.warning("Order %s references unknown vendor %s", order.node_id, order.vendor_id)
            issues.append(
                RoutingIssue(
                    kind=IssueKind.UNKNOWN_NODE_REFERENCE,
                    node_id=order.node_id,
                    depot_id=None,
                    detail=f"Vendor {order.vendor_id!r} is not in the vendor list.",
                )
            )

    logger.info("Clustered %d vendors across %d depots", sum(len(group) for group in clusters.values()), len(clusters))
    return ClusteringResult(clusters=clusters, issues=issues)
