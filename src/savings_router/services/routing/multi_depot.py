"""Multi-depot routing: cluster by nearest depot, then merge per cluster."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ...models.domain import Depot, DepotId, Node
from .clarke_wright import clark_wright_merge
from .clustering import cluster_by_nearest_depot
from .deadline import check_deadline
from .models import MultiDepotResult, Route, RoutingIssue

logger = logging.getLogger(__name__)


def multi_depot_route(
    depots: Sequence[Depot],
    vendors: Sequence[Node],
    orders: Sequence[Node],
    *,
    deadline: Optional[float] = None,
) -> MultiDepotResult:
    """Route every vendor cluster from its nearest depot.

    Depots that receive no cluster are absent from ``MultiDepotResult.routes``.
    """

    clustering = cluster_by_nearest_depot(depots, vendors, orders)
    issues: list[RoutingIssue] = list(clustering.issues)
    depot_routes: dict[DepotId, list[Route]] = {}

    for depot in depots:
        clusters = clustering.clusters.get(depot.depot_id)
        if not clusters:
            continue
        routes_for_depot: list[Route] = []
        for cluster in clusters:
            check_deadline(deadline, f"routing depot {depot.depot_id}")
            merged = clark_wright_merge(depot, cluster.nodes, deadline=deadline)
            routes_for_depot.extend(merged.routes)
            issues.extend(merged.issues)
        depot_routes[depot.depot_id] = routes_for_depot
        logger.info(
            "Depot %s: %d clusters, %d routes", depot.depot_id, len(clusters), len(routes_for_depot)
        )

    metadata = {
        "depots": len(depots),
        "depots_used": len(depot_routes),
        "vendors": len(vendors),
        "orders": len(orders),
        "routes": sum(len(routes) for routes in depot_routes.values()),
        "issues": len(issues),
    }
    return MultiDepotResult(routes=depot_routes, issues=issues, metadata=metadata)
