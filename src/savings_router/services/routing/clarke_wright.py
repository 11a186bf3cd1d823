"""Clarke-Wright savings route construction for a single depot."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ...models.domain import Depot, Node, NodeId
from .deadline import check_deadline
from .models import IssueKind, MergeResult, Route, RoutingIssue, Saving
from .savings import compute_savings, rank_savings

logger = logging.getLogger(__name__)


class RouteMerger:
    """Greedy savings merge over one depot's nodes.

    Owns the route list for a single run together with the node -> route index.
    Every create, attach and concatenation updates both so that a node belongs
    to at most one route.
    """

    def __init__(self, depot: Depot, nodes: Sequence[Node]) -> None:
        self.depot = depot
        self.capacity = float(depot.capacity)
        self.nodes = list(nodes)
        self.node_index: dict[NodeId, Node] = {node.node_id: node for node in self.nodes}
        self.routes: list[Route] = []
        self.node_to_route: dict[NodeId, Route] = {}
        self.issues: list[RoutingIssue] = []

    def run(self, savings: Sequence[Saving], *, deadline: Optional[float] = None) -> MergeResult:
        for saving in rank_savings(savings):
            check_deadline(deadline, "savings merge")
            self.apply(saving)
        self.add_fallback_routes()
        return MergeResult(depot=self.depot, routes=self.routes, issues=self.issues)

    def apply(self, saving: Saving) -> None:
        if saving.i == saving.j:
            logger.debug("Saving (%s, %s) pairs a node with itself, skipped", saving.i, saving.j)
            return
        node_i = self.node_index.get(saving.i)
        node_j = self.node_index.get(saving.j)
        if node_i is None or node_j is None:
            missing = saving.i if node_i is None else saving.j
            self._report(IssueKind.UNKNOWN_NODE_REFERENCE, missing, f"Saving ({saving.i}, {saving.j}) skipped.")
            return

        route_i = self.node_to_route.get(saving.i)
        route_j = self.node_to_route.get(saving.j)

        if route_i is None and route_j is None:
            self._create_pair(node_i, node_j)
        elif route_i is not None and route_j is None:
            self._attach(route_i, node_i, node_j)
        elif route_i is None and route_j is not None:
            self._attach(route_j, node_j, node_i)
        elif route_i is not route_j:
            self._concatenate(route_i, route_j, node_i, node_j)

    def _create_pair(self, node_i: Node, node_j: Node) -> None:
        remaining = self.capacity - node_i.capacity_effect - node_j.capacity_effect
        if remaining < 0:
            logger.debug("Pair (%s, %s) exceeds capacity by %.3f", node_i.node_id, node_j.node_id, -remaining)
            return
        route = Route(nodes=[node_i.node_id, node_j.node_id], capacity_used=remaining, vehicle_capacity=self.capacity)
        self.routes.append(route)
        self.node_to_route[node_i.node_id] = route
        self.node_to_route[node_j.node_id] = route

    def _attach(self, route: Route, anchor: Node, newcomer: Node) -> None:
        if not route.is_endpoint(anchor.node_id):
            return
        remaining = route.capacity_used - newcomer.capacity_effect
        if remaining < 0:
            logger.debug("Attaching %s to route at %s exceeds capacity", newcomer.node_id, anchor.node_id)
            return
        if route.first == anchor.node_id:
            route.nodes.insert(0, newcomer.node_id)
        else:
            route.nodes.append(newcomer.node_id)
        route.capacity_used = remaining
        self.node_to_route[newcomer.node_id] = route

    def _concatenate(self, route_i: Route, route_j: Route, node_i: Node, node_j: Node) -> None:
        if route_i.last == node_i.node_id and route_j.first == node_j.node_id:
            merged = route_i.nodes + route_j.nodes
        elif route_i.first == node_i.node_id and route_j.last == node_j.node_id:
            merged = route_j.nodes + route_i.nodes
        else:
            return

        remaining = route_i.capacity_used + route_j.capacity_used - self.capacity
        if remaining < 0:
            logger.debug("Merging routes at (%s, %s) exceeds capacity", node_i.node_id, node_j.node_id)
            return

        route_i.nodes = merged
        route_i.capacity_used = remaining
        for node_id in route_j.nodes:
            self.node_to_route[node_id] = route_i
        self.routes = [route for route in self.routes if route is not route_j]

    def add_fallback_routes(self) -> None:
        """Give every node left over a route of its own when its demand fits."""

        for node in self.nodes:
            if node.node_id in self.node_to_route:
                continue
            if node.is_order:
                fits = node.demand <= self.capacity
                remaining = self.capacity - node.demand
            else:
                # vendor pickups are stored as negative demand
                fits = abs(node.demand) <= self.capacity
                remaining = self.capacity + node.demand
            if not fits:
                self._report(
                    IssueKind.DEMAND_EXCEEDS_CAPACITY,
                    node.node_id,
                    f"Demand {node.demand} exceeds vehicle capacity {self.capacity}.",
                )
                continue
            route = Route(nodes=[node.node_id], capacity_used=remaining, vehicle_capacity=self.capacity)
            self.routes.append(route)
            self.node_to_route[node.node_id] = route

    def _report(self, kind: IssueKind, node_id: Optional[NodeId], detail: str) -> None:
        logger.warning("%s at depot %s for node %s: %s", kind.value, self.depot.depot_id, node_id, detail)
        self.issues.append(RoutingIssue(kind=kind, node_id=node_id, depot_id=self.depot.depot_id, detail=detail))


def clark_wright_merge(
    depot: Depot,
    nodes: Sequence[Node],
    *,
    savings: Sequence[Saving] | None = None,
    deadline: Optional[float] = None,
) -> MergeResult:
    """Build capacity-feasible routes for ``nodes`` served from ``depot``.

    Savings are computed from the nodes unless supplied. Nodes whose demand
    cannot fit a vehicle even alone are reported in ``MergeResult.issues``.
    """

    if savings is None:
        savings = compute_savings(depot, nodes)
    return RouteMerger(depot, nodes).run(savings, deadline=deadline)
