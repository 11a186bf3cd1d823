"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ...models.domain import Depot, DepotId, Node, NodeId


@dataclass(frozen=True, slots=True)
class Saving:
    i: NodeId
    j: NodeId
    saving: float


@dataclass(slots=True)
class Route:
    """An open path of node ids served by one vehicle.

    ``capacity_used`` holds the capacity still free on the vehicle and must
    never drop below zero.
    """

    nodes: List[NodeId]
    capacity_used: float
    vehicle_capacity: float

    @property
    def first(self) -> NodeId:
        return self.nodes[0]

    @property
    def last(self) -> NodeId:
        return self.nodes[-1]

    @property
    def load(self) -> float:
        return self.vehicle_capacity - self.capacity_used

    def is_endpoint(self, node_id: NodeId) -> bool:
        return node_id == self.first or node_id == self.last


@dataclass(slots=True)
class VendorOrderCluster:
    vendor: Node
    orders: List[Node]

    @property
    def nodes(self) -> list[Node]:
        return [self.vendor, *self.orders]


class IssueKind(str, Enum):
    DEMAND_EXCEEDS_CAPACITY = "DEMAND_EXCEEDS_CAPACITY"
    NO_DEPOT_AVAILABLE = "NO_DEPOT_AVAILABLE"
    UNKNOWN_NODE_REFERENCE = "UNKNOWN_NODE_REFERENCE"


@dataclass(frozen=True, slots=True)
class RoutingIssue:
    """A node or saving left out of the result, with the reason."""

    kind: IssueKind
    node_id: Optional[NodeId]
    depot_id: Optional[DepotId]
    detail: str


@dataclass(slots=True)
class MergeResult:
    depot: Depot
    routes: List[Route]
    issues: List[RoutingIssue] = field(default_factory=list)

    @property
    def unassigned(self) -> list[NodeId]:
        return [issue.node_id for issue in self.issues if issue.kind is IssueKind.DEMAND_EXCEEDS_CAPACITY]


@dataclass(slots=True)
class ClusteringResult:
    clusters: dict[DepotId, List[VendorOrderCluster]]
    issues: List[RoutingIssue] = field(default_factory=list)


@dataclass(slots=True)
class MultiDepotResult:
    routes: dict[DepotId, List[Route]]
    issues: List[RoutingIssue] = field(default_factory=list)
    metadata: dict = field(default_factory=dict)


@dataclass(slots=True)
class RoutePlan:
    """A finished route with the figures reported to callers."""

    route_id: str
    depot_id: DepotId
    nodes: List[NodeId]
    capacity_used: float
    vehicle_capacity: float
    load: float
    total_distance_km: float
    path: List[tuple[float, float]]


@dataclass(slots=True)
class RoutingRun:
    plans: List[RoutePlan]
    issues: List[RoutingIssue]
    metadata: dict
