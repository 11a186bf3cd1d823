import time

import pytest

from savings_router.models.domain import Coordinate, Depot, Node, NodeType
from savings_router.services.routing.deadline import RoutingDeadlineExceeded
from savings_router.services.routing.models import IssueKind
from savings_router.services.routing.multi_depot import multi_depot_route


def _depot(depot_id, lat: float, lon: float, capacity: float | None = 10.0) -> Depot:
    return Depot(depot_id=depot_id, location=Coordinate(lat, lon), capacity=capacity)


def _vendor(node_id, lat: float, lon: float, demand: float = -2.0) -> Node:
    return Node(node_id=node_id, type=NodeType.VENDOR, location=Coordinate(lat, lon), demand=demand)


def _order(node_id, vendor_id, lat: float, lon: float, demand: float = 2.0) -> Node:
    return Node(node_id=node_id, type=NodeType.ORDER, location=Coordinate(lat, lon), demand=demand, vendor_id=vendor_id)


def test_cluster_routed_from_nearest_depot_only():
    depots = [_depot(1, 0.0, 0.0), _depot(2, 10.0, 10.0)]

    result = multi_depot_route(depots, [_vendor("V1", 0.0, 0.1)], [_order("O1", "V1", 0.0, 0.12)])

    assert list(result.routes) == [1]
    routed = [node_id for route in result.routes[1] for node_id in route.nodes]
    assert sorted(routed) == ["O1", "V1"]
    assert result.issues == []
    assert result.metadata["depots_used"] == 1


def test_routes_from_every_cluster_are_collected_per_depot():
    depots = [_depot("west", 0.0, -1.0), _depot("east", 0.0, 1.0)]
    vendors = [_vendor("V1", 0.0, -0.9), _vendor("V2", 0.1, -1.1), _vendor("V3", 0.0, 0.9)]
    orders = [
        _order("O1", "V1", 0.01, -0.9),
        _order("O2", "V1", 0.02, -0.9),
        _order("O3", "V2", 0.1, -1.12),
        _order("O4", "V3", 0.0, 0.95),
    ]

    result = multi_depot_route(depots, vendors, orders)

    west = {node_id for route in result.routes["west"] for node_id in route.nodes}
    east = {node_id for route in result.routes["east"] for node_id in route.nodes}
    assert west == {"V1", "V2", "O1", "O2", "O3"}
    assert east == {"V3", "O4"}
    assert result.metadata["routes"] == sum(len(routes) for routes in result.routes.values())


def test_empty_depot_list_reports_every_vendor():
    vendors = [_vendor("V1", 0.0, 0.1), _vendor("V2", 0.3, 0.3)]

    result = multi_depot_route([], vendors, [_order("O1", "V1", 0.0, 0.1)])

    assert result.routes == {}
    assert [issue.kind for issue in result.issues] == [IssueKind.NO_DEPOT_AVAILABLE] * 2


def test_oversized_order_is_reported_through_multi_depot():
    result = multi_depot_route(
        [_depot(1, 0.0, 0.0, capacity=5.0)],
        [_vendor("V1", 0.0, 0.1)],
        [_order("O1", "V1", 0.0, 0.11, demand=9.0)],
    )

    assert [route.nodes for route in result.routes[1]] == [["V1"]]
    assert [(issue.kind, issue.node_id, issue.depot_id) for issue in result.issues] == [
        (IssueKind.DEMAND_EXCEEDS_CAPACITY, "O1", 1)
    ]


def test_expired_deadline_raises():
    with pytest.raises(RoutingDeadlineExceeded):
        multi_depot_route(
            [_depot(1, 0.0, 0.0)],
            [_vendor("V1", 0.0, 0.1)],
            [],
            deadline=time.monotonic() - 1,
        )
