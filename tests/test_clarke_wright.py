import time

import pytest

from savings_router.models.domain import Coordinate, Depot, Node, NodeType
from savings_router.services.routing.clarke_wright import clark_wright_merge
from savings_router.services.routing.deadline import RoutingDeadlineExceeded
from savings_router.services.routing.models import IssueKind, Saving


def _depot(capacity: float | None = 10.0) -> Depot:
    return Depot(depot_id="D1", location=Coordinate(0.0, 0.0), capacity=capacity)


def _order(node_id, demand: float, lat: float = 0.0, lon: float = 0.01) -> Node:
    return Node(node_id=node_id, type=NodeType.ORDER, location=Coordinate(lat, lon), demand=demand, vendor_id="V")


def _vendor(node_id, demand: float, lat: float = 0.0, lon: float = 0.02) -> Node:
    return Node(node_id=node_id, type=NodeType.VENDOR, location=Coordinate(lat, lon), demand=demand)


def _merge(nodes, pairs, capacity: float = 10.0):
    savings = [Saving(i, j, value) for i, j, value in pairs]
    return clark_wright_merge(_depot(capacity), nodes, savings=savings)


def _sequences(result) -> list[list]:
    return [route.nodes for route in result.routes]


def test_pair_route_created_when_both_fit():
    result = _merge([_order("A", 3), _order("B", 4)], [("A", "B", 5.0)])

    assert _sequences(result) == [["A", "B"]]
    assert result.routes[0].capacity_used == 3
    assert result.routes[0].vehicle_capacity == 10
    assert result.issues == []


def test_pair_over_capacity_falls_back_to_singletons():
    result = _merge([_order("A", 6), _order("B", 5)], [("A", "B", 5.0)])

    assert _sequences(result) == [["A"], ["B"]]
    assert [route.capacity_used for route in result.routes] == [4, 5]


def test_unassigned_node_is_prepended_at_route_head():
    nodes = [_order("A", 1), _order("B", 1), _order("C", 1)]

    result = _merge(nodes, [("B", "C", 9.0), ("A", "B", 5.0)])

    assert _sequences(result) == [["A", "B", "C"]]
    assert result.routes[0].capacity_used == 7


def test_unassigned_node_is_appended_at_route_tail():
    nodes = [_order("A", 1), _order("B", 1), _order("C", 1)]

    result = _merge(nodes, [("A", "B", 9.0), ("B", "C", 5.0)])

    assert _sequences(result) == [["A", "B", "C"]]


def test_interior_node_does_not_accept_attachments():
    nodes = [_order("A", 1), _order("B", 1), _order("C", 1), _order("D", 1)]

    result = _merge(nodes, [("A", "B", 9.0), ("B", "C", 8.0), ("B", "D", 7.0)])

    assert _sequences(result) == [["A", "B", "C"], ["D"]]


def test_attachment_rejected_when_capacity_runs_out():
    nodes = [_order("A", 4), _order("B", 4), _order("C", 3)]

    result = _merge(nodes, [("A", "B", 9.0), ("B", "C", 8.0)])

    assert _sequences(result) == [["A", "B"], ["C"]]
    assert [route.capacity_used for route in result.routes] == [2, 7]


def test_routes_concatenate_tail_to_head_and_reindex_absorbed_nodes():
    nodes = [_order(name, 1) for name in "ABCDE"]

    result = _merge(nodes, [("A", "B", 9.0), ("C", "D", 8.0), ("B", "C", 7.0), ("D", "E", 6.0)])

    assert _sequences(result) == [["A", "B", "C", "D", "E"]]
    assert result.routes[0].capacity_used == 5


def test_routes_concatenate_head_to_tail():
    nodes = [_order(name, 1) for name in "ABCD"]

    result = _merge(nodes, [("A", "B", 9.0), ("C", "D", 8.0), ("A", "D", 7.0)])

    assert _sequences(result) == [["C", "D", "A", "B"]]


def test_concatenation_requires_matching_endpoints():
    nodes = [_order(name, 1) for name in "ABCD"]

    result = _merge(nodes, [("A", "B", 9.0), ("C", "D", 8.0), ("A", "C", 7.0)])

    assert _sequences(result) == [["A", "B"], ["C", "D"]]


def test_concatenation_rejected_when_combined_load_exceeds_capacity():
    nodes = [_order(name, 3) for name in "ABCD"]

    result = _merge(nodes, [("A", "B", 9.0), ("C", "D", 8.0), ("B", "C", 7.0)])

    assert _sequences(result) == [["A", "B"], ["C", "D"]]
    assert all(route.capacity_used >= 0 for route in result.routes)


def test_same_route_pair_is_ignored():
    nodes = [_order(name, 1) for name in "ABC"]

    result = _merge(nodes, [("A", "B", 9.0), ("B", "C", 8.0), ("A", "C", 7.0)])

    assert _sequences(result) == [["A", "B", "C"]]


def test_unknown_node_reference_is_reported_and_skipped():
    result = _merge([_order("A", 1), _order("B", 1)], [("A", "Z", 9.0), ("A", "B", 5.0)])

    assert _sequences(result) == [["A", "B"]]
    assert [(issue.kind, issue.node_id) for issue in result.issues] == [(IssueKind.UNKNOWN_NODE_REFERENCE, "Z")]


def test_oversized_order_is_reported_not_routed():
    result = _merge([_order("A", 2), _order("X", 12)], [("A", "X", 5.0)])

    assert _sequences(result) == [["A"]]
    assert result.unassigned == ["X"]
    issue = result.issues[0]
    assert issue.kind is IssueKind.DEMAND_EXCEEDS_CAPACITY
    assert issue.depot_id == "D1"


def test_vendor_gets_fallback_route_with_pickup_load():
    result = _merge([_vendor("V", -4), _order("A", 3)], [])

    assert _sequences(result) == [["V"], ["A"]]
    assert result.routes[0].capacity_used == 6
    assert result.routes[0].load == 4


def test_oversized_vendor_pickup_is_reported():
    result = _merge([_vendor("V", -12)], [])

    assert result.routes == []
    assert result.unassigned == ["V"]


def test_colinear_orders_split_when_three_exceed_capacity():
    nodes = [
        _order("A", 3, 0.0, 0.01),
        _order("B", 4, 0.0, 0.02),
        _order("C", 5, 0.0, -0.01),
    ]

    result = clark_wright_merge(_depot(10.0), nodes)

    assert _sequences(result) == [["A", "B"], ["C"]]
    for route in result.routes:
        assert route.load <= 10
        assert route.capacity_used >= 0


def _scattered_orders() -> list[Node]:
    offsets = [
        (0.010, 0.020), (0.015, -0.010), (-0.020, 0.005), (-0.012, -0.018),
        (0.030, 0.001), (0.002, 0.033), (-0.027, 0.021), (0.021, 0.024),
        (-0.005, -0.031), (0.026, -0.022), (-0.033, -0.004), (0.008, 0.011),
    ]
    return [
        _order(f"O{index}", float(index % 4 + 1), lat, lon)
        for index, (lat, lon) in enumerate(offsets)
    ]


def test_every_node_routed_once_within_capacity():
    nodes = _scattered_orders()
    demands = {node.node_id: node.demand for node in nodes}

    result = clark_wright_merge(_depot(10.0), nodes)

    routed = [node_id for route in result.routes for node_id in route.nodes]
    assert sorted(routed) == sorted(demands)
    for route in result.routes:
        assert route.capacity_used >= 0
        assert sum(demands[node_id] for node_id in route.nodes) == pytest.approx(route.load)
        assert route.load <= route.vehicle_capacity


def test_merge_is_deterministic():
    first = clark_wright_merge(_depot(10.0), _scattered_orders())
    second = clark_wright_merge(_depot(10.0), _scattered_orders())

    assert _sequences(first) == _sequences(second)
    assert [route.capacity_used for route in first.routes] == [route.capacity_used for route in second.routes]


def test_depot_without_capacity_uses_default():
    from savings_router.config import settings

    result = clark_wright_merge(_depot(None), [_order("A", 1)])

    assert result.routes[0].vehicle_capacity == settings.default_vehicle_capacity


def test_expired_deadline_stops_merge():
    with pytest.raises(RoutingDeadlineExceeded):
        clark_wright_merge(_depot(10.0), _scattered_orders(), deadline=time.monotonic() - 1)


def test_saving_pairing_a_node_with_itself_is_ignored():
    result = _merge([_order("A", 1), _order("B", 1)], [("A", "A", 9.0), ("A", "B", 5.0)])

    assert _sequences(result) == [["A", "B"]]
    assert result.routes[0].capacity_used == 8
    assert result.issues == []


def test_self_pair_alone_leaves_a_singleton_route():
    result = _merge([_order("A", 1)], [("A", "A", 1.0)])

    assert _sequences(result) == [["A"]]
    assert result.routes[0].capacity_used == 9
