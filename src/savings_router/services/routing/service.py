"""Routing orchestration service."""

from __future__ import annotations

import logging
from typing import Sequence

from ...config import settings
from ...models.domain import Coordinate, Depot, Node, NodeType
from ...persistence.filesystem import FileStorage
from ...schemas.routing import (
    DepotModel,
    IssueModel,
    NodeModel,
    OrderModel,
    RouteModel,
    RoutingRequest,
    RoutingResponse,
)
from ..export.geojson import export_routes_to_easyterritory, save_easyterritory_json
from ..geospatial import path_length_km
from ..outputs.routing_formatter import issue_to_json, routing_run_to_csv, routing_run_to_json
from .deadline import deadline_after
from .models import MultiDepotResult, RoutePlan, RoutingRun
from .multi_depot import multi_depot_route

logger = logging.getLogger(__name__)


def _ensure_unique(ids: Sequence, label: str) -> None:
    seen: set = set()
    duplicates = []
    for identifier in ids:
        # responses key ids as strings, so 1 and "1" collide
        key = str(identifier)
        if key in seen:
            duplicates.append(identifier)
        seen.add(key)
    if duplicates:
        raise ValueError(f"Duplicate {label} ids: {', '.join(str(value) for value in duplicates)}")


def _to_depot(model: DepotModel) -> Depot:
    return Depot(
        depot_id=model.depot_id,
        location=Coordinate(model.latitude, model.longitude),
        capacity=model.capacity,
    )


def _to_vendor(model: NodeModel) -> Node:
    return Node(
        node_id=model.node_id,
        type=NodeType.VENDOR,
        location=Coordinate(model.latitude, model.longitude),
        demand=model.demand,
    )


def _to_order(model: OrderModel) -> Node:
    return Node(
        node_id=model.node_id,
        type=NodeType.ORDER,
        location=Coordinate(model.latitude, model.longitude),
        demand=model.demand,
        vendor_id=model.vendor_id,
    )


def build_plans(depots: Sequence[Depot], nodes: Sequence[Node], result: MultiDepotResult) -> list[RoutePlan]:
    """Attach route ids and depot round-trip distances to the merged routes."""

    locations = {node.node_id: node.location for node in nodes}
    plans: list[RoutePlan] = []
    for depot in depots:
        for index, route in enumerate(result.routes.get(depot.depot_id, []), start=1):
            points = [depot.location, *(locations[node_id] for node_id in route.nodes), depot.location]
            plans.append(
                RoutePlan(
                    route_id=f"{depot.depot_id}_R{index:02d}",
                    depot_id=depot.depot_id,
                    nodes=list(route.nodes),
                    capacity_used=route.capacity_used,
                    vehicle_capacity=route.vehicle_capacity,
                    load=route.load,
                    total_distance_km=path_length_km(points),
                    path=[(point.latitude, point.longitude) for point in points],
                )
            )
    return plans


def persist_run(run: RoutingRun, run_label: str | None = None) -> str:
    storage = FileStorage()
    run_dir = storage.new_run(run_label)
    storage.write_json(run_dir / "summary.json", routing_run_to_json(run))
    storage.write_text(run_dir / "assignments.csv", routing_run_to_csv(run))
    save_easyterritory_json(export_routes_to_easyterritory(run.plans), run_dir / "routes_easyterritory.json")
    logger.info("Persisted routing run to %s", run_dir)
    return str(run_dir)


def optimize_routes(payload: RoutingRequest) -> RoutingResponse:
    _ensure_unique([depot.depot_id for depot in payload.depots], "depot")
    _ensure_unique([node.node_id for node in [*payload.vendors, *payload.orders]], "node")

    depots = [_to_depot(model) for model in payload.depots]
    vendors = [_to_vendor(model) for model in payload.vendors]
    orders = [_to_order(model) for model in payload.orders]

    result = multi_depot_route(
        depots,
        vendors,
        orders,
        deadline=deadline_after(settings.solver_time_limit_seconds),
    )
    plans = build_plans(depots, [*vendors, *orders], result)

    metadata = dict(result.metadata)
    metadata["status"] = "partial" if result.issues else "ok"
    metadata["total_distance_km"] = sum(plan.total_distance_km for plan in plans)
    if payload.run_label:
        metadata["run_label"] = payload.run_label
    run = RoutingRun(plans=plans, issues=result.issues, metadata=metadata)

    persist = settings.persist_outputs if payload.persist is None else payload.persist
    if persist:
        metadata["output_dir"] = persist_run(run, payload.run_label)

    grouped: dict[str, list[RouteModel]] = {}
    for plan in plans:
        grouped.setdefault(str(plan.depot_id), []).append(
            RouteModel(
                route_id=plan.route_id,
                depot_id=plan.depot_id,
                nodes=plan.nodes,
                capacity_used=plan.capacity_used,
                vehicle_capacity=plan.vehicle_capacity,
                load=plan.load,
                total_distance_km=plan.total_distance_km,
            )
        )

    return RoutingResponse(
        routes=grouped,
        issues=[IssueModel(**issue_to_json(issue)) for issue in result.issues],
        metadata=metadata,
    )
