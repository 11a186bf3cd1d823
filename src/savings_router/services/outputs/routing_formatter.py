"""Serializers for routing outputs."""

from __future__ import annotations

import csv
import io

from ..routing.models import RoutingIssue, RoutingRun


def issue_to_json(issue: RoutingIssue) -> dict:
    return {
        "kind": issue.kind.value,
        "node_id": issue.node_id,
        "depot_id": issue.depot_id,
        "detail": issue.detail,
    }


def routing_run_to_json(run: RoutingRun) -> dict:
    return {
        "metadata": run.metadata,
        "routes": [
            {
                "route_id": plan.route_id,
                "depot_id": plan.depot_id,
                "nodes": list(plan.nodes),
                "capacity_used": plan.capacity_used,
                "vehicle_capacity": plan.vehicle_capacity,
                "load": plan.load,
                "total_distance_km": plan.total_distance_km,
            }
            for plan in run.plans
        ],
        "issues": [issue_to_json(issue) for issue in run.issues],
    }


def routing_run_to_csv(run: RoutingRun) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "route_id",
        "depot_id",
        "sequence",
        "node_id",
        "load",
        "vehicle_capacity",
        "total_distance_km",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for plan in run.plans:
        for sequence, node_id in enumerate(plan.nodes, start=1):
            writer.writerow(
                {
                    "route_id": plan.route_id,
                    "depot_id": plan.depot_id,
                    "sequence": sequence,
                    "node_id": node_id,
                    "load": plan.load,
                    "vehicle_capacity": plan.vehicle_capacity,
                    "total_distance_km": plan.total_distance_km,
                }
            )
    return buffer.getvalue()
