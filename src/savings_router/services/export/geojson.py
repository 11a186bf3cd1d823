"""EasyTerritory format export utilities."""

from __future__ import annotations

import json
import uuid
from pathlib import Path
from typing import Any, Dict, List, Sequence

from shapely.geometry import LineString

from ..routing.models import RoutePlan


def generate_route_color(index: int) -> str:
    """Generate distinct colors for routes."""
    colors = [
        "#02d8e0", "#e0003e", "#38e000", "#0000c1", "#e0e005",
        "#611cc7", "#e0af00", "#13aae0", "#a4d819", "#00e0bb",
    ]
    return colors[index % len(colors)]


def linestring_to_wkt(coordinates: Sequence[tuple[float, float]]) -> str:
    """Convert (lat, lon) pairs to a WKT LINESTRING in lon/lat order."""
    if len(coordinates) < 2:
        raise ValueError("LineString must have at least 2 coordinates")
    return LineString([(lon, lat) for lat, lon in coordinates]).wkt


def export_routes_to_easyterritory(plans: Sequence[RoutePlan]) -> List[Dict[str, Any]]:
    """Convert route plans to EasyTerritory line features.

    Each feature traces depot -> stops -> depot and is grouped by depot id.
    """
    features: List[Dict[str, Any]] = []

    for idx, plan in enumerate(plans):
        try:
            wkt = linestring_to_wkt(plan.path)
        except ValueError:
            continue

        group = str(plan.depot_id).upper()
        label_point = plan.path[len(plan.path) // 2]
        feature = {
            "id": str(uuid.uuid4()),
            "name": plan.route_id,
            "group": group,
            "featureClass": "1",
            "wkt": wkt,
            "json": json.dumps({
                "type": "savings",
                "subType": "vehicle_route",
                "labelPoint": {"_x": label_point[1], "_y": label_point[0]},
                "metrics": {
                    "totalDistance": plan.total_distance_km,
                    "load": plan.load,
                    "stopCount": len(plan.nodes),
                },
            }),
            "visible": True,
            "symbology": {
                "fillColor": generate_route_color(idx),
                "fillOpacity": 0.5,
                "lineColor": generate_route_color(idx),
                "lineWidth": 3,
                "lineOpacity": 0.8,
                "scale": None,
            },
            "notes": (
                f"tag : {group}|{plan.route_id}\ngroup : {group}\nname : {plan.route_id}\n"
                f"stops : {len(plan.nodes)}\ndistance : {plan.total_distance_km:.2f} km\n"
            ),
            "collapsed": True,
            "locked": None,
        }
        features.append(feature)

    return features


def save_easyterritory_json(features: List[Dict[str, Any]], output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(features, f, indent=2, ensure_ascii=False)
