"""Routing request/response schemas."""

from __future__ import annotations

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field

from ..services.routing.models import IssueKind

Identifier = Union[int, str]


class DepotModel(BaseModel):
    depot_id: Identifier
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    capacity: Optional[float] = Field(
        default=None,
        gt=0,
        description="Vehicle capacity in kg. Falls back to the configured default when omitted.",
    )


class NodeModel(BaseModel):
    node_id: Identifier
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    demand: float = Field(..., description="Drop-off load for orders, pick-up load (negative) for vendors.")


class OrderModel(NodeModel):
    vendor_id: Optional[Identifier] = Field(default=None, description="Vendor the order is sourced from.")


class RoutingRequest(BaseModel):
    depots: List[DepotModel]
    vendors: List[NodeModel]
    orders: List[OrderModel] = Field(default_factory=list)
    persist: Optional[bool] = Field(default=None, description="Persist outputs. Defaults to the server setting.")
    run_label: Optional[str] = Field(default=None, description="Friendly name for persisted outputs.")


class RouteModel(BaseModel):
    route_id: str
    depot_id: Identifier
    nodes: List[Identifier]
    capacity_used: float
    vehicle_capacity: float
    load: float
    total_distance_km: float


class IssueModel(BaseModel):
    kind: IssueKind
    node_id: Optional[Identifier] = None
    depot_id: Optional[Identifier] = None
    detail: str


class RoutingResponse(BaseModel):
    routes: Dict[str, List[RouteModel]]
    issues: List[IssueModel]
    metadata: dict
