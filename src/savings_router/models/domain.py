"""Domain models for depots, vendors and orders."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..config import settings

NodeId = Union[str, int]
DepotId = Union[str, int]


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Geographic position in decimal degrees."""

    latitude: float
    longitude: float


class NodeType(str, Enum):
    ORDER = "ORDER"
    VENDOR = "VENDOR"


@dataclass(slots=True)
class Node:
    """A pickup (vendor) or drop-off (order) location with its load.

    Order demand is the load delivered at the stop. Vendor demand is the load
    picked up and is conventionally stored as a negative magnitude.
    """

    node_id: NodeId
    type: NodeType
    location: Coordinate
    demand: float
    vendor_id: Optional[NodeId] = None

    @property
    def is_order(self) -> bool:
        return self.type is NodeType.ORDER

    @property
    def capacity_effect(self) -> float:
        """Capacity consumed when this node joins a route."""
        return self.demand if self.is_order else -self.demand


@dataclass(slots=True)
class Depot:
    """A depot together with the vehicle that starts every route from it.

    A missing capacity is resolved to the configured default once, here.
    """

    depot_id: DepotId
    location: Coordinate
    capacity: Optional[float] = None

    def __post_init__(self) -> None:
        if self.capacity is None:
            self.capacity = settings.default_vehicle_capacity
        if self.capacity <= 0:
            raise ValueError(f"Depot '{self.depot_id}' capacity must be positive, got {self.capacity}.")
