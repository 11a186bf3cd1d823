"""Pairwise savings for the Clarke-Wright heuristic."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import Depot, Node
from ..geospatial import distance
from .models import Saving


def compute_savings(depot: Depot, nodes: Sequence[Node]) -> list[Saving]:
    """Return one saving per unordered pair of order nodes.

    ``s(i, j) = d(depot, i) + d(depot, j) - d(i, j)``. Pairs are produced in
    index order ``(0, 1), (0, 2), ..., (1, 2), ...`` of the order nodes, which
    is the tie-break order used when ranking.
    """

    orders = [node for node in nodes if node.is_order]
    depot_leg = [distance(depot.location, node.location) for node in orders]

    savings: list[Saving] = []
    for a, node_i in enumerate(orders):
        for b in range(a + 1, len(orders)):
            node_j = orders[b]
            value = depot_leg[a] + depot_leg[b] - distance(node_i.location, node_j.location)
            savings.append(Saving(i=node_i.node_id, j=node_j.node_id, saving=value))
    return savings


def rank_savings(savings: Sequence[Saving]) -> list[Saving]:
    """Sort savings descending; equal values keep their production order."""

    return sorted(savings, key=lambda item: item.saving, reverse=True)
