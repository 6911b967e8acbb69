"""Route planning over node and edge records.

``plan_route`` wraps the matrix algorithms for callers that hold ``Node`` and
``Edge`` records: it builds the matrix, checks feasibility, runs the tour
solver and maps the result back to records. Infeasible requests produce a
``RoutePlan`` with ``success=False`` and a readable ``error``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set, Tuple

from roadnet.components import check_connectivity
from roadnet.logging import get_logger
from roadnet.matrix import build_adjacency_matrix
from roadnet.model import Edge, Node, NodeIndex
from roadnet.paths import path_length
from roadnet.tour import find_optimal_round_trip, find_optimal_route
from roadnet.types import NodeId, Route

LOGGER = get_logger(__name__)


@dataclass
class RoutePlan:
    """Outcome of a route planning request.

    Attributes:
        success (bool): Whether a route was found.
        error (str): Reason for failure; empty on success.
        start (Optional[Node]): Starting settlement.
        round_trip (bool): Whether the route returns to the start.
        route (List[int]): 0-based matrix indices in visiting order.
        node_ids (List[int]): External node ids in visiting order.
        nodes (List[Node]): Settlements in visiting order.
        edges (List[Edge]): Roads traversed, one per consecutive node pair.
        total_distance (float): Sum of traversed road lengths.
    """

    success: bool = False
    error: str = ""
    start: Optional[Node] = None
    round_trip: bool = False
    route: Route = field(default_factory=list)
    node_ids: List[NodeId] = field(default_factory=list)
    nodes: List[Node] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    total_distance: float = 0.0

    def path_string(self, separator: str = " -> ") -> str:
        if not self.success or not self.nodes:
            return "No valid route"
        return separator.join(node.label for node in self.nodes)

    def summary(self) -> str:
        """Multi-line human readable description of the plan."""
        if not self.success:
            return f"Route planning failed: {self.error}"
        kind = "Round trip" if self.round_trip else "Route"
        lines = [
            f"{kind} planning result:",
            f"Start: {self.start.label if self.start else '-'}",
            f"{kind}: {self.path_string()}",
            f"Total distance: {self.total_distance:.1f} km",
        ]
        return "\n".join(lines)


def describe_components(nodes: Sequence[Node], components: List[Set[int]]) -> str:
    """Describe disconnected groups of settlements by label."""
    groups = sorted(components, key=min)
    lines = [
        f"The network is not fully connected: {len(groups)} separate groups exist."
    ]
    for i, group in enumerate(groups, start=1):
        labels = ", ".join(nodes[idx].label for idx in sorted(group))
        lines.append(f"Group {i}: {labels}")
    return "\n".join(lines)


def _failed(start: Optional[Node], round_trip: bool, error: str) -> RoutePlan:
    LOGGER.warning("Route planning failed: %s", error.splitlines()[0])
    return RoutePlan(success=False, error=error, start=start, round_trip=round_trip)


def plan_route(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    start_id: NodeId,
    *,
    round_trip: bool = False,
) -> RoutePlan:
    """Plan the shortest tour through every settlement from ``start_id``.

    Args:
        nodes: Settlements; their order defines matrix indices.
        edges: Existing roads. Roads naming unknown settlements are ignored.
        start_id: Id of the starting settlement.
        round_trip: Return to the start after visiting every settlement.

    Returns:
        A ``RoutePlan``; ``success`` is False for infeasible requests.

    Raises:
        InvalidInputError: If ``start_id`` is not among ``nodes`` or ids repeat.
        TourSizeError: If there are more settlements than the tour solver accepts.
    """
    if not nodes or not edges:
        return _failed(None, round_trip, "No settlements or roads available.")

    index = NodeIndex.from_nodes(nodes)
    start_idx = index.index_of(start_id)
    start = nodes[start_idx]

    if not any(
        edge.touches(start_id) and edge.other(start_id) in index for edge in edges
    ):
        return _failed(
            start, round_trip, f"Settlement {start.label} has no connecting road."
        )

    matrix = build_adjacency_matrix(nodes, edges)
    components = check_connectivity(matrix)
    if len(components) > 1:
        return _failed(start, round_trip, describe_components(nodes, components))

    solver = find_optimal_round_trip if round_trip else find_optimal_route
    route = solver(matrix, start_idx)
    if not route:
        return _failed(
            start,
            round_trip,
            "No route visits every settlement using existing roads.",
        )

    by_pair: Dict[Tuple[NodeId, NodeId], Edge] = {
        edge.key: edge for edge in edges if edge.a in index and edge.b in index
    }
    node_ids = index.ids_of(route)
    traversed = [
        by_pair[(u, v) if u <= v else (v, u)] for u, v in zip(node_ids, node_ids[1:])
    ]
    total = path_length(matrix, route) if len(route) > 1 else 0.0

    LOGGER.info(
        "Planned %s over %d settlements: %.1f km",
        "round trip" if round_trip else "route",
        len(nodes),
        total,
    )
    return RoutePlan(
        success=True,
        start=start,
        round_trip=round_trip,
        route=route,
        node_ids=node_ids,
        nodes=[nodes[i] for i in route],
        edges=traversed,
        total_distance=total,
    )
