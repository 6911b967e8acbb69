"""Exception hierarchy for roadnet.

Malformed input raises; infeasible requests (disconnected network, no route)
are reported by empty results instead.
"""

from __future__ import annotations

from typing import Any


class RoadnetError(Exception):
    """Base exception for all roadnet errors."""


class InvalidInputError(RoadnetError, ValueError):
    """Raised when an argument is malformed (bad index, self-loop, bad length)."""


class InvalidMatrixError(InvalidInputError):
    """Raised when an adjacency matrix is missing, ragged, non-square or invalid."""


class DanglingEdgeError(InvalidInputError):
    """Raised in strict mode when an edge names a node id that does not exist."""

    def __init__(self, edge: Any, node_id: Any):
        self.edge = edge
        self.node_id = node_id
        super().__init__(f"Edge {edge!r} references unknown node id {node_id!r}")


class TourSizeError(RoadnetError):
    """Raised when a tour is requested for more nodes than the solver accepts."""

    def __init__(self, num_nodes: int, limit: int):
        self.num_nodes = num_nodes
        self.limit = limit
        super().__init__(
            f"Tour search over {num_nodes} nodes exceeds the limit of {limit}"
        )
