"""Minimum-cost road additions that connect a fragmented network.

Kruskal's algorithm runs over the complement of the existing road set: every
node pair without a road is a candidate weighted by planar distance, and the
union-find is seeded with the existing roads so that nodes that are already
connected never receive a new road.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from roadnet.components import union_existing_edges
from roadnet.exceptions import InvalidInputError
from roadnet.geo import pairwise_distances
from roadnet.logging import get_logger, timed
from roadnet.matrix import as_adjacency_matrix
from roadnet.types import Pair

LOGGER = get_logger(__name__)


def _as_coordinates(coordinates, n: int) -> np.ndarray:
    coords = np.asarray(coordinates, dtype=float)
    if coords.size == 0 and n == 0:
        return np.zeros((0, 2), dtype=float)
    if coords.ndim != 2 or coords.shape != (n, 2):
        raise InvalidInputError(
            f"Expected {n} coordinate pairs, got array of shape {coords.shape}"
        )
    return coords


def plan_connecting_edges(matrix, coordinates) -> List[Pair]:
    """Plan the cheapest set of new roads that makes the network connected.

    Candidates are all pairs ``i < j`` without a road. They are stable-sorted by
    planar distance, so equal lengths keep row-major enumeration order, and
    accepted greedily while they join two different components.

    Args:
        matrix: Square adjacency matrix (``0`` means no road).
        coordinates: ``(N, 2)`` node positions in matrix index order.

    Returns:
        0-based ``(i, j)`` pairs with ``i < j`` in acceptance order. Empty if the
        network is already connected or has fewer than two nodes.

    Raises:
        InvalidMatrixError: If ``matrix`` is malformed.
        InvalidInputError: If ``coordinates`` does not have one row per node,
            or if joining two components needs a road between nodes whose
            planar distance rounds to ``0`` (the matrix cannot hold it).
    """
    adj = as_adjacency_matrix(matrix)
    n = adj.shape[0]
    coords = _as_coordinates(coordinates, n)

    ds = union_existing_edges(adj)
    if ds.count <= 1:
        return []

    lengths = pairwise_distances(coords)
    rows, cols = np.nonzero(np.triu(adj == 0, k=1))
    order = np.argsort(lengths[rows, cols], kind="stable")
    LOGGER.debug(
        "Planning connections for %d component(s) from %d candidate pair(s)",
        ds.count,
        len(order),
    )

    new_edges: List[Pair] = []
    with timed(LOGGER, "Connection planning", nodes=n, candidates=len(order)):
        for k in order.tolist():
            i, j = int(rows[k]), int(cols[k])
            if ds.find(i) == ds.find(j):
                continue
            if lengths[i, j] <= 0:
                raise InvalidInputError(
                    f"Nodes {i} and {j} share a position; a road between them "
                    "would have zero length"
                )
            ds.union(i, j)
            new_edges.append((i, j))
            if ds.count == 1:
                break

    LOGGER.debug("Planned %d new road(s)", len(new_edges))
    return new_edges


def connection_cost(coordinates, pairs: Sequence[Pair]) -> float:
    """Total planar length of the roads in ``pairs``."""
    coords = np.asarray(coordinates, dtype=float).reshape(-1, 2)
    lengths = pairwise_distances(coords)
    return float(sum(lengths[i, j] for i, j in pairs))


def augment_matrix(matrix, coordinates, pairs: Optional[Sequence[Pair]] = None):
    """Return a copy of ``matrix`` with new roads added at their planar length.

    Args:
        matrix: Square adjacency matrix.
        coordinates: ``(N, 2)`` node positions in matrix index order.
        pairs: Roads to add. Defaults to ``plan_connecting_edges(matrix, coordinates)``.

    Raises:
        InvalidInputError: For a self-loop or a pair at the same position.
    """
    adj = as_adjacency_matrix(matrix)
    coords = _as_coordinates(coordinates, adj.shape[0])
    if pairs is None:
        pairs = plan_connecting_edges(adj, coords)
    lengths = pairwise_distances(coords)
    for i, j in pairs:
        if i == j:
            raise InvalidInputError(f"Cannot add a self-loop on node {i}")
        if lengths[i, j] <= 0:
            raise InvalidInputError(
                f"Nodes {i} and {j} share a position; cannot add a zero-length road"
            )
        adj[i, j] = adj[j, i] = lengths[i, j]
    return adj
