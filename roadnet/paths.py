"""Shortest-path algorithms over a dense adjacency matrix.

Provides all-pairs distances (Floyd-Warshall) and single-source routes
(Dijkstra with a predecessor map). Roads are undirected with positive lengths;
``0`` in the matrix means no road.
"""

from __future__ import annotations

from heapq import heappop, heappush
from typing import Dict, List, Optional, Sequence, Set, Tuple

import numpy as np

from roadnet.config import CONFIG
from roadnet.logging import get_logger, timed
from roadnet.matrix import as_adjacency_matrix, check_node_index
from roadnet.types import Cost, NodeIdx, Route

LOGGER = get_logger(__name__)


def all_pairs_distances(matrix) -> np.ndarray:
    """Compute the shortest distance between every pair of nodes.

    Floyd-Warshall over a private working copy in which missing roads are
    ``inf`` and the diagonal is zero. Each pass relaxes through one
    intermediate node ``k`` for all rows at once; rows or columns whose leg to
    or from ``k`` is infinite are left untouched. ``O(N^3)``.

    Args:
        matrix: Square adjacency matrix (``0`` means no road).

    Returns:
        ``(N, N)`` distance table, ``inf`` where no route exists.

    Raises:
        InvalidMatrixError: If ``matrix`` is malformed.
    """
    adj = as_adjacency_matrix(matrix)
    n = adj.shape[0]
    dist = np.where(adj > 0, adj, np.inf)
    np.fill_diagonal(dist, 0.0)

    with timed(LOGGER, "All-pairs distances", nodes=n):
        for k in range(n):
            rows = np.flatnonzero(np.isfinite(dist[:, k]))
            cols = np.flatnonzero(np.isfinite(dist[k, :]))
            if rows.size == 0 or cols.size == 0:
                continue
            via_k = dist[rows, k][:, None] + dist[k, cols][None, :]
            block = np.ix_(rows, cols)
            dist[block] = np.minimum(dist[block], via_k)

    return dist


def spf(
    matrix, src: NodeIdx
) -> Tuple[Dict[NodeIdx, Cost], Dict[NodeIdx, Optional[NodeIdx]]]:
    """Dijkstra shortest-path-first from ``src``.

    Args:
        matrix: Square adjacency matrix (``0`` means no road).
        src: Source node index.

    Returns:
        A tuple of (costs, pred):
          - costs: Maps each reachable node to its minimal distance from ``src``.
          - pred: Maps each reachable node to its predecessor on a shortest
            route; ``pred[src]`` is None.

    Raises:
        InvalidMatrixError: If ``matrix`` is malformed.
        InvalidInputError: If ``src`` is out of range.
    """
    adj = as_adjacency_matrix(matrix)
    src = check_node_index(adj, src, "source")
    neighbors = [np.flatnonzero(row > 0).tolist() for row in adj]

    costs: Dict[NodeIdx, Cost] = {src: 0.0}
    pred: Dict[NodeIdx, Optional[NodeIdx]] = {src: None}
    visited: Set[NodeIdx] = set()
    min_pq: List[Tuple[Cost, NodeIdx]] = [(0.0, src)]

    while min_pq:
        current_cost, node = heappop(min_pq)
        if node in visited:
            continue
        visited.add(node)

        for neighbor in neighbors[node]:
            if neighbor in visited:
                continue
            new_cost = current_cost + float(adj[node, neighbor])
            if neighbor not in costs or new_cost < costs[neighbor]:
                costs[neighbor] = new_cost
                pred[neighbor] = node
                heappush(min_pq, (new_cost, neighbor))

    return costs, pred


def _walk_back(
    pred: Dict[NodeIdx, Optional[NodeIdx]], dst: NodeIdx
) -> Route:
    route: Route = []
    node: Optional[NodeIdx] = dst
    while node is not None:
        route.append(node)
        node = pred[node]
    route.reverse()
    return route


def shortest_paths_from(matrix, src: NodeIdx) -> Dict[NodeIdx, Route]:
    """Shortest routes from ``src`` to every other reachable node.

    Each route starts at ``src`` and ends at its target, both inclusive.
    Unreachable targets and ``src`` itself are not present in the result.

    Raises:
        InvalidMatrixError: If ``matrix`` is malformed.
        InvalidInputError: If ``src`` is out of range.
    """
    costs, pred = spf(matrix, src)
    routes = {dst: _walk_back(pred, dst) for dst in sorted(costs) if dst != src}
    LOGGER.debug("Resolved %d route(s) from node %d", len(routes), src)
    return routes


def shortest_path(matrix, src: NodeIdx, dst: NodeIdx) -> Route:
    """Shortest route from ``src`` to ``dst``.

    Returns:
        The route including both ends, or an empty list if ``dst`` is
        unreachable or equal to ``src``.
    """
    adj = as_adjacency_matrix(matrix)
    dst = check_node_index(adj, dst, "target")
    costs, pred = spf(adj, src)
    if dst == src or dst not in costs:
        return []
    return _walk_back(pred, dst)


def path_length(matrix, route: Sequence[NodeIdx]) -> Optional[float]:
    """Total road length along ``route``, rounded to ``CONFIG.distance_ndigits``.

    Returns:
        None if the route has fewer than two nodes, leaves the index range, or
        steps between two nodes with no direct road.
    """
    adj = as_adjacency_matrix(matrix)
    n = adj.shape[0]
    if len(route) < 2:
        return None

    total = 0.0
    for u, v in zip(route, route[1:]):
        if not (0 <= u < n and 0 <= v < n) or adj[u, v] <= 0:
            return None
        total += float(adj[u, v])
    return round(total, CONFIG.distance_ndigits)
