"""Exact tour search with bitmask dynamic programming.

``dp[mask, last]`` holds the minimal length of a route that starts at the
chosen node, visits exactly the nodes in ``mask`` and ends at ``last``. A
transition ``last -> next`` is only taken along an existing road, so the
solver never assumes a complete graph. Time is ``O(2^N * N^2)`` and memory
``O(2^N * N)``; node counts above ``CONFIG.max_tour_nodes`` are rejected.

Notes:
    ``find_optimal_round_trip`` is an approximation: it appends the shortest
    walk from the end of the optimal open tour back to the start. That closing
    walk may pass through nodes already visited, and the resulting circuit is
    not guaranteed to be the minimum Hamiltonian circuit.
"""

from __future__ import annotations

from typing import List

import numpy as np

from roadnet.components import is_connected
from roadnet.config import CONFIG
from roadnet.exceptions import TourSizeError
from roadnet.logging import get_logger, timed
from roadnet.matrix import as_adjacency_matrix, check_node_index
from roadnet.paths import shortest_path
from roadnet.types import NodeIdx, Route

LOGGER = get_logger(__name__)

_NO_PARENT = -1


def _hamiltonian_path(adj: np.ndarray, start: NodeIdx) -> Route:
    """Minimum-length route from ``start`` visiting every node exactly once."""
    n = adj.shape[0]
    full = (1 << n) - 1
    start_bit = 1 << start
    bits = np.left_shift(1, np.arange(n, dtype=np.int64))
    has_road = adj > 0

    dp = np.full((1 << n, n), np.inf)
    parent = np.full((1 << n, n), _NO_PARENT, dtype=np.int16)
    dp[start_bit, start] = 0.0

    # Successor masks are strictly larger, so ascending order settles each
    # state before it is expanded.
    for mask in range(start_bit, full + 1):
        if not mask & start_bit:
            continue
        row = dp[mask]
        lasts = np.flatnonzero(np.isfinite(row))
        if lasts.size == 0:
            continue
        unvisited = (bits & mask) == 0
        for last in lasts.tolist():
            nxt = np.flatnonzero(has_road[last] & unvisited)
            if nxt.size == 0:
                continue
            next_masks = mask | bits[nxt]
            cand = row[last] + adj[last, nxt]
            better = cand < dp[next_masks, nxt]
            if better.any():
                dp[next_masks[better], nxt[better]] = cand[better]
                parent[next_masks[better], nxt[better]] = last

    end = int(np.argmin(dp[full]))
    if not np.isfinite(dp[full, end]):
        return []

    route: Route = [end]
    mask, node = full, end
    while parent[mask, node] != _NO_PARENT:
        prev = int(parent[mask, node])
        mask ^= 1 << node
        node = prev
        route.append(node)
    route.reverse()
    return route


def _prepare(matrix, start: NodeIdx):
    adj = as_adjacency_matrix(matrix)
    n = adj.shape[0]
    if n == 0:
        return adj, None
    start = check_node_index(adj, start, "start")
    return adj, start


def find_optimal_route(matrix, start: NodeIdx) -> List[NodeIdx]:
    """Shortest open tour from ``start`` that visits every node once.

    Only existing roads are used. The network must be connected.

    Args:
        matrix: Square adjacency matrix (``0`` means no road).
        start: 0-based index of the starting node.

    Returns:
        A permutation of ``0..N-1`` beginning with ``start``, or an empty list
        if the network is disconnected or no such route exists along its roads.

    Raises:
        InvalidMatrixError: If ``matrix`` is malformed.
        InvalidInputError: If ``start`` is out of range.
        TourSizeError: If the node count exceeds ``CONFIG.max_tour_nodes``.
    """
    adj, start = _prepare(matrix, start)
    if start is None or not is_connected(adj):
        LOGGER.info("Network is not connected; no tour exists")
        return []

    n = adj.shape[0]
    if n > CONFIG.max_tour_nodes:
        raise TourSizeError(n, CONFIG.max_tour_nodes)

    LOGGER.debug("Searching open tour over %d nodes from node %d", n, start)
    with timed(LOGGER, "Open tour search", nodes=n, states=n << n):
        route = _hamiltonian_path(adj, start)
    if not route:
        LOGGER.info("No route visits all %d nodes along existing roads", n)
    return route


def find_optimal_round_trip(matrix, start: NodeIdx) -> List[NodeIdx]:
    """Tour from ``start`` that visits every node and returns to ``start``.

    Computes the optimal open tour, then appends the shortest route from its
    last node back to ``start``. Adjacent repeated indices are collapsed.
    See the module notes: the closing leg may revisit nodes, so the result is
    not guaranteed to be a minimum Hamiltonian circuit.

    Returns:
        Route whose first and last entries are ``start``, ``[start]`` for a
        single node network, or an empty list if no open tour exists.

    Raises:
        InvalidMatrixError: If ``matrix`` is malformed.
        InvalidInputError: If ``start`` is out of range.
        TourSizeError: If the node count exceeds ``CONFIG.max_tour_nodes``.
    """
    adj, start = _prepare(matrix, start)
    route = find_optimal_route(adj, start) if start is not None else []
    if not route:
        return []

    closing = shortest_path(adj, route[-1], start)
    LOGGER.debug("Closing leg from node %d: %s", route[-1], closing)

    trip: Route = []
    for node in route + closing:
        if not trip or trip[-1] != node:
            trip.append(node)
    return trip
