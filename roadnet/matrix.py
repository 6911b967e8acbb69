"""Dense adjacency matrix construction and validation.

The matrix is an ``(N, N)`` ``float64`` array, symmetric with a zero diagonal.
``0.0`` marks the absence of a road, so zero-length roads cannot be expressed.
A fresh array is built for every call and nothing is cached between calls.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence, Tuple, Union

import numpy as np

from roadnet.config import CONFIG
from roadnet.exceptions import DanglingEdgeError, InvalidInputError, InvalidMatrixError
from roadnet.logging import get_logger
from roadnet.model import Edge, Node, NodeIndex
from roadnet.types import NodeIdx

LOGGER = get_logger(__name__)

NodeLike = Union[Node, Tuple[int, float, float]]
EdgeLike = Union[Edge, Tuple[int, int, float]]


def _node_fields(node: NodeLike) -> Tuple[int, float, float]:
    if isinstance(node, Node):
        return node.id, node.x, node.y
    node_id, x, y = node[:3]
    return node_id, x, y


def _edge_fields(edge: EdgeLike) -> Tuple[int, int, float]:
    if isinstance(edge, Edge):
        return edge.a, edge.b, edge.length
    a, b, length = edge[:3]
    return a, b, float(length)


def build_adjacency_matrix(
    nodes: Sequence[NodeLike],
    edges: Iterable[EdgeLike],
    *,
    strict: Optional[bool] = None,
) -> np.ndarray:
    """Build the symmetric adjacency matrix for a node and edge snapshot.

    Row/column ``i`` corresponds to ``nodes[i]``. For every edge whose two
    endpoints are known, both ``m[i][j]`` and ``m[j][i]`` are set to its length;
    a later edge on the same pair overwrites an earlier one.

    Args:
        nodes: ``Node`` objects or ``(id, x, y)`` tuples.
        edges: ``Edge`` objects or ``(a, b, length)`` tuples.
        strict: Raise on edges naming unknown node ids instead of dropping them.
            Defaults to ``CONFIG.strict_edges``.

    Returns:
        A new ``(len(nodes), len(nodes))`` matrix.

    Raises:
        InvalidInputError: On duplicate node ids or a non-positive tuple edge length.
        DanglingEdgeError: In strict mode, for an edge with an unknown endpoint.
    """
    strict = CONFIG.strict_edges if strict is None else strict
    index = NodeIndex.from_ids(_node_fields(node)[0] for node in nodes)
    n = len(index)
    matrix = np.zeros((n, n), dtype=float)

    dropped = 0
    for edge in edges:
        a, b, length = _edge_fields(edge)
        missing = next((node_id for node_id in (a, b) if node_id not in index), None)
        if missing is not None:
            if strict:
                raise DanglingEdgeError(edge, missing)
            dropped += 1
            continue
        if a == b:
            LOGGER.debug("Ignoring self-loop on node %r", a)
            continue
        if not np.isfinite(length) or length <= 0:
            raise InvalidInputError(f"Edge {a!r}-{b!r} has invalid length {length!r}")
        i, j = index.to_index[a], index.to_index[b]
        matrix[i, j] = length
        matrix[j, i] = length

    if dropped:
        LOGGER.debug("Dropped %d edge(s) referencing unknown node ids", dropped)
    return matrix


def coordinates_of(nodes: Sequence[NodeLike]) -> np.ndarray:
    """Return an ``(N, 2)`` array of node coordinates in index order."""
    coords = np.zeros((len(nodes), 2), dtype=float)
    for i, node in enumerate(nodes):
        _, x, y = _node_fields(node)
        coords[i] = (x, y)
    return coords


def as_adjacency_matrix(matrix: Any) -> np.ndarray:
    """Validate ``matrix`` and return it as a private ``float64`` copy.

    Raises:
        InvalidMatrixError: If the matrix is missing, ragged, not square, holds
            negative or non-finite weights, is asymmetric, or has a non-zero
            diagonal.
    """
    if matrix is None:
        raise InvalidMatrixError("Adjacency matrix is None")
    try:
        arr = np.array(matrix, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidMatrixError(
            f"Adjacency matrix is not numeric or is ragged: {exc}"
        ) from None

    if arr.ndim == 1 and arr.shape[0] == 0:
        return np.zeros((0, 0), dtype=float)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise InvalidMatrixError(
            f"Adjacency matrix must be square, got shape {arr.shape}"
        )
    if not np.all(np.isfinite(arr)):
        raise InvalidMatrixError("Adjacency matrix contains non-finite values")
    if np.any(arr < 0):
        raise InvalidMatrixError("Adjacency matrix contains negative weights")
    if np.any(np.diag(arr) != 0):
        raise InvalidMatrixError("Adjacency matrix diagonal must be zero")
    if not np.array_equal(arr, arr.T):
        raise InvalidMatrixError("Adjacency matrix must be symmetric")
    return arr


def validate_adjacency_matrix(matrix: Any) -> bool:
    """Return True if ``matrix`` is a well-formed adjacency matrix."""
    try:
        as_adjacency_matrix(matrix)
    except InvalidMatrixError:
        return False
    return True


def check_node_index(matrix: np.ndarray, index: Any, what: str = "node") -> NodeIdx:
    """Return ``index`` as ``int`` if it addresses a row of ``matrix``.

    Raises:
        InvalidInputError: If the index is not an integer in ``0..N-1``.
    """
    n = matrix.shape[0]
    if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
        raise InvalidInputError(f"{what} index must be an integer, got {index!r}")
    if not 0 <= index < n:
        raise InvalidInputError(f"{what} index {index} out of range for {n} nodes")
    return int(index)
