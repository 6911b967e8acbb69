"""NetworkX graph conversion utilities.

Converts between ``networkx.Graph`` objects and roadnet adjacency matrices.

Example:
    >>> import networkx as nx
    >>> from roadnet.nx import from_networkx, to_networkx
    >>>
    >>> G = nx.Graph()
    >>> G.add_edge(1, 2, length=3.5)
    >>> matrix, index = from_networkx(G)
    >>> float(matrix[index.to_index[1], index.to_index[2]])
    3.5
    >>> to_networkx(matrix, index.ids_of(range(len(index)))).edges[1, 2]["length"]
    3.5
"""

from __future__ import annotations

from typing import Hashable, Optional, Sequence, Tuple

import networkx as nx
import numpy as np

from roadnet.exceptions import InvalidInputError
from roadnet.matrix import as_adjacency_matrix
from roadnet.model import NodeIndex


def to_networkx(
    matrix, node_ids: Optional[Sequence[Hashable]] = None, weight: str = "length"
) -> nx.Graph:
    """Convert an adjacency matrix to an undirected NetworkX graph.

    Args:
        matrix: Square adjacency matrix (``0`` means no road).
        node_ids: Node labels in index order. Defaults to ``0..N-1``.
        weight: Edge attribute that receives the road length.

    Raises:
        InvalidMatrixError: If ``matrix`` is malformed.
        InvalidInputError: If ``node_ids`` length differs from the node count.
    """
    adj = as_adjacency_matrix(matrix)
    n = adj.shape[0]
    labels = list(range(n)) if node_ids is None else list(node_ids)
    if len(labels) != n:
        raise InvalidInputError(f"Expected {n} node ids, got {len(labels)}")

    graph = nx.Graph()
    graph.add_nodes_from(labels)
    rows, cols = np.nonzero(np.triu(adj, k=1))
    for i, j in zip(rows.tolist(), cols.tolist()):
        graph.add_edge(labels[i], labels[j], **{weight: float(adj[i, j])})
    return graph


def from_networkx(
    G: nx.Graph, weight: str = "length", default_weight: float = 1.0
) -> Tuple[np.ndarray, NodeIndex]:
    """Convert an undirected NetworkX graph to an adjacency matrix.

    Nodes are sorted (by ``str`` on mixed types) for a deterministic index
    order. Parallel edges of a ``MultiGraph`` keep the shortest length.

    Args:
        G: Undirected NetworkX graph or multigraph.
        weight: Edge attribute holding the road length.
        default_weight: Length used when the attribute is missing.

    Returns:
        Tuple of (matrix, index) where ``index`` maps node labels to rows.

    Raises:
        TypeError: If ``G`` is not a NetworkX graph.
        InvalidInputError: If ``G`` is directed or has a non-positive length.
    """
    if not isinstance(G, nx.Graph):
        raise TypeError(f"Expected NetworkX graph, got {type(G).__name__}")
    if G.is_directed():
        raise InvalidInputError("Road networks are undirected; got a directed graph")

    try:
        names = sorted(G.nodes())
    except TypeError:
        names = sorted(G.nodes(), key=str)
    index = NodeIndex.from_ids(names)
    n = len(index)
    matrix = np.zeros((n, n), dtype=float)

    for u, v, data in G.edges(data=True):
        if u == v:
            continue
        length = float(data.get(weight, default_weight))
        if not length > 0:
            raise InvalidInputError(
                f"Edge {u!r}-{v!r} has non-positive length {length}"
            )
        i, j = index.to_index[u], index.to_index[v]
        if matrix[i, j] == 0 or length < matrix[i, j]:
            matrix[i, j] = matrix[j, i] = length
    return matrix, index
