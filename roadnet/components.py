"""Connected components of a road network via union-find."""

from __future__ import annotations

from typing import Dict, List, Set

import numpy as np

from roadnet.logging import get_logger
from roadnet.matrix import as_adjacency_matrix, check_node_index
from roadnet.types import ComponentSet, NodeIdx

LOGGER = get_logger(__name__)


class DisjointSet:
    """Union-find over ``0..n-1`` with path halving and union by rank.

    ``find`` is iterative, so tree height never bounds recursion depth.
    """

    def __init__(self, n: int) -> None:
        self.parent: List[int] = list(range(n))
        self.rank: List[int] = [0] * n
        self.count = n

    def __len__(self) -> int:
        return len(self.parent)

    def find(self, x: int) -> int:
        parent = self.parent
        while parent[x] != x:
            parent[x] = parent[parent[x]]
            x = parent[x]
        return x

    def union(self, x: int, y: int) -> bool:
        """Merge the sets containing ``x`` and ``y``.

        Returns:
            True if two distinct sets were merged, False if already joined.
        """
        root_x = self.find(x)
        root_y = self.find(y)
        if root_x == root_y:
            return False
        if self.rank[root_x] < self.rank[root_y]:
            root_x, root_y = root_y, root_x
        self.parent[root_y] = root_x
        if self.rank[root_x] == self.rank[root_y]:
            self.rank[root_x] += 1
        self.count -= 1
        return True

    def connected(self, x: int, y: int) -> bool:
        return self.find(x) == self.find(y)

    def groups(self) -> List[Set[int]]:
        """Return all sets, ordered by their smallest member."""
        by_root: Dict[int, Set[int]] = {}
        for i in range(len(self.parent)):
            by_root.setdefault(self.find(i), set()).add(i)
        return list(by_root.values())


def union_existing_edges(matrix: np.ndarray) -> DisjointSet:
    """Return a DisjointSet with every road of ``matrix`` already merged."""
    ds = DisjointSet(matrix.shape[0])
    rows, cols = np.nonzero(np.triu(matrix, k=1) > 0)
    for i, j in zip(rows.tolist(), cols.tolist()):
        ds.union(i, j)
    return ds


def check_connectivity(matrix) -> List[ComponentSet]:
    """Partition node indices into connected components.

    Every index in ``0..N-1`` appears in exactly one returned set. Callers must
    rely on set membership only, not on the order of the sets.

    Args:
        matrix: Square adjacency matrix (``0`` means no road).

    Returns:
        List of disjoint index sets. Empty for an empty matrix.

    Raises:
        InvalidMatrixError: If ``matrix`` is malformed.
    """
    adj = as_adjacency_matrix(matrix)
    components = union_existing_edges(adj).groups()
    LOGGER.debug(
        "Connectivity over %d nodes: %d component(s)", adj.shape[0], len(components)
    )
    return components


def is_connected(matrix) -> bool:
    """Return True if the network forms exactly one component."""
    adj = as_adjacency_matrix(matrix)
    if adj.shape[0] == 0:
        return False
    return union_existing_edges(adj).count == 1


def component_of(matrix, index: NodeIdx) -> ComponentSet:
    """Return the component containing node ``index``."""
    adj = as_adjacency_matrix(matrix)
    index = check_node_index(adj, index)
    ds = union_existing_edges(adj)
    root = ds.find(index)
    return {i for i in range(adj.shape[0]) if ds.find(i) == root}
