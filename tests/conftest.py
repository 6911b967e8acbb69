"""Shared road network fixtures.

Coordinates are map units (tenths of a km); lengths are km.
"""

from __future__ import annotations

import numpy as np
import pytest

from roadnet.matrix import build_adjacency_matrix
from roadnet.model import Edge, Node


def ring_matrix(n: int, length: float = 1.0) -> np.ndarray:
    """Cycle 0-1-...-(n-1)-0 with uniform road length."""
    m = np.zeros((n, n))
    for i in range(n):
        j = (i + 1) % n
        m[i, j] = m[j, i] = length
    return m


@pytest.fixture
def square_nodes():
    #   3 (0,100)      2 (100,100)
    #   +              +
    #   |              |
    #   |              |
    #   +--------------+
    #   0 (0,0)        1 (100,0)
    return [
        Node(1, 0, 0, "A"),
        Node(2, 100, 0, "B"),
        Node(3, 100, 100, "C"),
        Node(4, 0, 100, "D"),
    ]


@pytest.fixture
def square_three_sides(square_nodes):
    # Roads A-B, B-C, D-A; the C-D side is missing.
    #
    #   D              C
    #   |              |
    #   | [10]         | [10]
    #   |     [10]     |
    #   A--------------B
    edges = [Edge(1, 2, 10.0), Edge(2, 3, 10.0), Edge(4, 1, 10.0)]
    return build_adjacency_matrix(square_nodes, edges)


@pytest.fixture
def isolated_three():
    nodes = [Node(1, 0, 0), Node(2, 30, 40), Node(3, 100, 0)]
    return nodes, build_adjacency_matrix(nodes, [])


@pytest.fixture
def star_five():
    # Hub 0 with leaves 1..4 and no leaf-leaf roads.
    #
    #         1
    #         |
    #    4 -- 0 -- 2
    #         |
    #         3
    m = np.zeros((5, 5))
    for leaf, length in zip(range(1, 5), (1.0, 2.0, 3.0, 4.0)):
        m[0, leaf] = m[leaf, 0] = length
    return m


@pytest.fixture
def two_islands():
    # {0, 1, 2} and {3, 4} with no road between them.
    #
    #   0 --[2]-- 1 --[3]-- 2        3 --[1]-- 4
    nodes = [
        Node(1, 0, 0),
        Node(2, 20, 0),
        Node(3, 50, 0),
        Node(4, 200, 0),
        Node(5, 210, 0),
    ]
    edges = [Edge(1, 2, 2.0), Edge(2, 3, 3.0), Edge(4, 5, 1.0)]
    return nodes, build_adjacency_matrix(nodes, edges)


@pytest.fixture
def weighted_graph():
    # Metric:
    #       [1]        [1]
    #   0 -------- 1 -------- 2
    #   |                     |
    #   | [4]             [1] |
    #   |         [5]         |
    #   3 ------------------- 4
    #
    # Node 5 is isolated.
    m = np.zeros((6, 6))
    for i, j, w in [(0, 1, 1), (1, 2, 1), (0, 3, 4), (2, 4, 1), (3, 4, 5)]:
        m[i, j] = m[j, i] = w
    return m


@pytest.fixture
def random_matrices():
    """Deterministic batch of random symmetric matrices with ~40% density."""
    rng = np.random.default_rng(1234)
    mats = []
    for n in (1, 2, 5, 8, 12):
        weights = rng.integers(1, 20, size=(n, n)).astype(float)
        mask = rng.random((n, n)) < 0.4
        m = np.triu(np.where(mask, weights, 0.0), k=1)
        mats.append(m + m.T)
    return mats


@pytest.fixture
def make_ring():
    return ring_matrix
