"""Tests for planning new roads that connect all components."""

import networkx as nx
import numpy as np
import pytest

from roadnet.augment import augment_matrix, connection_cost, plan_connecting_edges
from roadnet.components import check_connectivity, is_connected
from roadnet.exceptions import InvalidInputError, InvalidMatrixError
from roadnet.geo import pairwise_distances
from roadnet.matrix import coordinates_of


def distinct_coordinates(rng, n):
    cells = rng.choice(10000, size=n, replace=False)
    return np.column_stack([cells // 100, cells % 100]) * 10


class TestPlanConnectingEdges:
    def test_connected_square_needs_nothing(self, square_nodes, square_three_sides):
        coords = coordinates_of(square_nodes)
        assert plan_connecting_edges(square_three_sides, coords) == []

    def test_three_isolated_nodes(self, isolated_three):
        nodes, m = isolated_three
        coords = coordinates_of(nodes)
        # Lengths: 0-1 = 5.0, 0-2 = 10.0, 1-2 = 8.1
        pairs = plan_connecting_edges(m, coords)
        assert pairs == [(0, 1), (1, 2)]
        assert connection_cost(coords, pairs) == pytest.approx(13.1)

    def test_existing_component_gets_no_redundant_road(self, two_islands):
        nodes, m = two_islands
        # 0-2 is the shortest missing pair but both ends are already joined
        assert plan_connecting_edges(m, coordinates_of(nodes)) == [(2, 3)]

    def test_ties_follow_enumeration_order(self):
        coords = np.array([[0, 0], [10, 0], [0, 10], [10, 10]])
        pairs = plan_connecting_edges(np.zeros((4, 4)), coords)
        assert pairs == [(0, 1), (0, 2), (1, 3)]

    def test_trivial_sizes(self):
        assert plan_connecting_edges(np.zeros((0, 0)), np.zeros((0, 2))) == []
        assert plan_connecting_edges(np.zeros((1, 1)), [[5, 5]]) == []

    def test_result_connects_graph(self, random_matrices):
        rng = np.random.default_rng(7)
        for m in random_matrices:
            n = m.shape[0]
            coords = distinct_coordinates(rng, n)
            pairs = plan_connecting_edges(m, coords)

            assert len(pairs) == len(check_connectivity(m)) - 1
            assert all(i < j and m[i, j] == 0 for i, j in pairs)
            assert is_connected(augment_matrix(m, coords, pairs))

    def test_cost_is_minimal(self, random_matrices):
        """Added length equals a spanning tree where existing roads are free."""
        rng = np.random.default_rng(11)
        for m in random_matrices:
            n = m.shape[0]
            coords = distinct_coordinates(rng, n)
            lengths = pairwise_distances(coords)
            complete = nx.Graph()
            complete.add_nodes_from(range(n))
            for i in range(n):
                for j in range(i + 1, n):
                    weight = 0.0 if m[i, j] > 0 else lengths[i, j]
                    complete.add_edge(i, j, weight=weight)
            expected = nx.minimum_spanning_tree(complete).size(weight="weight")

            pairs = plan_connecting_edges(m, coords)
            assert connection_cost(coords, pairs) == pytest.approx(expected)

    def test_coordinate_shape_mismatch(self, square_three_sides):
        with pytest.raises(InvalidInputError):
            plan_connecting_edges(square_three_sides, [[0, 0], [1, 1]])

    def test_malformed_matrix(self):
        with pytest.raises(InvalidMatrixError):
            plan_connecting_edges(None, [])

    def test_input_not_mutated(self, isolated_three):
        nodes, m = isolated_three
        plan_connecting_edges(m, coordinates_of(nodes))
        assert not m.any()

    def test_coincident_nodes_in_different_components(self):
        coords = [[0, 0], [0, 0], [50, 0]]
        with pytest.raises(InvalidInputError, match="share a position"):
            plan_connecting_edges(np.zeros((3, 3)), coords)

    def test_coincident_nodes_already_joined(self):
        #   0 ==[1]== 1        2
        #   (both at the origin)
        m = np.zeros((3, 3))
        m[0, 1] = m[1, 0] = 1.0
        pairs = plan_connecting_edges(m, [[0, 0], [0, 0], [50, 0]])
        assert pairs == [(0, 2)]


class TestAugmentMatrix:
    def test_defaults_to_planned_roads(self, isolated_three):
        nodes, m = isolated_three
        augmented = augment_matrix(m, coordinates_of(nodes))
        assert augmented[0, 1] == augmented[1, 0] == 5.0
        assert augmented[1, 2] == augmented[2, 1] == 8.1
        assert augmented[0, 2] == 0
        assert not m.any()

    def test_explicit_pairs(self, isolated_three):
        nodes, m = isolated_three
        augmented = augment_matrix(m, coordinates_of(nodes), [(0, 2)])
        assert augmented[0, 2] == 10.0
        assert np.count_nonzero(augmented) == 2

    def test_self_loop_rejected(self, isolated_three):
        nodes, m = isolated_three
        with pytest.raises(InvalidInputError):
            augment_matrix(m, coordinates_of(nodes), [(1, 1)])

    def test_zero_length_pair_rejected(self):
        with pytest.raises(InvalidInputError):
            augment_matrix(np.zeros((2, 2)), [[5, 5], [5, 5]], [(0, 1)])
