"""Tests for record-level route planning."""

import pytest

from roadnet.exceptions import InvalidInputError
from roadnet.model import Edge, Node
from roadnet.planner import RoutePlan, describe_components, plan_route


@pytest.fixture
def square_edges():
    return [
        Edge(1, 2, 10.0, name="AB"),
        Edge(2, 3, 10.0, name="BC"),
        Edge(4, 1, 10.0, name="DA"),
    ]


class TestPlanRoute:
    def test_open_route(self, square_nodes, square_edges):
        plan = plan_route(square_nodes, square_edges, 4)
        assert plan.success
        assert plan.error == ""
        assert plan.start is square_nodes[3]
        assert plan.route == [3, 0, 1, 2]
        assert plan.node_ids == [4, 1, 2, 3]
        assert [node.name for node in plan.nodes] == ["D", "A", "B", "C"]
        assert [edge.name for edge in plan.edges] == ["DA", "AB", "BC"]
        assert plan.total_distance == 30.0
        assert plan.path_string() == "D -> A -> B -> C"

    def test_summary(self, square_nodes, square_edges):
        summary = plan_route(square_nodes, square_edges, 4).summary()
        assert summary.splitlines() == [
            "Route planning result:",
            "Start: D",
            "Route: D -> A -> B -> C",
            "Total distance: 30.0 km",
        ]

    def test_round_trip(self, square_nodes, square_edges):
        plan = plan_route(square_nodes, square_edges, 4, round_trip=True)
        assert plan.success
        assert plan.round_trip
        assert plan.node_ids == [4, 1, 2, 3, 2, 1, 4]
        assert [edge.name for edge in plan.edges] == [
            "DA",
            "AB",
            "BC",
            "BC",
            "AB",
            "DA",
        ]
        assert plan.total_distance == 60.0
        assert plan.summary().startswith("Round trip planning result:")

    def test_no_tour_along_existing_roads(self, square_nodes, square_edges):
        plan = plan_route(square_nodes, square_edges, 1)
        assert not plan.success
        assert "No route visits every settlement" in plan.error
        assert plan.route == []
        assert plan.path_string() == "No valid route"
        assert plan.summary().startswith("Route planning failed:")

    def test_disconnected_network(self, two_islands):
        nodes, _ = two_islands
        edges = [Edge(1, 2, 2.0), Edge(2, 3, 3.0), Edge(4, 5, 1.0)]
        plan = plan_route(nodes, edges, 1)
        assert not plan.success
        assert "2 separate groups" in plan.error
        assert "Group 1: 1, 2, 3" in plan.error
        assert "Group 2: 4, 5" in plan.error

    def test_no_roads(self, square_nodes):
        plan = plan_route(square_nodes, [], 1)
        assert not plan.success
        assert plan.error == "No settlements or roads available."

    def test_start_without_road(self, square_nodes):
        plan = plan_route(square_nodes, [Edge(2, 3, 10.0)], 1)
        assert not plan.success
        assert "A has no connecting road" in plan.error

    def test_unknown_start(self, square_nodes, square_edges):
        with pytest.raises(InvalidInputError):
            plan_route(square_nodes, square_edges, 42)

    def test_road_to_unknown_settlement_does_not_count(self, square_nodes):
        plan = plan_route(square_nodes, [Edge(1, 9, 3.0), Edge(2, 3, 10.0)], 1)
        assert not plan.success
        assert "A has no connecting road" in plan.error

    def test_single_settlement_has_no_road(self):
        nodes = [Node(1, 0, 0, "Solo")]
        plan = plan_route(nodes, [Edge(1, 9, 3.0)], 1)
        assert not plan.success
        assert plan.error == "Settlement Solo has no connecting road."

    def test_zero_length_road_rejected(self, square_nodes):
        with pytest.raises(InvalidInputError):
            plan_route(square_nodes, [Edge(1, 2, 0.0)], 1)


def test_describe_components_sorted_by_first_member():
    nodes = [Node(1, 0, 0, "A"), Node(2, 0, 0, "B"), Node(3, 0, 0, "C")]
    text = describe_components(nodes, [{2}, {1, 0}])
    assert text.splitlines() == [
        "The network is not fully connected: 2 separate groups exist.",
        "Group 1: A, B",
        "Group 2: C",
    ]


def test_default_plan_is_failure():
    plan = RoutePlan()
    assert not plan.success
    assert plan.path_string() == "No valid route"
