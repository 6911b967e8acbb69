"""roadnet: Settlement road network planning library.

roadnet models settlements and the undirected roads between them as a dense
adjacency matrix and answers network design questions over it.

Primary API:
    build_adjacency_matrix() - Build the matrix from node and edge records
    check_connectivity() - Connected components
    plan_connecting_edges() - Cheapest new roads that connect all components
    all_pairs_distances(), shortest_paths_from() - Shortest distances and routes
    find_optimal_route(), find_optimal_round_trip() - Tours through every node
    plan_route() - Record-level route planning with a readable report

All functions take and return 0-based matrix indices. Use ``NodeIndex`` to
translate to and from caller-assigned node ids.

Example:
    from roadnet import Edge, Node, build_adjacency_matrix, check_connectivity

    nodes = [Node(1, 0, 0), Node(2, 100, 0), Node(3, 100, 100)]
    edges = [Edge(1, 2, 10.0), Edge(2, 3, 10.0)]
    matrix = build_adjacency_matrix(nodes, edges)
    components = check_connectivity(matrix)  # [{0, 1, 2}]
"""

from __future__ import annotations

from roadnet import logging
from roadnet._version import __version__
from roadnet.augment import augment_matrix, connection_cost, plan_connecting_edges
from roadnet.components import (
    DisjointSet,
    check_connectivity,
    component_of,
    is_connected,
)
from roadnet.config import CONFIG, RoadnetConfig
from roadnet.exceptions import (
    DanglingEdgeError,
    InvalidInputError,
    InvalidMatrixError,
    RoadnetError,
    TourSizeError,
)
from roadnet.geo import node_distance, pairwise_distances, planar_distance
from roadnet.matrix import (
    as_adjacency_matrix,
    build_adjacency_matrix,
    coordinates_of,
    validate_adjacency_matrix,
)
from roadnet.model import Edge, Node, NodeIndex
from roadnet.nx import from_networkx, to_networkx
from roadnet.paths import (
    all_pairs_distances,
    path_length,
    shortest_path,
    shortest_paths_from,
    spf,
)
from roadnet.planner import RoutePlan, describe_components, plan_route
from roadnet.tour import find_optimal_round_trip, find_optimal_route

__all__ = [
    # Version
    "__version__",
    # Model
    "Node",
    "Edge",
    "NodeIndex",
    # Graph building
    "build_adjacency_matrix",
    "as_adjacency_matrix",
    "validate_adjacency_matrix",
    "coordinates_of",
    # Geometry
    "planar_distance",
    "node_distance",
    "pairwise_distances",
    # Connectivity
    "DisjointSet",
    "check_connectivity",
    "is_connected",
    "component_of",
    # Augmentation
    "plan_connecting_edges",
    "augment_matrix",
    "connection_cost",
    # Shortest paths
    "spf",
    "all_pairs_distances",
    "shortest_paths_from",
    "shortest_path",
    "path_length",
    # Tours
    "find_optimal_route",
    "find_optimal_round_trip",
    # Planning
    "RoutePlan",
    "plan_route",
    "describe_components",
    # Configuration
    "CONFIG",
    "RoadnetConfig",
    # Exceptions
    "RoadnetError",
    "InvalidInputError",
    "InvalidMatrixError",
    "DanglingEdgeError",
    "TourSizeError",
    # Library integrations (NetworkX)
    "from_networkx",
    "to_networkx",
    # Utilities
    "logging",
]
