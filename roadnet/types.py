"""Shared type aliases for road network algorithms."""

from __future__ import annotations

from typing import List, Set, Tuple, Union

#: Numeric cost in the network (road length in km).
Cost = Union[int, float]

#: 0-based row/column position of a node in an adjacency matrix.
NodeIdx = int

#: External node identifier as assigned by the caller.
NodeId = int

#: Ordered sequence of node indices.
Route = List[NodeIdx]

#: Set of node indices that are mutually reachable.
ComponentSet = Set[NodeIdx]

#: Unordered node pair stored as ``(i, j)`` with ``i < j``.
Pair = Tuple[NodeIdx, NodeIdx]

#: Planar position of a node.
Coordinate = Tuple[float, float]
