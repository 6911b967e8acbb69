"""Settlement and road records plus the id-to-index mapping used by algorithms.

Algorithms operate on 0-based matrix indices only. ``NodeIndex`` is the one
place where caller-assigned node ids are translated to and from indices.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from roadnet.exceptions import InvalidInputError
from roadnet.types import Coordinate, NodeId, NodeIdx


@dataclass
class Node:
    """A settlement on the planar map.

    Attributes:
        id (int): Unique identifier assigned by the caller.
        x (int): Horizontal map coordinate.
        y (int): Vertical map coordinate.
        name (str): Display name.
        description (str): Free-form display metadata.
    """

    id: NodeId
    x: int
    y: int
    name: str = ""
    description: str = ""

    @property
    def coordinates(self) -> Coordinate:
        return (self.x, self.y)

    @property
    def label(self) -> str:
        """Name when set, otherwise the id."""
        return self.name or str(self.id)


@dataclass
class Edge:
    """An undirected road between two settlements.

    Attributes:
        a (int): Id of one endpoint.
        b (int): Id of the other endpoint.
        length (float): Road length, positive and finite.
        name (str): Display name.
        id (Optional[int]): Caller-assigned road id, if any.
    """

    a: NodeId
    b: NodeId
    length: float
    name: str = ""
    id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.a == self.b:
            raise InvalidInputError(f"Self-loop on node {self.a!r} is not allowed")
        length = float(self.length)
        if not math.isfinite(length) or length <= 0:
            raise InvalidInputError(
                f"Edge {self.a!r}-{self.b!r} has invalid length {self.length!r}"
            )
        self.length = length

    @property
    def key(self) -> Tuple[NodeId, NodeId]:
        """Endpoints as a sorted pair, identical for both directions."""
        return (self.a, self.b) if self.a <= self.b else (self.b, self.a)

    def touches(self, node_id: NodeId) -> bool:
        return node_id == self.a or node_id == self.b

    def other(self, node_id: NodeId) -> NodeId:
        """Return the endpoint opposite ``node_id``.

        Raises:
            InvalidInputError: If ``node_id`` is not an endpoint of this edge.
        """
        if node_id == self.a:
            return self.b
        if node_id == self.b:
            return self.a
        raise InvalidInputError(f"Node {node_id!r} is not an endpoint of {self!r}")


@dataclass
class NodeIndex:
    """Bidirectional mapping between external node ids and matrix indices.

    Attributes:
        to_index: Maps node ids to 0-based indices.
        to_id: Maps indices back to node ids.

    Example:
        >>> index = NodeIndex.from_ids([7, 3, 9])
        >>> index.to_index[3]
        1
        >>> index.ids_of([2, 0])
        [9, 7]
    """

    to_index: Dict[NodeId, NodeIdx] = field(default_factory=dict)
    to_id: Dict[NodeIdx, NodeId] = field(default_factory=dict)

    @classmethod
    def from_ids(cls, ids: Iterable[NodeId]) -> "NodeIndex":
        """Create a mapping from ids given in index order.

        Raises:
            InvalidInputError: If an id appears more than once.
        """
        to_index: Dict[NodeId, NodeIdx] = {}
        to_id: Dict[NodeIdx, NodeId] = {}
        for i, node_id in enumerate(ids):
            if node_id in to_index:
                raise InvalidInputError(f"Duplicate node id {node_id!r}")
            to_index[node_id] = i
            to_id[i] = node_id
        return cls(to_index=to_index, to_id=to_id)

    @classmethod
    def from_nodes(cls, nodes: Iterable[Node]) -> "NodeIndex":
        return cls.from_ids(node.id for node in nodes)

    def index_of(self, node_id: NodeId) -> NodeIdx:
        """Return the index of ``node_id``.

        Raises:
            InvalidInputError: If the id is unknown.
        """
        try:
            return self.to_index[node_id]
        except KeyError:
            raise InvalidInputError(f"Unknown node id {node_id!r}") from None

    def ids_of(self, indices: Iterable[NodeIdx]) -> List[NodeId]:
        return [self.to_id[i] for i in indices]

    def pairs_to_ids(
        self, pairs: Iterable[Tuple[NodeIdx, NodeIdx]]
    ) -> List[Tuple[NodeId, NodeId]]:
        return [(self.to_id[i], self.to_id[j]) for i, j in pairs]

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.to_index

    def __len__(self) -> int:
        return len(self.to_index)
