from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Set


# Parent of the file vertex. Never registered, so never counted.
ROOT_SENTINEL = 0


@dataclass(frozen=True)
class Edge:
    parent: int
    child: int


class Graph:
    """
    Directed multigraph over structural vertex ids.

    Complexity is McCabe's `E - N + 2P`, where P is the number of top-level
    items of the file rather than a traversal of the edge set.
    """

    def __init__(self) -> None:
        self.edges: List[Edge] = []
        self.root: Optional[int] = None
        self.connected_components = 0
        self._vertices: Set[int] = set()

    def add_edge(self, parent: int, child: int) -> None:
        self.edges.append(Edge(parent, child))

    def register_vertex(self, vertex: int) -> bool:
        if vertex in self._vertices:
            return False
        self._vertices.add(vertex)
        return True

    def set_root(self, vertex: int) -> None:
        self.root = vertex
        self.register_vertex(vertex)

    @property
    def vertices(self) -> Set[int]:
        return set(self._vertices)

    @property
    def node_count(self) -> int:
        return len(self._vertices)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def complexity(self) -> int:
        # Not clamped: an empty file yields -1.
        return self.edge_count - self.node_count + 2 * self.connected_components

    def __repr__(self) -> str:
        return (
            f"Graph(connected_components={self.connected_components}, "
            f"nodes={self.node_count}, edges={self.edge_count})"
        )
