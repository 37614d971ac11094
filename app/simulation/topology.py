"""
simulation/topology.py

Turns the conductive elements of one tick into an indexed graph.
Pure Python, no Qt dependencies. The graph is rebuilt every tick and
thrown away once the tick has been resolved.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from models.grid import GridPosition
from models.wire import WireData


class NodeMark(Enum):
    """Which power terminal a node has been reached from."""

    UNVISITED = "unvisited"
    POSITIVE = "positive"
    NEGATIVE = "negative"

    def opposite(self) -> "NodeMark":
        if self is NodeMark.POSITIVE:
            return NodeMark.NEGATIVE
        if self is NodeMark.NEGATIVE:
            return NodeMark.POSITIVE
        return NodeMark.UNVISITED


@dataclass
class Topology:
    """
    Deduplicated node list plus undirected edge list for one tick.

    ``positions`` and ``marks`` are parallel lists indexed by node index.
    ``edges`` holds one index pair per conductive element, duplicates
    included. ``neighbors`` is the adjacency list derived from ``edges``.
    """

    positions: list[GridPosition] = field(default_factory=list)
    marks: list[NodeMark] = field(default_factory=list)
    edges: list[tuple[int, int]] = field(default_factory=list)
    neighbors: list[list[int]] = field(default_factory=list)
    _index: dict[GridPosition, int] = field(default_factory=dict, repr=False)

    def _intern(self, pos: GridPosition) -> int:
        """Return the node index for ``pos``, appending a new node on first sight."""
        index = self._index.get(pos)
        if index is None:
            index = len(self.positions)
            self._index[pos] = index
            self.positions.append(pos)
            self.marks.append(NodeMark.UNVISITED)
            self.neighbors.append([])
        return index

    def add_edge(self, first: GridPosition, second: GridPosition) -> tuple[int, int]:
        a = self._intern(first)
        b = self._intern(second)
        self.edges.append((a, b))
        self.neighbors[a].append(b)
        if a != b:
            self.neighbors[b].append(a)
        return (a, b)

    def index_of(self, pos: GridPosition) -> Optional[int]:
        """Node index of ``pos``, or None if no conductive element touches it."""
        return self._index.get(pos)

    def mark_at(self, pos: GridPosition) -> Optional[NodeMark]:
        index = self._index.get(pos)
        if index is None:
            return None
        return self.marks[index]

    def unvisited_positions(self) -> list[GridPosition]:
        return [pos for pos, mark in zip(self.positions, self.marks) if mark is NodeMark.UNVISITED]

    def __len__(self) -> int:
        return len(self.positions)


def build_topology(elements: Iterable[WireData]) -> Topology:
    """
    Build the tick graph from conductive elements.

    Nodes are deduplicated by exact position, first seen wins, so node
    order follows element order. Every element yields exactly one edge.

    Args:
        elements: Plain wires followed by the effective switch wires.

    Returns:
        A Topology with every node marked UNVISITED.
    """
    topology = Topology()
    for element in elements:
        topology.add_edge(element.first, element.second)
    return topology
