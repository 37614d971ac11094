"""
simulation/propagation.py

Two-colour reachability from the power terminals.
Pure Python, no Qt dependencies.
"""

import logging

from models.grid import GridPosition

from .topology import NodeMark, Topology

logger = logging.getLogger(__name__)


class ShortCircuitError(Exception):
    """A node is connected to both power terminals."""

    def __init__(self, position: GridPosition):
        super().__init__(f"Short circuit at {position!r}")
        self.position = position


def walk(source: GridPosition, mark: NodeMark, topology: Topology) -> int:
    """
    Mark every node reachable from ``source`` with ``mark``.

    Iterative depth-first traversal over ``topology.marks``, mutated in
    place. A source that touches no conductive element marks nothing.

    Args:
        source: Grid position of the power terminal.
        mark: NodeMark.POSITIVE or NodeMark.NEGATIVE.
        topology: Graph for the current tick.

    Returns:
        The number of nodes newly marked.

    Raises:
        ShortCircuitError: If the walk reaches a node already carrying
            the opposite mark.
    """
    if mark is NodeMark.UNVISITED:
        raise ValueError("walk() needs a polarity mark")

    start = topology.index_of(source)
    if start is None:
        logger.debug("Power terminal %r is not wired to anything", source)
        return 0

    marks = topology.marks
    marked = 0
    to_visit = [start]
    while to_visit:
        index = to_visit.pop()
        current = marks[index]
        if current is NodeMark.UNVISITED:
            marks[index] = mark
            marked += 1
        elif current is mark:
            continue
        else:
            logger.error("Short circuit at %r", topology.positions[index])
            raise ShortCircuitError(topology.positions[index])

        to_visit.extend(n for n in topology.neighbors[index] if marks[n] is not mark)

    return marked


def propagate(positive: GridPosition, negative: GridPosition, topology: Topology) -> None:
    """
    Run the positive walk to completion, then the negative walk.

    The order matters: a node reachable from both terminals is always
    reported while walking from the negative terminal.

    Raises:
        ShortCircuitError: Raised by the negative walk.
    """
    walk(positive, NodeMark.POSITIVE, topology)
    walk(negative, NodeMark.NEGATIVE, topology)
