"""
simulation/resolver.py

Derives lamp and relay coil outputs from a marked topology.
Pure Python, no Qt dependencies.
"""

import logging
from enum import Enum
from typing import Iterable

from models.consumer import LampData, RelayCoilData
from models.grid import GridPosition

from .topology import NodeMark, Topology

logger = logging.getLogger(__name__)


class TerminalState(Enum):
    """How a consumer's two terminals sit in the marked graph."""

    DISCONNECTED = "disconnected"  # a terminal touches no conductive element
    ENERGIZED = "energized"  # one terminal positive, the other negative
    SAME_POLARITY = "same_polarity"  # no potential difference
    FLOATING = "floating"  # a terminal sits on an island no walk reached


def classify_terminals(top: GridPosition, bottom: GridPosition, topology: Topology) -> TerminalState:
    top_mark = topology.mark_at(top)
    bottom_mark = topology.mark_at(bottom)
    if top_mark is None or bottom_mark is None:
        return TerminalState.DISCONNECTED
    if top_mark is not NodeMark.UNVISITED and bottom_mark is top_mark.opposite():
        return TerminalState.ENERGIZED
    if top_mark is NodeMark.UNVISITED or bottom_mark is NodeMark.UNVISITED:
        return TerminalState.FLOATING
    return TerminalState.SAME_POLARITY


def resolve_lamps(lamps: Iterable[LampData], topology: Topology) -> list[str]:
    """
    Recompute every lamp's ``is_lit`` flag.

    All lamps are switched off first, then lit where their terminals see
    opposite polarities. A lamp with a disconnected terminal therefore
    ends the tick unlit.

    Returns:
        Labels of lamps with a terminal on an unvisited node.
    """
    lamps = list(lamps)
    for lamp in lamps:
        lamp.is_lit = False

    floating = []
    for lamp in lamps:
        state = classify_terminals(lamp.top, lamp.bottom, topology)
        if state is TerminalState.ENERGIZED:
            lamp.is_lit = True
        elif state is TerminalState.FLOATING:
            logger.debug("Unvisited conductive node at lamp %s", lamp.label)
            floating.append(lamp.label)
    return floating


def resolve_relay_coils(coils: Iterable[RelayCoilData], topology: Topology) -> list[str]:
    """
    Recompute every relay coil's ``activated`` flag.

    Unlike lamps, coils are not switched off beforehand: a coil with a
    terminal that touches no conductive element keeps its previous value.

    Returns:
        Labels of coils with a terminal on an unvisited node.
    """
    floating = []
    for coil in coils:
        state = classify_terminals(coil.top, coil.bottom, topology)
        if state is TerminalState.DISCONNECTED:
            continue
        coil.activated = state is TerminalState.ENERGIZED
        if state is TerminalState.FLOATING:
            logger.debug("Unvisited conductive node at relay coil %s", coil.label)
            floating.append(coil.label)
    return floating
