"""
simulation/engine.py

One simulation tick: latch capture, effective switch edges, topology,
propagation and consumer resolution. Pure Python, no Qt dependencies.
"""

import logging
from dataclasses import dataclass, field
from typing import AbstractSet, Iterable, Optional

from models.circuit import CircuitModel
from models.consumer import ButtonData, RelayCoilData
from models.grid import GridPosition
from models.switch import SwitchDeviceData
from models.wire import WireData

from .circuit_validator import resolve_power_terminals
from .propagation import ShortCircuitError, propagate
from .resolver import resolve_lamps, resolve_relay_coils
from .topology import build_topology

logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    """Outcome of one tick."""

    tick: int
    short_circuit: bool = False
    short_circuit_at: Optional[GridPosition] = None
    lamps: dict[str, bool] = field(default_factory=dict)
    coils: dict[str, bool] = field(default_factory=dict)
    # Consumer labels with a terminal on a node neither walk reached
    floating: list[str] = field(default_factory=list)
    unvisited_nodes: list[GridPosition] = field(default_factory=list)
    active_buttons: frozenset[int] = frozenset()
    active_relays: frozenset[int] = frozenset()
    node_count: int = 0
    edge_count: int = 0

    @property
    def success(self) -> bool:
        return not self.short_circuit

    def to_dict(self) -> dict:
        data = {
            "tick": self.tick,
            "short_circuit": self.short_circuit,
            "lamps": dict(self.lamps),
            "coils": dict(self.coils),
        }
        if self.short_circuit_at is not None:
            data["short_circuit_at"] = self.short_circuit_at.to_dict()
        if self.floating:
            data["floating"] = list(self.floating)
        return data


def capture_button_latches(buttons: Iterable[ButtonData]) -> frozenset[int]:
    """Collect the ids of buttons pressed since the last tick and clear their latches."""
    return frozenset(button.button_id for button in buttons if button.take())


def capture_relay_latches(coils: Iterable[RelayCoilData]) -> frozenset[int]:
    """Collect the ids of coils that ended the previous tick activated."""
    return frozenset(coil.device_id for coil in coils if coil.activated)


def effective_switch_wires(switches: Iterable[SwitchDeviceData], active_ids: AbstractSet[int]) -> list[WireData]:
    """The wires contributed by the switch devices that conduct this tick."""
    return [switch.as_wire() for switch in switches if switch.conducts(active_ids)]


def collect_conductive_elements(
    model: CircuitModel,
    active_buttons: AbstractSet[int],
    active_relays: AbstractSet[int],
) -> list[WireData]:
    """Plain wires, then effective button edges, then effective relay edges."""
    return [
        *model.wires,
        *effective_switch_wires(model.button_switches, active_buttons),
        *effective_switch_wires(model.relay_switches, active_relays),
    ]


def run_tick(model: CircuitModel) -> TickResult:
    """
    Advance the circuit by one tick.

    Actuator state is frozen at the start of the tick: relay switches see
    the coil activation computed by the previous tick, never the one
    computed here. On a short circuit consumer resolution is skipped and
    every lamp and coil keeps its previous output.

    Args:
        model: The circuit to advance. Latches and outputs are updated in place.

    Returns:
        A TickResult describing the tick.

    Raises:
        PowerSourceError: If the circuit lacks exactly one positive and one
            negative terminal. Nothing is modified in that case.
    """
    positive, negative = resolve_power_terminals(model.power_sources)

    model.tick_count += 1
    tick = model.tick_count

    active_buttons = capture_button_latches(model.buttons.values())
    active_relays = capture_relay_latches(model.relay_coils.values())

    elements = collect_conductive_elements(model, active_buttons, active_relays)
    topology = build_topology(elements)

    result = TickResult(
        tick=tick,
        active_buttons=active_buttons,
        active_relays=active_relays,
        node_count=len(topology),
        edge_count=len(topology.edges),
    )

    try:
        propagate(positive, negative, topology)
    except ShortCircuitError as e:
        result.short_circuit = True
        result.short_circuit_at = e.position
    else:
        result.floating = resolve_lamps(model.lamps.values(), topology)
        result.floating += resolve_relay_coils(model.relay_coils.values(), topology)
        result.unvisited_nodes = topology.unvisited_positions()
        if result.unvisited_nodes:
            logger.debug("Tick %d: %d conductive node(s) unreachable from either terminal",
                         tick, len(result.unvisited_nodes))

    result.lamps = model.lamp_states()
    result.coils = model.coil_states()
    return result
