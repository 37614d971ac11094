"""
Circuit: high-level scripting API for programmatic circuit manipulation.

No GUI dependency. Wraps the existing model/controller/simulation
layers behind a user-friendly interface.
"""

import json
from pathlib import Path
from typing import Iterable, Mapping, Optional, Union

from controllers.circuit_controller import CircuitController
from controllers.simulation_controller import SimulationController, ValidationResult
from models.circuit import CircuitModel
from models.consumer import LampData, RelayCoilData
from models.grid import GridPosition
from models.switch import ButtonSwitchData, RelaySwitchData, SwitchType
from models.wire import WireData
from simulation.csv_exporter import export_trace_csv
from simulation.engine import TickResult
from simulation.result_history import TickHistory

PositionLike = Union[GridPosition, tuple[int, int]]
SwitchTypeLike = Union[SwitchType, str]


def _position(value: PositionLike) -> GridPosition:
    if isinstance(value, GridPosition):
        return value
    x, y = value
    return GridPosition(int(x), int(y))


def _switch_type(value: SwitchTypeLike) -> SwitchType:
    if isinstance(value, SwitchType):
        return value
    try:
        return SwitchType(str(value).upper())
    except ValueError:
        raise ValueError(f"Unknown switch type '{value}'. Valid types: NO, NC") from None


class Circuit:
    """A scriptable relay circuit that can be built, ticked, and saved programmatically.

    Wraps CircuitModel, CircuitController, and SimulationController to provide
    a clean API for headless circuit workflows. Positions may be given as
    ``GridPosition`` or plain ``(x, y)`` tuples.

    Args:
        model: An existing CircuitModel to wrap. If None, creates an empty circuit.
    """

    def __init__(self, model: Optional[CircuitModel] = None):
        self._model = model or CircuitModel()
        self._controller = CircuitController(self._model)
        self._sim = SimulationController(self._model, self._controller)

    # --- Factory methods ---

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Circuit":
        """Load a circuit from a JSON file.

        Args:
            path: Path to the circuit JSON file.

        Returns:
            A new Circuit instance populated from the file.

        Raises:
            FileNotFoundError: If the file does not exist.
            json.JSONDecodeError: If the file is not valid JSON.
            ValueError: If the JSON structure is invalid.
        """
        path = Path(path)
        with open(path, "r") as f:
            data = json.load(f)

        from controllers.file_controller import validate_circuit_data

        validate_circuit_data(data)
        model = CircuitModel.from_dict(data)
        return cls(model)

    # --- Placement ---

    def add_wire(self, first: PositionLike, second: PositionLike) -> WireData:
        """Draw a wire between two grid cells.

        Raises:
            ValueError: If the wire is diagonal or leaves the grid.
        """
        first, second = _position(first), _position(second)
        wire = self._controller.add_wire(first, second)
        if wire is None:
            raise ValueError(f"Cannot draw wire {first!r} -> {second!r}: wires must be "
                             "horizontal or vertical and inside the grid")
        return wire

    def add_lamp(self, lamp_id: int, centre: PositionLike) -> LampData:
        """Place lamp ``-P{lamp_id}`` centred on ``centre``.

        Raises:
            ValueError: If the id is taken or the lamp does not fit on the grid.
        """
        centre = _position(centre)
        lamp = self._controller.place_lamp(lamp_id, centre)
        if lamp is None:
            raise ValueError(f"Cannot place lamp -P{lamp_id} at {centre!r}")
        return lamp

    def add_relay_coil(self, coil_id: int, centre: PositionLike) -> RelayCoilData:
        """Place relay coil ``-K{coil_id}`` centred on ``centre``.

        Raises:
            ValueError: If the id is taken or the coil does not fit on the grid.
        """
        centre = _position(centre)
        coil = self._controller.place_relay_coil(coil_id, centre)
        if coil is None:
            raise ValueError(f"Cannot place relay coil -K{coil_id} at {centre!r}")
        return coil

    def add_button_switch(self, button_id: int, switch_type: SwitchTypeLike,
                          centre: PositionLike) -> ButtonSwitchData:
        """Place a contact of push button ``-S{button_id}``.

        Args:
            button_id: The button that drives the contact.
            switch_type: "NO", "NC" or a SwitchType.
            centre: Centre cell of the contact.

        Raises:
            ValueError: If a contact of that id and type already exists,
                the type is unknown, or the contact does not fit on the grid.
        """
        kind = _switch_type(switch_type)
        centre = _position(centre)
        switch = self._controller.place_button_switch(button_id, kind, centre)
        if switch is None:
            raise ValueError(f"Cannot place {kind.value} contact of -S{button_id} at {centre!r}")
        return switch

    def add_relay_switch(self, relay_id: int, switch_type: SwitchTypeLike,
                         centre: PositionLike) -> RelaySwitchData:
        """Place a contact of relay ``-K{relay_id}``.

        Raises:
            ValueError: If the relay already has the maximum number of
                contacts of that type, the type is unknown, or the contact
                does not fit on the grid.
        """
        kind = _switch_type(switch_type)
        centre = _position(centre)
        switch = self._controller.place_relay_switch(relay_id, kind, centre)
        if switch is None:
            raise ValueError(f"Cannot place {kind.value} contact of -K{relay_id} at {centre!r}")
        return switch

    def remove_at(self, pos: PositionLike) -> int:
        """Remove every wire and device touching ``pos``; returns how many were removed."""
        return self._controller.remove_at(_position(pos))

    def clear(self) -> None:
        self._controller.clear_circuit()
        self._sim.history.clear()

    # --- Simulation ---

    def press(self, button_id: int) -> None:
        """Press push button ``-S{button_id}`` for the next tick."""
        self._sim.press_button(button_id)

    def tick(self) -> TickResult:
        """Run one simulation tick.

        Raises:
            simulation.circuit_validator.PowerSourceError: If the power
                terminals are misconfigured.
        """
        return self._sim.step()

    def run(self, ticks: int,
            presses: Optional[Mapping[int, Iterable[int]]] = None) -> list[TickResult]:
        """Run several ticks.

        Args:
            ticks: Number of ticks to run.
            presses: Optional mapping of tick offset (1 = the first tick of
                this run) to the button ids pressed before that tick.
        """
        return self._sim.run(ticks, presses)

    def validate(self) -> ValidationResult:
        """Validate the circuit without ticking it."""
        return self._sim.validate_circuit()

    def lamp_states(self) -> dict[str, bool]:
        """Lamp label -> lit, as of the last tick."""
        return self._model.lamp_states()

    def coil_states(self) -> dict[str, bool]:
        """Relay coil label -> activated, as of the last tick."""
        return self._model.coil_states()

    @property
    def history(self) -> TickHistory:
        """Results of the most recent ticks, oldest first."""
        return self._sim.history

    # --- Persistence ---

    def save(self, path: Union[str, Path]) -> None:
        """Save the circuit to a JSON file.

        Args:
            path: Destination file path.
        """
        path = Path(path)
        data = self._model.to_dict()
        with open(path, "w") as f:
            json.dump(data, f, indent=2)

    def export_trace(self, path: Union[str, Path], circuit_name: str = "") -> None:
        """Write the tick history as CSV."""
        with open(Path(path), "w", newline="") as f:
            f.write(export_trace_csv(self.history.entries, circuit_name))

    # --- Properties ---

    @property
    def wires(self) -> list[WireData]:
        return self._model.wires

    @property
    def lamps(self) -> dict[int, LampData]:
        return self._model.lamps

    @property
    def relay_coils(self) -> dict[int, RelayCoilData]:
        return self._model.relay_coils

    @property
    def button_switches(self) -> list[ButtonSwitchData]:
        return self._model.button_switches

    @property
    def relay_switches(self) -> list[RelaySwitchData]:
        return self._model.relay_switches

    @property
    def tick_count(self) -> int:
        return self._model.tick_count

    @property
    def model(self) -> CircuitModel:
        """Direct access to the underlying CircuitModel."""
        return self._model

    @property
    def controller(self) -> CircuitController:
        """The CircuitController, for registering observers."""
        return self._controller

    # --- Display integration ---

    def _repr_svg_(self) -> str:
        """Jupyter notebook SVG representation."""
        from scripting.jupyter import circuit_to_svg

        return circuit_to_svg(self._model)

    def plot_trace(self, labels: Optional[list[str]] = None, title: Optional[str] = None):
        """Plot the tick history with matplotlib.

        Returns:
            A matplotlib Figure, or None if there is nothing to plot.
        """
        from scripting.jupyter import plot_trace

        return plot_trace(self.history.entries, labels=labels, title=title)
