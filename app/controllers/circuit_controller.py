"""
CircuitController - Orchestrates placement and removal of circuit elements.

This module contains no Qt dependencies. It manages the CircuitModel,
enforces the placement rules of the grid editor and notifies views of
changes through an observer pattern.
"""

import logging
from typing import Any, Callable, Optional

from models.circuit import CircuitModel, Device
from models.consumer import ButtonData, LampData, RelayCoilData
from models.device import terminals_for
from models.grid import GRID_HEIGHT, GRID_WIDTH, GridPosition
from models.switch import MAX_RELAY_CONTACTS, ButtonSwitchData, RelaySwitchData, SwitchType
from models.wire import WireData

logger = logging.getLogger(__name__)


class CircuitController:
    """
    Controller for circuit placement operations.

    Manages the CircuitModel and notifies registered observers when
    the model changes. Views register callbacks to stay in sync.
    Placement methods return None when a rule rejects the placement.

    Observer events:
        wire_added (WireData) - A new wire was placed
        wire_removed (int) - A wire was removed (by index)
        lamp_added (LampData) - A lamp was placed
        relay_coil_added (RelayCoilData) - A relay coil was placed
        button_switch_added (ButtonSwitchData) - A button contact was placed
        relay_switch_added (RelaySwitchData) - A relay contact was placed
        device_removed (Device) - A placed device was removed
        button_pressed (ButtonData) - A push button latched a press
        circuit_cleared (None) - The entire circuit was cleared
        model_loaded (None) - Circuit loaded from file
        model_saved (None) - Circuit saved to file
        tick_completed (TickResult) - A simulation tick finished
        short_circuit (TickResult) - A tick stopped on a short circuit
    """

    def __init__(self, model: Optional[CircuitModel] = None,
                 grid_size: tuple[int, int] = (GRID_WIDTH, GRID_HEIGHT)):
        self.model = model or CircuitModel()
        self.grid_size = grid_size
        self._observers: list[Callable[[str, Any], None]] = []

    def add_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Register a callback for model change events."""
        if callback not in self._observers:
            self._observers.append(callback)

    def remove_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Unregister a previously registered callback."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self, event: str, data: Any) -> None:
        """Notify all observers of a model change."""
        for observer in self._observers:
            try:
                observer(event, data)
            except (TypeError, AttributeError, RuntimeError) as e:
                logger.error("Error notifying observer: %s", e)

    def _on_grid(self, pos: GridPosition) -> bool:
        return pos.in_grid(*self.grid_size)

    def _device_terminals(self, centre: GridPosition) -> Optional[tuple[GridPosition, GridPosition]]:
        """Terminals for a device at ``centre``, or None if it would leave the grid."""
        try:
            top, bottom = terminals_for(centre)
        except ValueError:
            return None
        if not (self._on_grid(top) and self._on_grid(bottom)):
            return None
        return top, bottom

    # --- Wire operations ---

    def add_wire(self, first: GridPosition, second: GridPosition) -> Optional[WireData]:
        """
        Place a wire between two grid positions.

        Only horizontal or vertical wires inside the grid are accepted.

        Returns:
            The new WireData, or None if the placement was rejected.
        """
        wire = WireData(first=first, second=second)
        if not wire.is_axis_aligned():
            logger.debug("Rejected diagonal wire %r", wire)
            return None
        if not (self._on_grid(first) and self._on_grid(second)):
            logger.debug("Rejected wire %r outside the grid", wire)
            return None
        self.model.add_wire(wire)
        self._notify('wire_added', wire)
        return wire

    def remove_wire(self, wire_index: int) -> None:
        """Remove a wire by index."""
        if 0 <= wire_index < len(self.model.wires):
            self.model.remove_wire(wire_index)
            self._notify('wire_removed', wire_index)

    # --- Device placement ---

    def place_lamp(self, lamp_id: int, centre: GridPosition) -> Optional[LampData]:
        """Place lamp ``-P{id}``. Each lamp id can be placed once."""
        if lamp_id in self.model.lamps:
            logger.debug("Lamp -P%d is already placed", lamp_id)
            return None
        terminals = self._device_terminals(centre)
        if terminals is None:
            logger.debug("No room for lamp -P%d at %r", lamp_id, centre)
            return None
        lamp = LampData(lamp_id, *terminals)
        self.model.add_lamp(lamp)
        self._notify('lamp_added', lamp)
        return lamp

    def place_relay_coil(self, coil_id: int, centre: GridPosition) -> Optional[RelayCoilData]:
        """Place relay coil ``-K{id}``. Each coil id can be placed once."""
        if coil_id in self.model.relay_coils:
            logger.debug("Relay coil -K%d is already placed", coil_id)
            return None
        terminals = self._device_terminals(centre)
        if terminals is None:
            logger.debug("No room for relay coil -K%d at %r", coil_id, centre)
            return None
        coil = RelayCoilData(coil_id, *terminals)
        self.model.add_relay_coil(coil)
        self._notify('relay_coil_added', coil)
        return coil

    def place_button_switch(self, button_id: int, switch_type: SwitchType,
                            centre: GridPosition) -> Optional[ButtonSwitchData]:
        """Place a contact of push button ``-S{id}``; one per id and contact kind."""
        if any(s.device_id == button_id and s.switch_type is switch_type
               for s in self.model.button_switches):
            logger.debug("Button -S%d already has a %s contact", button_id, switch_type.value)
            return None
        terminals = self._device_terminals(centre)
        if terminals is None:
            logger.debug("No room for button -S%d at %r", button_id, centre)
            return None
        switch = ButtonSwitchData(button_id, switch_type, *terminals)
        self.model.add_button_switch(switch)
        self._notify('button_switch_added', switch)
        return switch

    def place_relay_switch(self, relay_id: int, switch_type: SwitchType,
                           centre: GridPosition) -> Optional[RelaySwitchData]:
        """Place a contact of relay ``-K{id}``; at most MAX_RELAY_CONTACTS per id and kind."""
        placed = sum(1 for s in self.model.relay_switches
                     if s.device_id == relay_id and s.switch_type is switch_type)
        if placed >= MAX_RELAY_CONTACTS:
            logger.debug("Relay -K%d already has %d %s contacts", relay_id, placed, switch_type.value)
            return None
        terminals = self._device_terminals(centre)
        if terminals is None:
            logger.debug("No room for relay switch -K%d at %r", relay_id, centre)
            return None
        switch = RelaySwitchData(relay_id, switch_type, *terminals)
        self.model.add_relay_switch(switch)
        self._notify('relay_switch_added', switch)
        return switch

    # --- Removal ---

    def remove_device(self, device: Device) -> None:
        self.model.remove_device(device)
        self._notify('device_removed', device)

    def remove_at(self, pos: GridPosition) -> int:
        """
        Remove everything under a grid position.

        Wires are removed when their segment passes through ``pos``,
        devices when their top, middle or bottom cell is ``pos``. Wires are
        removed in reverse index order to preserve indices.

        Returns:
            The number of elements removed.
        """
        wire_indices = self.model.wire_indices_at(pos)
        for idx in sorted(wire_indices, reverse=True):
            self.model.remove_wire(idx)
            self._notify('wire_removed', idx)

        devices = self.model.devices_at(pos)
        for device in devices:
            self.remove_device(device)

        return len(wire_indices) + len(devices)

    # --- Actuators ---

    def press_button(self, button_id: int) -> ButtonData:
        """Latch a press on push button ``-S{id}`` for the next tick."""
        button = self.model.press_button(button_id)
        self._notify('button_pressed', button)
        return button

    # --- Circuit operations ---

    def clear_circuit(self) -> None:
        """Clear the entire circuit."""
        self.model.clear()
        self._notify('circuit_cleared', None)
