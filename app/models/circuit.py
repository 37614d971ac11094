"""
CircuitModel - Central data store for circuit state.

This module contains no Qt dependencies. It holds every placed element
together with the per-element flags that carry state from one tick to
the next (button latches, relay coil activation, lamp output).
"""

from dataclasses import dataclass, field
from typing import Union

from .consumer import ButtonData, LampData, RelayCoilData
from .grid import GridPosition
from .power import PowerSourceData, default_power_sources
from .switch import ButtonSwitchData, RelaySwitchData
from .wire import WireData

Device = Union[LampData, RelayCoilData, ButtonSwitchData, RelaySwitchData]


@dataclass
class CircuitModel:
    """
    Central data store holding all circuit state.

    Lamps and relay coils are keyed by id (one of each per id). Switch
    devices are kept in lists because several contacts may share an id.
    """

    wires: list[WireData] = field(default_factory=list)
    lamps: dict[int, LampData] = field(default_factory=dict)
    relay_coils: dict[int, RelayCoilData] = field(default_factory=dict)
    button_switches: list[ButtonSwitchData] = field(default_factory=list)
    relay_switches: list[RelaySwitchData] = field(default_factory=list)
    buttons: dict[int, ButtonData] = field(default_factory=dict)
    power_sources: list[PowerSourceData] = field(default_factory=default_power_sources)

    # Number of ticks simulated since the model was created or cleared
    tick_count: int = 0

    # --- Element operations ---

    def add_wire(self, wire: WireData) -> None:
        self.wires.append(wire)

    def remove_wire(self, wire_index: int) -> None:
        """Remove a wire by index. Out-of-range indices are ignored."""
        if 0 <= wire_index < len(self.wires):
            del self.wires[wire_index]

    def add_lamp(self, lamp: LampData) -> None:
        self.lamps[lamp.device_id] = lamp

    def add_relay_coil(self, coil: RelayCoilData) -> None:
        self.relay_coils[coil.device_id] = coil

    def add_button_switch(self, switch: ButtonSwitchData) -> None:
        """Add a button contact, creating the push button that drives it if needed."""
        self.button_switches.append(switch)
        self.get_button(switch.device_id)

    def add_relay_switch(self, switch: RelaySwitchData) -> None:
        self.relay_switches.append(switch)

    def remove_device(self, device: Device) -> None:
        """Remove a placed device. Unknown devices are ignored."""
        if isinstance(device, LampData):
            if self.lamps.get(device.device_id) is device:
                del self.lamps[device.device_id]
        elif isinstance(device, RelayCoilData):
            if self.relay_coils.get(device.device_id) is device:
                del self.relay_coils[device.device_id]
        elif isinstance(device, ButtonSwitchData):
            self.button_switches = [s for s in self.button_switches if s is not device]
        elif isinstance(device, RelaySwitchData):
            self.relay_switches = [s for s in self.relay_switches if s is not device]

    def all_devices(self) -> list[Device]:
        """Every placed two-terminal device."""
        return [
            *self.lamps.values(),
            *self.button_switches,
            *self.relay_switches,
            *self.relay_coils.values(),
        ]

    # --- Hit testing ---

    def wire_indices_at(self, pos: GridPosition) -> list[int]:
        """Indices of wires whose segment passes through ``pos``."""
        return [i for i, wire in enumerate(self.wires) if wire.contains(pos)]

    def devices_at(self, pos: GridPosition) -> list[Device]:
        """Devices covering ``pos`` with their top, middle or bottom cell."""
        return [device for device in self.all_devices() if device.occupies(pos)]

    # --- Actuators ---

    def get_button(self, button_id: int) -> ButtonData:
        """Return the push button with this id, creating it on first use."""
        button = self.buttons.get(button_id)
        if button is None:
            button = ButtonData(button_id)
            self.buttons[button_id] = button
        return button

    def press_button(self, button_id: int) -> ButtonData:
        """Latch a press on a push button until the next tick consumes it."""
        button = self.get_button(button_id)
        button.press()
        return button

    # --- Outputs ---

    def lamp_states(self) -> dict[str, bool]:
        return {lamp.label: lamp.is_lit for lamp in self.lamps.values()}

    def coil_states(self) -> dict[str, bool]:
        return {coil.label: coil.activated for coil in self.relay_coils.values()}

    # --- Circuit operations ---

    def clear(self) -> None:
        """Remove every placed element and restore the default power terminals."""
        self.wires.clear()
        self.lamps.clear()
        self.relay_coils.clear()
        self.button_switches.clear()
        self.relay_switches.clear()
        self.buttons.clear()
        self.power_sources = default_power_sources()
        self.tick_count = 0

    # --- Serialization ---

    def to_dict(self) -> dict:
        """Serialize circuit to dictionary (circuit JSON file format)."""
        return {
            "power_sources": [p.to_dict() for p in self.power_sources],
            "wires": [w.to_dict() for w in self.wires],
            "lamps": [lamp.to_dict() for lamp in self.lamps.values()],
            "relay_coils": [coil.to_dict() for coil in self.relay_coils.values()],
            "button_switches": [s.to_dict() for s in self.button_switches],
            "relay_switches": [s.to_dict() for s in self.relay_switches],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CircuitModel":
        """
        Deserialize circuit from dictionary.

        A file without ``power_sources`` gets the default terminal pair.
        """
        model = cls()
        if "power_sources" in data:
            model.power_sources = [PowerSourceData.from_dict(p) for p in data["power_sources"]]

        for wire_data in data.get("wires", []):
            model.add_wire(WireData.from_dict(wire_data))
        for lamp_data in data.get("lamps", []):
            model.add_lamp(LampData.from_dict(lamp_data))
        for coil_data in data.get("relay_coils", []):
            model.add_relay_coil(RelayCoilData.from_dict(coil_data))
        for switch_data in data.get("button_switches", []):
            model.add_button_switch(ButtonSwitchData.from_dict(switch_data))
        for switch_data in data.get("relay_switches", []):
            model.add_relay_switch(RelaySwitchData.from_dict(switch_data))

        return model
