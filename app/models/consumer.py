"""
Consumers and actuators - lamps, relay coils and push buttons.

This module contains no Qt dependencies. Consumers have two terminals
that are graph nodes, but the consumer body itself never conducts.
"""

from dataclasses import dataclass

from .device import TwoTerminalDevice
from .grid import GridPosition


@dataclass
class LampData(TwoTerminalDevice):
    """Lamp ``-P{id}``; lit when its terminals see opposite polarities."""

    label_prefix = "-P"

    device_id: int
    top: GridPosition
    bottom: GridPosition
    is_lit: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.device_id,
            "top": self.top.to_dict(),
            "bottom": self.bottom.to_dict(),
            "is_lit": self.is_lit,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LampData":
        return cls(
            device_id=int(data["id"]),
            top=GridPosition.from_dict(data["top"]),
            bottom=GridPosition.from_dict(data["bottom"]),
            is_lit=bool(data.get("is_lit", False)),
        )


@dataclass
class RelayCoilData(TwoTerminalDevice):
    """
    Relay coil ``-K{id}``.

    ``activated`` is written at the end of a tick and drives the relay
    switches sharing this id on the following tick.
    """

    label_prefix = "-K"

    device_id: int
    top: GridPosition
    bottom: GridPosition
    activated: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.device_id,
            "top": self.top.to_dict(),
            "bottom": self.bottom.to_dict(),
            "activated": self.activated,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RelayCoilData":
        return cls(
            device_id=int(data["id"]),
            top=GridPosition.from_dict(data["top"]),
            bottom=GridPosition.from_dict(data["bottom"]),
            activated=bool(data.get("activated", False)),
        )


@dataclass
class ButtonData:
    """
    Push button ``-S{id}`` with a one-tick press latch.

    A press sets the latch; the next tick reads it and clears it, so a
    press closes normally-open contacts for exactly one tick.
    """

    button_id: int
    has_been_pressed: bool = False

    @property
    def label(self) -> str:
        return f"-S{self.button_id}"

    def press(self) -> None:
        self.has_been_pressed = True

    def take(self) -> bool:
        """Read the latch and reset it."""
        pressed = self.has_been_pressed
        self.has_been_pressed = False
        return pressed
