"""
Switch devices - conditionally present wires.

This module contains no Qt dependencies. A switch device conducts between
its top and bottom terminals depending on its kind and on whether the
actuator that drives it (a push button or a relay coil) is active.
"""

from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet

from .device import TwoTerminalDevice
from .grid import GridPosition
from .wire import WireData

# Placement allows this many relay contacts per relay id and contact kind
MAX_RELAY_CONTACTS = 5


class SwitchType(Enum):
    """Contact kind of a switch device."""

    NORMALLY_OPEN = "NO"
    NORMALLY_CLOSED = "NC"


@dataclass
class SwitchDeviceData(TwoTerminalDevice):
    """
    A contact pair driven by an actuator identified by ``device_id``.

    Several devices may share one ``device_id``; they are ganged contacts
    that all follow the same actuator.
    """

    device_id: int
    switch_type: SwitchType
    top: GridPosition
    bottom: GridPosition

    def conducts(self, active_ids: AbstractSet[int]) -> bool:
        """
        Decide whether this contact closes for the given set of active actuators.

        Normally-open contacts close when their actuator is active,
        normally-closed contacts when it is not.
        """
        active = self.device_id in active_ids
        if self.switch_type is SwitchType.NORMALLY_OPEN:
            return active
        return not active

    def as_wire(self) -> WireData:
        """The edge this contact contributes while it conducts."""
        return WireData(first=self.top, second=self.bottom)

    def to_dict(self) -> dict:
        return {
            "id": self.device_id,
            "type": self.switch_type.value,
            "top": self.top.to_dict(),
            "bottom": self.bottom.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict):
        return cls(
            device_id=int(data["id"]),
            switch_type=SwitchType(data["type"]),
            top=GridPosition.from_dict(data["top"]),
            bottom=GridPosition.from_dict(data["bottom"]),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.label} {self.switch_type.value}, {self.top!r}-{self.bottom!r})"


@dataclass(repr=False)
class ButtonSwitchData(SwitchDeviceData):
    """Contact operated by push button ``-S{id}``."""

    label_prefix = "-S"


@dataclass(repr=False)
class RelaySwitchData(SwitchDeviceData):
    """Contact operated by relay coil ``-K{id}``."""

    label_prefix = "-K"
