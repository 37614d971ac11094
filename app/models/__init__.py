"""
Pure Python data models for the relay circuit simulator.

This package contains Qt-free data classes that represent circuit elements.
All models use only Python standard library types (no PyQt6 dependencies).
"""

from .circuit import CircuitModel
from .consumer import ButtonData, LampData, RelayCoilData
from .device import label_sort_key, terminals_for
from .grid import GRID_HEIGHT, GRID_WIDTH, GridPosition
from .power import (
    DEFAULT_NEGATIVE_POSITION,
    DEFAULT_POSITIVE_POSITION,
    PowerSourceData,
    PowerType,
    default_power_sources,
)
from .switch import MAX_RELAY_CONTACTS, ButtonSwitchData, RelaySwitchData, SwitchDeviceData, SwitchType
from .wire import WireData

__all__ = [
    "CircuitModel",
    "GridPosition",
    "GRID_WIDTH",
    "GRID_HEIGHT",
    "WireData",
    "SwitchType",
    "MAX_RELAY_CONTACTS",
    "SwitchDeviceData",
    "ButtonSwitchData",
    "RelaySwitchData",
    "ButtonData",
    "LampData",
    "RelayCoilData",
    "PowerType",
    "PowerSourceData",
    "DEFAULT_POSITIVE_POSITION",
    "DEFAULT_NEGATIVE_POSITION",
    "default_power_sources",
    "terminals_for",
    "label_sort_key",
]
