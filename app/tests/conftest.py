"""
Shared test fixtures for the relay circuit simulator test suite.

All fixtures build pure-Python model objects (no Qt dependencies).
Circuits use the default power terminals: positive at (0, 19),
negative at (0, 16).
"""

import os
import sys
from pathlib import Path

# Ensure app/ is on sys.path so bare imports (models, simulation, controllers)
# work when running individual test files (e.g., python -m pytest app/tests/unit/test_foo.py).
_app_dir = str(Path(__file__).resolve().parent.parent)
if _app_dir not in sys.path:
    sys.path.insert(0, _app_dir)

# Qt objects are created headless in tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from models.circuit import CircuitModel
from models.consumer import LampData, RelayCoilData
from models.device import terminals_for
from models.grid import GridPosition
from models.switch import ButtonSwitchData, RelaySwitchData, SwitchType
from models.wire import WireData

NO = SwitchType.NORMALLY_OPEN
NC = SwitchType.NORMALLY_CLOSED


def pos(x, y):
    """Shorthand for a GridPosition."""
    return GridPosition(x, y)


def make_wire(first, second):
    """Helper to create a WireData from two (x, y) tuples."""
    return WireData(first=pos(*first), second=pos(*second))


def make_lamp(lamp_id, centre):
    return LampData(lamp_id, *terminals_for(pos(*centre)))


def make_coil(coil_id, centre):
    return RelayCoilData(coil_id, *terminals_for(pos(*centre)))


def make_button_switch(button_id, switch_type, centre):
    return ButtonSwitchData(button_id, switch_type, *terminals_for(pos(*centre)))


def make_relay_switch(relay_id, switch_type, centre):
    return RelaySwitchData(relay_id, switch_type, *terminals_for(pos(*centre)))


def build_model(wires=(), lamps=(), coils=(), button_switches=(), relay_switches=()):
    """Assemble a CircuitModel from helper-made elements."""
    model = CircuitModel()
    for first, second in wires:
        model.add_wire(make_wire(first, second))
    for lamp in lamps:
        model.add_lamp(lamp)
    for coil in coils:
        model.add_relay_coil(coil)
    for switch in button_switches:
        model.add_button_switch(switch)
    for switch in relay_switches:
        model.add_relay_switch(switch)
    return model


# Lamp -P1 straight across the terminals:
# (0,19) -- (1,19) -- (3,19) = lamp top, lamp bottom (3,17) -- (3,16) -- (0,16)
LAMP_WIRES = [
    ((0, 19), (1, 19)),
    ((1, 19), (3, 19)),
    ((3, 17), (3, 16)),
    ((3, 16), (0, 16)),
]


@pytest.fixture
def lamp_circuit():
    """Lamp -P1 permanently connected across the power terminals."""
    return build_model(wires=LAMP_WIRES, lamps=[make_lamp(1, (3, 18))])


@pytest.fixture
def lamp_circuit_with_short_button():
    """
    The lamp circuit plus button -S9 (NO) bridging the terminals.

    -S9 sits at (1,18): top (1,19) on the positive rail, bottom (1,17)
    wired down to the negative terminal. Pressing it shorts the supply.
    """
    return build_model(
        wires=LAMP_WIRES + [((1, 17), (1, 16)), ((1, 16), (0, 16))],
        lamps=[make_lamp(1, (3, 18))],
        button_switches=[make_button_switch(9, NO, (1, 18))],
    )


@pytest.fixture
def button_lamp_circuit():
    """
    Lamp -P1 behind a button contact.

    (0,19) -- (5,19) = -S1 top, -S1 bottom (5,17) -- (10,17) = -P1 top,
    -P1 bottom (10,15) -- (0,15) -- (0,16).
    The contact kind is set by the test through ``button_switches[0]``.
    """
    return build_model(
        wires=[
            ((0, 19), (5, 19)),
            ((5, 17), (10, 17)),
            ((10, 15), (0, 15)),
            ((0, 15), (0, 16)),
        ],
        lamps=[make_lamp(1, (10, 16))],
        button_switches=[make_button_switch(1, NO, (5, 18))],
    )


@pytest.fixture
def self_holding_relay():
    """
    Start button -S1 with a self-holding relay -K1 that drives lamp -P1.

    -S1 (NO) and the holding contact -K1 (NO) sit in parallel between the
    positive rail (row 19) and the coil feed (row 17). Coil -K1 sits between
    (4,17) and the return rail (row 15). A second -K1 (NO) contact at
    column 6 switches lamp -P1 between the rails.
    """
    return build_model(
        wires=[
            ((0, 19), (2, 19)),
            ((2, 19), (4, 19)),
            ((4, 19), (6, 19)),
            ((2, 17), (4, 17)),
            ((6, 15), (4, 15)),
            ((4, 15), (0, 15)),
            ((0, 15), (0, 16)),
        ],
        lamps=[make_lamp(1, (6, 16))],
        coils=[make_coil(1, (4, 16))],
        button_switches=[make_button_switch(1, NO, (2, 18))],
        relay_switches=[make_relay_switch(1, NO, (4, 18)), make_relay_switch(1, NO, (6, 18))],
    )


@pytest.fixture
def events():
    """Fixture that returns a list and a callback that appends events to it."""
    recorded = []

    def callback(event, data):
        recorded.append((event, data))

    return recorded, callback
