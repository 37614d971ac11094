"""
Relay circuit scripting API: programmatic circuit creation and simulation.

This package provides a headless Python API for building, ticking and
saving relay circuits without a Qt event loop.

Usage::

    from scripting import Circuit

    circuit = Circuit()
    circuit.add_wire((0, 19), (5, 19))
    circuit.add_button_switch(1, "NO", (5, 18))
    circuit.add_wire((5, 17), (10, 17))
    circuit.add_lamp(1, (10, 16))
    circuit.add_wire((10, 15), (0, 15))
    circuit.add_wire((0, 15), (0, 16))

    circuit.run(3, presses={2: [1]})
    print(circuit.history.series("-P1"))

    circuit.save("my_circuit.json")
"""

from controllers.simulation_controller import ValidationResult
from scripting.circuit import Circuit
from scripting.jupyter import circuit_to_svg, plot_trace
from simulation.engine import TickResult

__all__ = ["Circuit", "TickResult", "ValidationResult", "circuit_to_svg", "plot_trace"]
