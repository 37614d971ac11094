"""
Controllers for the relay circuit simulator.

This package contains controller classes that orchestrate operations
between the circuit model and its users using an observer pattern.
Qt is used only by the tick driver and for recent files.
"""

from .circuit_controller import CircuitController
from .file_controller import FileController, validate_circuit_data
from .simulation_controller import SimulationController, ValidationResult
from .tick_driver import TICK_RATE_HZ, TickDriver

__all__ = [
    "CircuitController",
    "SimulationController",
    "ValidationResult",
    "FileController",
    "validate_circuit_data",
    "TickDriver",
    "TICK_RATE_HZ",
]
