"""
SimulationController - Orchestrates the tick pipeline.

This module contains no Qt dependencies. It validates the circuit,
advances it tick by tick, keeps a bounded history of results and
notifies observers through the CircuitController.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from models.circuit import CircuitModel
from simulation.circuit_validator import validate_circuit
from simulation.engine import TickResult, run_tick
from simulation.result_history import DEFAULT_MAX_HISTORY, TickHistory

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of a pre-simulation check."""

    success: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def error(self) -> str:
        return "; ".join(self.errors)


class SimulationController:
    """
    Controller for the tick pipeline.

    Coordinates: latch capture -> topology -> propagation -> resolution,
    one call to step() per tick.
    """

    def __init__(self, model: Optional[CircuitModel] = None, circuit_ctrl=None,
                 max_history: int = DEFAULT_MAX_HISTORY):
        self.model = model or CircuitModel()
        self.circuit_ctrl = circuit_ctrl  # For observer notifications
        self.history = TickHistory(max_history)

    def _notify(self, event: str, data) -> None:
        if self.circuit_ctrl:
            self.circuit_ctrl._notify(event, data)

    def validate_circuit(self) -> ValidationResult:
        """Check the circuit without ticking it."""
        is_valid, errors, warnings = validate_circuit(self.model)
        return ValidationResult(success=is_valid, errors=errors, warnings=warnings)

    def press_button(self, button_id: int) -> None:
        """Latch a button press, through the circuit controller when there is one."""
        if self.circuit_ctrl:
            self.circuit_ctrl.press_button(button_id)
        else:
            self.model.press_button(button_id)

    def step(self) -> TickResult:
        """
        Advance the circuit by one tick and record the result.

        Raises:
            PowerSourceError: If the power terminals are misconfigured.
        """
        result = run_tick(self.model)
        self.history.add(result)
        if result.short_circuit:
            logger.warning("Tick %d: short circuit at %r, outputs frozen",
                           result.tick, result.short_circuit_at)
            self._notify("short_circuit", result)
        self._notify("tick_completed", result)
        return result

    def run(self, ticks: int,
            presses: Optional[Mapping[int, Iterable[int]]] = None) -> list[TickResult]:
        """
        Run several ticks in a row.

        Args:
            ticks: Number of ticks to run.
            presses: Optional mapping of tick offset (1 = first tick of this
                run) to the button ids pressed just before that tick.

        Returns:
            The TickResult of every tick, in order.
        """
        presses = presses or {}
        results = []
        for offset in range(1, ticks + 1):
            for button_id in presses.get(offset, ()):
                self.press_button(button_id)
            results.append(self.step())
        return results

    def reset_outputs(self) -> None:
        """Switch every lamp and coil off and forget pending presses and history."""
        for lamp in self.model.lamps.values():
            lamp.is_lit = False
        for coil in self.model.relay_coils.values():
            coil.activated = False
        for button in self.model.buttons.values():
            button.has_been_pressed = False
        self.model.tick_count = 0
        self.history.clear()
