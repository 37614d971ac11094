"""
TickDriver - Runs simulation ticks on a Qt timer.

The simulation is a fixed-rate loop: every timer timeout runs exactly
one tick through the SimulationController and re-emits the result.
Requires a running Qt event loop (QCoreApplication or QApplication).
"""

import logging
from typing import Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal
from simulation.circuit_validator import PowerSourceError

from .simulation_controller import SimulationController

logger = logging.getLogger(__name__)

TICK_RATE_HZ = 20
TICK_INTERVAL_MS = 1000 // TICK_RATE_HZ


class TickDriver(QObject):
    """
    Fixed-rate tick loop.

    Signals:
        tick_completed(TickResult): after every tick.
        tick_failed(str): when a tick cannot run; the driver stops.
    """

    tick_completed = pyqtSignal(object)
    tick_failed = pyqtSignal(str)

    def __init__(
        self,
        simulation_ctrl: SimulationController,
        rate_hz: int = TICK_RATE_HZ,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        if rate_hz <= 0:
            raise ValueError(f"Tick rate must be positive, got {rate_hz}")
        self.simulation_ctrl = simulation_ctrl
        self._interval_ms = max(1, 1000 // rate_hz)
        self._in_tick = False
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def is_running(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        if not self._timer.isActive():
            logger.debug("Tick driver started at %d ms", self._interval_ms)
        self._timer.start(self._interval_ms)

    def stop(self) -> None:
        if self._timer.isActive():
            logger.debug("Tick driver stopped")
        self._timer.stop()

    def _on_timeout(self) -> None:
        # A slow tick must not be re-entered by a queued timeout
        if self._in_tick:
            logger.debug("Skipping tick, previous tick still running")
            return
        self._in_tick = True
        try:
            result = self.simulation_ctrl.step()
        except PowerSourceError as e:
            logger.error("Tick failed: %s", e)
            self.stop()
            self.tick_failed.emit(str(e))
            return
        finally:
            self._in_tick = False
        self.tick_completed.emit(result)
