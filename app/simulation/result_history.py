"""
simulation/result_history.py

Bounded record of tick results for traces, plots and CSV export.
Pure Python, no Qt dependencies.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from models.device import label_sort_key

from .engine import TickResult

logger = logging.getLogger(__name__)

# Default maximum number of ticks to keep in history (one minute at 20 Hz)
DEFAULT_MAX_HISTORY = 1200


@dataclass(frozen=True)
class OutputChange:
    """A lamp or coil output that flipped between two consecutive recorded ticks."""

    tick: int
    label: str
    value: bool


class TickHistory:
    """
    Keeps the newest *max_entries* tick results, oldest first.

    When *max_entries* is exceeded the oldest tick is silently dropped.
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_HISTORY):
        self._entries: list[TickResult] = []
        self._max_entries = max(1, max_entries)

    # -- mutators ---------------------------------------------------------

    def add(self, result: TickResult) -> None:
        self._entries.append(result)
        if len(self._entries) > self._max_entries:
            self._entries.pop(0)

    def clear(self) -> None:
        self._entries.clear()

    # -- queries ----------------------------------------------------------

    @property
    def entries(self) -> list[TickResult]:
        """All entries, oldest first (read-only snapshot)."""
        return list(self._entries)

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> TickResult:
        return self._entries[index]

    def __bool__(self) -> bool:
        return bool(self._entries)

    def latest(self) -> Optional[TickResult]:
        """Return the most recent entry, or *None* if empty."""
        return self._entries[-1] if self._entries else None

    def short_circuits(self) -> list[TickResult]:
        return [e for e in self._entries if e.short_circuit]

    def labels(self) -> list[str]:
        """Every lamp and coil label seen in the history, lamps first, in id order."""
        lamps: set[str] = set()
        coils: set[str] = set()
        for entry in self._entries:
            lamps.update(entry.lamps)
            coils.update(entry.coils)
        return sorted(lamps, key=label_sort_key) + sorted(coils, key=label_sort_key)

    def series(self, label: str) -> list[Optional[bool]]:
        """The value of one output at every recorded tick (None where absent)."""
        values = []
        for entry in self._entries:
            if label in entry.lamps:
                values.append(entry.lamps[label])
            else:
                values.append(entry.coils.get(label))
        return values

    def changes(self) -> list[OutputChange]:
        """
        Output flips between consecutive entries.

        The first entry is the baseline and produces no changes; an output
        that appears later counts as a change to its first value.
        """
        changes = []
        previous: Optional[dict[str, bool]] = None
        for entry in self._entries:
            current = {**entry.lamps, **entry.coils}
            if previous is not None:
                for label, value in current.items():
                    if previous.get(label) != value:
                        changes.append(OutputChange(entry.tick, label, value))
            previous = current
        return changes
