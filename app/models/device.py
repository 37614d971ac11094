"""
Shared behaviour for devices that sit on three vertically stacked cells.

Every placed device (lamp, relay coil, button switch, relay switch) is
anchored on a centre cell, with its top terminal one row above and its
bottom terminal one row below.
"""

from typing import ClassVar

from .grid import GridPosition


def terminals_for(centre: GridPosition) -> tuple[GridPosition, GridPosition]:
    """
    Compute the (top, bottom) terminals of a device placed at ``centre``.

    Raises:
        ValueError: If the centre is on the bottom row, leaving no room
            for the bottom terminal.
    """
    if centre.y < 1:
        raise ValueError(f"No room for a bottom terminal below {centre!r}")
    return centre.offset(dy=1), centre.offset(dy=-1)


def label_sort_key(label: str) -> tuple[str, int, str]:
    """Sort key that orders device labels by prefix, then numerically by id (-P2 before -P10)."""
    prefix, number = label[:2], label[2:]
    try:
        return (prefix, int(number), "")
    except ValueError:
        return (prefix, 0, number)


class TwoTerminalDevice:
    """Mixin for dataclasses with ``device_id``, ``top`` and ``bottom`` fields."""

    label_prefix: ClassVar[str] = ""

    @property
    def label(self) -> str:
        """Schematic label, e.g. ``-P3`` for lamp 3."""
        return f"{self.label_prefix}{self.device_id}"

    @property
    def middle(self) -> GridPosition:
        return self.top.offset(dy=-1)

    def terminals(self) -> tuple[GridPosition, GridPosition]:
        return (self.top, self.bottom)

    def occupies(self, pos: GridPosition) -> bool:
        """Check whether a grid cell is covered by this device."""
        return pos in (self.top, self.bottom, self.middle)
