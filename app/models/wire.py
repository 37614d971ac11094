"""
WireData - Pure Python data model for grid wires.

This module contains no Qt dependencies. A wire is an unordered pair of
grid positions; the engine only uses its two endpoints as graph edge
endpoints.
"""

from dataclasses import dataclass

from .grid import GridPosition


@dataclass
class WireData:
    """
    A conductive segment between two grid positions.

    Placement keeps wires horizontal or vertical, but nothing here
    enforces it.
    """

    first: GridPosition
    second: GridPosition

    def endpoints(self) -> tuple[GridPosition, GridPosition]:
        return (self.first, self.second)

    def is_axis_aligned(self) -> bool:
        """Check whether both endpoints share a column or a row."""
        return self.first.x == self.second.x or self.first.y == self.second.y

    def contains(self, pos: GridPosition) -> bool:
        """
        Check whether the segment passes through a grid position.

        Endpoints count as part of the segment. Wires that are not
        axis-aligned never contain anything.
        """
        if self.first.x == self.second.x:
            if pos.x != self.first.x:
                return False
            low, high = sorted((self.first.y, self.second.y))
            return low <= pos.y <= high
        if self.first.y == self.second.y:
            if pos.y != self.first.y:
                return False
            low, high = sorted((self.first.x, self.second.x))
            return low <= pos.x <= high
        return False

    def reversed(self) -> "WireData":
        """Return the same wire with its endpoints swapped."""
        return WireData(first=self.second, second=self.first)

    def to_dict(self) -> dict:
        return {"first": self.first.to_dict(), "second": self.second.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> "WireData":
        return cls(
            first=GridPosition.from_dict(data["first"]),
            second=GridPosition.from_dict(data["second"]),
        )

    def __repr__(self) -> str:
        return f"WireData({self.first!r} -> {self.second!r})"
