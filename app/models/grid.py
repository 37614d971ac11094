"""
GridPosition - Integer coordinate on the placement grid.

This module contains no Qt dependencies. A grid position is the only
identity a conductive node has: two elements that share a position are
the same electrical node.
"""

from dataclasses import dataclass

# Size of the placement grid (columns x rows)
GRID_WIDTH = 50
GRID_HEIGHT = 36


@dataclass(frozen=True)
class GridPosition:
    """Immutable, hashable lattice coordinate with the origin at the bottom left."""

    x: int
    y: int

    def __post_init__(self):
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Grid coordinates must be non-negative, got ({self.x}, {self.y})")

    def offset(self, dx: int = 0, dy: int = 0) -> "GridPosition":
        """Return the position shifted by (dx, dy)."""
        return GridPosition(self.x + dx, self.y + dy)

    def in_grid(self, width: int = GRID_WIDTH, height: int = GRID_HEIGHT) -> bool:
        """Check whether this position lies on a grid of the given size."""
        return self.x < width and self.y < height

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> "GridPosition":
        return cls(x=int(data["x"]), y=int(data["y"]))

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"
