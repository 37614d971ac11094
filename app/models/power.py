"""
Power sources - the positive and negative terminals of the circuit.
"""

from dataclasses import dataclass
from enum import Enum

from .grid import GridPosition

# Where the default terminals sit on a fresh grid
DEFAULT_POSITIVE_POSITION = GridPosition(0, 19)
DEFAULT_NEGATIVE_POSITION = GridPosition(0, 16)


class PowerType(Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"


@dataclass
class PowerSourceData:
    """A power terminal anchored at a fixed grid position."""

    polarity: PowerType
    position: GridPosition

    def to_dict(self) -> dict:
        return {"polarity": self.polarity.value, "pos": self.position.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> "PowerSourceData":
        return cls(
            polarity=PowerType(data["polarity"]),
            position=GridPosition.from_dict(data["pos"]),
        )


def default_power_sources() -> list[PowerSourceData]:
    """The terminal pair every new circuit starts with."""
    return [
        PowerSourceData(PowerType.POSITIVE, DEFAULT_POSITIVE_POSITION),
        PowerSourceData(PowerType.NEGATIVE, DEFAULT_NEGATIVE_POSITION),
    ]
