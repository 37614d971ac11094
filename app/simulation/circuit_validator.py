"""
simulation/circuit_validator.py

Pre-simulation circuit validation with no Qt dependencies.
"""

from collections import Counter
from typing import Sequence

from models.circuit import CircuitModel
from models.grid import GridPosition
from models.power import PowerSourceData, PowerType
from models.switch import MAX_RELAY_CONTACTS


class PowerSourceError(ValueError):
    """The circuit does not have exactly one positive and one negative terminal."""


def resolve_power_terminals(sources: Sequence[PowerSourceData]) -> tuple[GridPosition, GridPosition]:
    """
    Pick the positive and negative terminal positions.

    Args:
        sources: The circuit's power sources.

    Returns:
        (positive_position, negative_position)

    Raises:
        PowerSourceError: Unless there are exactly two sources of
            opposite polarity.
    """
    if len(sources) != 2:
        raise PowerSourceError(f"Expected exactly 2 power sources, found {len(sources)}.")

    positives = [s for s in sources if s.polarity is PowerType.POSITIVE]
    negatives = [s for s in sources if s.polarity is PowerType.NEGATIVE]
    if len(positives) != 1 or len(negatives) != 1:
        raise PowerSourceError("Power sources must be one positive and one negative terminal.")

    return positives[0].position, negatives[0].position


def validate_circuit(model: CircuitModel):
    """
    Validate a circuit before ticking it.

    Args:
        model: The CircuitModel to check.

    Returns:
        (is_valid, errors, warnings) where:
            is_valid: bool: False if any errors found
            errors: list[str]: problems that prevent simulation
            warnings: list[str]: circuits that tick but probably not as intended
    """
    errors = []
    warnings = []

    # 1. Power terminals
    try:
        resolve_power_terminals(model.power_sources)
    except PowerSourceError as e:
        errors.append(str(e))

    # 2. Wires should run horizontally or vertically
    for i, wire in enumerate(model.wires):
        if not wire.is_axis_aligned():
            warnings.append(f"Wire #{i + 1} {wire.first!r} -> {wire.second!r} is not horizontal or vertical.")

    # 3. Consumers with a terminal that no conductive element touches
    conductive = set()
    for wire in model.wires:
        conductive.update(wire.endpoints())
    for switch in [*model.button_switches, *model.relay_switches]:
        conductive.update(switch.terminals())

    for consumer in [*model.lamps.values(), *model.relay_coils.values()]:
        unconnected = [name for name, pos in (("top", consumer.top), ("bottom", consumer.bottom))
                       if pos not in conductive]
        if unconnected:
            warnings.append(f"{consumer.label} has unconnected terminal(s): {', '.join(unconnected)}.")

    # 4. Relay contacts without a coil never switch
    for device_id in sorted({s.device_id for s in model.relay_switches} - set(model.relay_coils)):
        warnings.append(f"Relay switch -K{device_id} has no relay coil to drive it.")

    # 5. More contacts than placement allows
    counts = Counter((s.device_id, s.switch_type) for s in model.relay_switches)
    for (device_id, switch_type), count in sorted(counts.items(), key=lambda kv: (kv[0][0], kv[0][1].value)):
        if count > MAX_RELAY_CONTACTS:
            warnings.append(
                f"Relay -K{device_id} has {count} {switch_type.value} contacts (limit {MAX_RELAY_CONTACTS})."
            )

    is_valid = len(errors) == 0
    return is_valid, errors, warnings
