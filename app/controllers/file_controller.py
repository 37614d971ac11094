"""
FileController - Handles circuit file I/O and recent files.

File dialog interaction is the responsibility of the caller.
Recent files tracking uses QSettings for cross-session persistence.
"""

import json
import logging
import os
from pathlib import Path
from typing import List, Optional

from models.circuit import CircuitModel
from models.power import PowerType
from models.switch import SwitchType
from PyQt6.QtCore import QSettings

logger = logging.getLogger(__name__)

MAX_RECENT_FILES = 10

SETTINGS_ORGANIZATION = "RelaySim"
SETTINGS_APPLICATION = "Relay Circuit Simulator"

ELEMENT_LISTS = ("wires", "lamps", "relay_coils", "button_switches", "relay_switches")


def _check_position(pos, where: str) -> None:
    if not isinstance(pos, dict) or "x" not in pos or "y" not in pos:
        raise ValueError(f"{where} has invalid position data.")
    for axis in ("x", "y"):
        value = pos[axis]
        # bool is an int subclass but never a coordinate
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{where} position values must be integers.")
        if value < 0:
            raise ValueError(f"{where} position values must not be negative.")


def _check_device(device, where: str, keys) -> None:
    if not isinstance(device, dict):
        raise ValueError(f"{where} is not an object.")
    for key in keys:
        if key not in device:
            raise ValueError(f"{where} is missing required field '{key}'.")
    if isinstance(device["id"], bool) or not isinstance(device["id"], int):
        raise ValueError(f"{where} has a non-integer id.")
    top, bottom = device["top"], device["bottom"]
    _check_position(top, where)
    _check_position(bottom, where)
    # Devices span three cells in one column: top, centre, bottom
    if top["x"] != bottom["x"] or top["y"] != bottom["y"] + 2:
        raise ValueError(f"{where} terminals must be two rows apart in the same column.")


def validate_circuit_data(data) -> None:
    """
    Validate JSON structure before loading.

    Raises ValueError with a descriptive message if anything is wrong.
    Missing element lists are treated as empty; a missing
    ``power_sources`` list means the default terminal pair.
    """
    if not isinstance(data, dict):
        raise ValueError("File does not contain a valid circuit object.")

    for key in ELEMENT_LISTS:
        if key in data and not isinstance(data[key], list):
            raise ValueError(f"Invalid '{key}' list.")

    if "power_sources" in data:
        sources = data["power_sources"]
        if not isinstance(sources, list):
            raise ValueError("Invalid 'power_sources' list.")
        polarities = {p.value for p in PowerType}
        for i, source in enumerate(sources):
            where = f"Power source #{i + 1}"
            if not isinstance(source, dict):
                raise ValueError(f"{where} is not an object.")
            for key in ("polarity", "pos"):
                if key not in source:
                    raise ValueError(f"{where} is missing required field '{key}'.")
            if source["polarity"] not in polarities:
                raise ValueError(f"{where} has unknown polarity '{source['polarity']}'.")
            _check_position(source["pos"], where)

    for i, wire in enumerate(data.get("wires", [])):
        where = f"Wire #{i + 1}"
        if not isinstance(wire, dict):
            raise ValueError(f"{where} is not an object.")
        for key in ("first", "second"):
            if key not in wire:
                raise ValueError(f"{where} is missing required field '{key}'.")
            _check_position(wire[key], where)

    for key, prefix in (("lamps", "-P"), ("relay_coils", "-K")):
        seen = set()
        for i, device in enumerate(data.get(key, [])):
            _check_device(device, f"{key[:-1].replace('_', ' ').capitalize()} #{i + 1}", ("id", "top", "bottom"))
            if device["id"] in seen:
                raise ValueError(f"Duplicate id {prefix}{device['id']} in '{key}'.")
            seen.add(device["id"])

    kinds = {t.value for t in SwitchType}
    for key in ("button_switches", "relay_switches"):
        for i, device in enumerate(data.get(key, [])):
            where = f"{key[:-2].replace('_', ' ').capitalize()} #{i + 1}"
            _check_device(device, where, ("id", "type", "top", "bottom"))
            if device["type"] not in kinds:
                raise ValueError(f"{where} has unknown switch type '{device['type']}'.")


class FileController:
    """
    Manages circuit file I/O.

    Handles saving/loading circuit data as JSON and tracking
    the current file path for quick-save.
    """

    def __init__(self, model: Optional[CircuitModel] = None, circuit_ctrl=None):
        self.model = model or CircuitModel()
        self.circuit_ctrl = circuit_ctrl  # For observer notifications
        self.current_file: Optional[Path] = None

    def new_circuit(self) -> None:
        """Clear the circuit and reset file state."""
        self.model.clear()
        self.current_file = None

    def save_circuit(self, filepath, track_recent: bool = True) -> None:
        """
        Save circuit to JSON file.

        Args:
            filepath: Path or string to save to.
            track_recent: Add the path to the recent files list.

        Raises:
            OSError: If the file cannot be written.
        """
        filepath = Path(filepath)
        data = self.model.to_dict()
        with open(filepath, "w") as f:
            json.dump(data, f, indent=2)
        self.current_file = filepath
        logger.info("Saved circuit to %s", filepath)
        if track_recent:
            self.add_recent_file(filepath)

        if self.circuit_ctrl:
            self.circuit_ctrl._notify("model_saved", None)

    def load_circuit(self, filepath, track_recent: bool = True) -> None:
        """
        Load circuit from JSON file.

        Validates JSON structure before loading. Updates the model
        in place (preserving the reference so controllers stay connected).

        Args:
            filepath: Path or string to load from.
            track_recent: Add the path to the recent files list.

        Raises:
            json.JSONDecodeError: If file is not valid JSON.
            ValueError: If file structure is invalid.
            OSError: If the file cannot be read.
        """
        filepath = Path(filepath)
        with open(filepath, "r") as f:
            data = json.load(f)

        validate_circuit_data(data)

        new_model = CircuitModel.from_dict(data)

        # Update current model in place (preserving reference)
        self.model.clear()
        self.model.wires = new_model.wires
        self.model.lamps = new_model.lamps
        self.model.relay_coils = new_model.relay_coils
        self.model.button_switches = new_model.button_switches
        self.model.relay_switches = new_model.relay_switches
        self.model.buttons = new_model.buttons
        self.model.power_sources = new_model.power_sources

        self.current_file = filepath
        logger.info(
            "Loaded circuit from %s (%d wires, %d devices)",
            filepath,
            len(self.model.wires),
            len(self.model.all_devices()),
        )
        if track_recent:
            self.add_recent_file(filepath)

        if self.circuit_ctrl:
            self.circuit_ctrl._notify("model_loaded", None)

    def has_file(self) -> bool:
        """Return whether a current file path is set (for quick-save)."""
        return self.current_file is not None

    def get_recent_files(self) -> List[str]:
        """
        Get list of recently used files from QSettings.

        Returns:
            List of file paths (most recent first), with non-existent files removed.
        """
        settings = QSettings(SETTINGS_ORGANIZATION, SETTINGS_APPLICATION)
        recent = settings.value("file/recent_files", [])

        if not isinstance(recent, list):
            recent = []

        existing = [f for f in recent if os.path.exists(f)]

        if len(existing) != len(recent):
            settings.setValue("file/recent_files", existing)

        return existing

    def add_recent_file(self, filepath) -> None:
        """Move *filepath* to the front of the recent files list."""
        filepath_str = str(Path(filepath).absolute())
        recent = self.get_recent_files()

        if filepath_str in recent:
            recent.remove(filepath_str)
        recent.insert(0, filepath_str)
        recent = recent[:MAX_RECENT_FILES]

        settings = QSettings(SETTINGS_ORGANIZATION, SETTINGS_APPLICATION)
        settings.setValue("file/recent_files", recent)

    def clear_recent_files(self) -> None:
        """Clear the recent files list."""
        settings = QSettings(SETTINGS_ORGANIZATION, SETTINGS_APPLICATION)
        settings.setValue("file/recent_files", [])
