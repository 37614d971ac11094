"""
Integration tests for saving and loading circuits through FileController.

A saved circuit keeps its lamp and coil states, so a simulation can be
stopped, written to disk and resumed from the file.
"""
import json
from unittest.mock import patch

import pytest
from controllers.circuit_controller import CircuitController
from controllers.file_controller import FileController
from controllers.simulation_controller import SimulationController
from models.circuit import CircuitModel
from models.grid import GridPosition
from models.power import PowerType
from models.switch import SwitchType


@pytest.fixture
def file_ctrl():
    model = CircuitModel()
    circuit_ctrl = CircuitController(model)
    return FileController(model, circuit_ctrl), circuit_ctrl


class TestRoundTrip:

    def test_all_elements_preserved(self, tmp_path, self_holding_relay):
        path = tmp_path / "relay.json"
        FileController(self_holding_relay).save_circuit(path, track_recent=False)

        loaded = CircuitModel()
        FileController(loaded).load_circuit(path, track_recent=False)

        assert loaded.wires == self_holding_relay.wires
        assert loaded.lamps == self_holding_relay.lamps
        assert loaded.relay_coils == self_holding_relay.relay_coils
        assert loaded.button_switches == self_holding_relay.button_switches
        assert loaded.relay_switches == self_holding_relay.relay_switches
        assert loaded.to_dict() == self_holding_relay.to_dict()

    def test_file_is_plain_json(self, tmp_path, button_lamp_circuit):
        path = tmp_path / "button.json"
        FileController(button_lamp_circuit).save_circuit(path, track_recent=False)

        data = json.loads(path.read_text())
        assert data["button_switches"] == [
            {"id": 1, "type": "NO", "top": {"x": 5, "y": 19}, "bottom": {"x": 5, "y": 17}}
        ]
        assert {p["polarity"] for p in data["power_sources"]} == {"positive", "negative"}

    def test_moved_terminals_survive(self, tmp_path, file_ctrl):
        ctrl, _ = file_ctrl
        ctrl.model.power_sources[0].position = GridPosition(10, 10)
        path = tmp_path / "moved.json"
        ctrl.save_circuit(path, track_recent=False)

        loaded = CircuitModel()
        FileController(loaded).load_circuit(path, track_recent=False)
        positive = next(p for p in loaded.power_sources if p.polarity is PowerType.POSITIVE)
        assert positive.position == GridPosition(10, 10)

    def test_load_replaces_model_in_place(self, tmp_path, file_ctrl, lamp_circuit, events):
        ctrl, circuit_ctrl = file_ctrl
        recorded, callback = events
        circuit_ctrl.add_observer(callback)
        circuit_ctrl.place_relay_switch(3, SwitchType.NORMALLY_CLOSED, GridPosition(20, 20))
        model_ref = ctrl.model

        path = tmp_path / "lamp.json"
        FileController(lamp_circuit).save_circuit(path, track_recent=False)
        ctrl.load_circuit(path, track_recent=False)

        assert ctrl.model is model_ref
        assert circuit_ctrl.model is model_ref
        assert model_ref.relay_switches == []
        assert list(model_ref.lamps) == [1]
        assert recorded[-1] == ("model_loaded", None)

    @patch("controllers.file_controller.QSettings")
    def test_save_tracks_recent_file(self, mock_settings, tmp_path, file_ctrl):
        mock_settings.return_value.value.return_value = []
        ctrl, _ = file_ctrl
        path = tmp_path / "recent.json"
        ctrl.save_circuit(path)
        mock_settings.return_value.setValue.assert_called_with("file/recent_files", [str(path)])


class TestResumeSimulation:

    def test_held_relay_resumes_from_file(self, tmp_path, self_holding_relay):
        sim = SimulationController(self_holding_relay)
        sim.run(3, presses={1: [1]})
        assert self_holding_relay.lamp_states() == {"-P1": True}

        path = tmp_path / "running.json"
        FileController(self_holding_relay).save_circuit(path, track_recent=False)

        resumed = CircuitModel()
        FileController(resumed).load_circuit(path, track_recent=False)
        assert resumed.tick_count == 0
        assert resumed.coil_states() == {"-K1": True}

        result = SimulationController(resumed).step()
        assert result.tick == 1
        assert result.lamps == {"-P1": True}
        assert result.coils == {"-K1": True}

    def test_released_relay_stays_released(self, tmp_path, self_holding_relay):
        path = tmp_path / "idle.json"
        FileController(self_holding_relay).save_circuit(path, track_recent=False)

        resumed = CircuitModel()
        FileController(resumed).load_circuit(path, track_recent=False)
        results = SimulationController(resumed).run(3)
        assert [r.lamps["-P1"] for r in results] == [False, False, False]
