"""Tests for scripting.jupyter: SVG rendering and trace plots."""

import xml.etree.ElementTree as ET

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest
from scripting.circuit import Circuit
from scripting.jupyter import circuit_to_svg, plot_trace
from simulation.engine import TickResult


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")


def _lamp_circuit():
    circuit = Circuit()
    circuit.add_wire((0, 19), (3, 19))
    circuit.add_lamp(1, (3, 18))
    circuit.add_wire((3, 17), (3, 16))
    circuit.add_wire((3, 16), (0, 16))
    return circuit


class TestCircuitToSvg:
    def test_empty_circuit_is_valid_svg(self):
        root = ET.fromstring(circuit_to_svg(Circuit().model))
        assert root.tag.endswith("svg")
        # the two power terminals are always drawn
        assert len([el for el in root if el.tag.endswith("circle")]) == 2

    def test_elements_drawn(self):
        circuit = _lamp_circuit()
        root = ET.fromstring(circuit_to_svg(circuit.model))
        assert len([el for el in root if el.tag.endswith("line")]) == 3
        labels = [el.text for el in root if el.tag.endswith("text")]
        assert labels == ["-P1"]

    def test_lit_lamp_highlighted(self):
        circuit = _lamp_circuit()
        circuit.tick()
        root = ET.fromstring(circuit_to_svg(circuit.model))
        classes = [el.get("class") for el in root if el.tag.endswith("rect") and el.get("class")]
        assert classes == ["device on"]

    def test_switch_label_includes_kind(self):
        circuit = Circuit()
        circuit.add_relay_switch(2, "NC", (5, 5))
        root = ET.fromstring(circuit_to_svg(circuit.model))
        assert [el.text for el in root if el.tag.endswith("text")] == ["-K2 NC"]

    def test_repr_svg(self):
        assert _lamp_circuit()._repr_svg_().startswith("<svg")


class TestPlotTrace:
    def test_empty_returns_none(self):
        assert plot_trace([]) is None

    def test_no_outputs_returns_none(self):
        assert plot_trace([TickResult(tick=1)]) is None

    def test_one_lane_per_output(self):
        results = [
            TickResult(tick=1, lamps={"-P1": False}, coils={"-K1": True}),
            TickResult(tick=2, lamps={"-P1": True}, coils={"-K1": True}),
        ]
        fig = plot_trace(results, title="demo")
        ax = fig.axes[0]
        assert len(ax.get_lines()) == 2
        assert [t.get_text() for t in ax.get_yticklabels()] == ["-P1", "-K1"]
        assert ax.get_title() == "demo"

    def test_lanes_in_numeric_id_order(self):
        results = [TickResult(tick=1, lamps={"-P10": True, "-P2": False})]
        fig = plot_trace(results)
        assert [t.get_text() for t in fig.axes[0].get_yticklabels()] == ["-P2", "-P10"]

    def test_selected_labels(self):
        results = [TickResult(tick=1, lamps={"-P1": True, "-P2": False})]
        fig = plot_trace(results, labels=["-P2"])
        assert len(fig.axes[0].get_lines()) == 1

    def test_circuit_plot_trace(self):
        circuit = _lamp_circuit()
        circuit.run(3)
        fig = circuit.plot_trace()
        assert fig is not None
