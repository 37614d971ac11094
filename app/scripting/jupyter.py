"""Jupyter notebook integration for relay circuits.

Provides SVG rendering for Circuit objects and matplotlib plotting
of tick traces, enabling inline display in Jupyter notebooks.
"""

import xml.etree.ElementTree as ET
from typing import Iterable, Optional

from models.circuit import CircuitModel
from models.device import label_sort_key
from models.grid import GRID_HEIGHT, GRID_WIDTH, GridPosition
from models.power import PowerType
from simulation.engine import TickResult

CELL_SIZE = 14

# --- SVG rendering ---


def circuit_to_svg(model: CircuitModel, width: int = GRID_WIDTH, height: int = GRID_HEIGHT,
                   cell: int = CELL_SIZE) -> str:
    """Render a circuit model as an SVG string.

    Draws the grid as a dot lattice, wires as lines, and every device as
    a labelled box spanning its three cells. Lit lamps and activated coils
    are filled. Grid row 0 is at the bottom.

    Args:
        model: The CircuitModel to render.
        width: Grid width in cells.
        height: Grid height in cells.
        cell: Pixel size of one grid cell.

    Returns:
        An SVG string suitable for Jupyter _repr_svg_().
    """
    px_w, px_h = width * cell, height * cell

    def centre_of(pos: GridPosition):
        return pos.x * cell + cell / 2, (height - 1 - pos.y) * cell + cell / 2

    svg = ET.Element(
        "svg",
        xmlns="http://www.w3.org/2000/svg",
        width=str(px_w),
        height=str(px_h),
        viewBox=f"0 0 {px_w} {px_h}",
    )
    ET.SubElement(svg, "rect", width=str(px_w), height=str(px_h), fill="white")

    style = ET.SubElement(svg, "style")
    style.text = (
        ".wire { stroke: #333; stroke-width: 2; }"
        ".device { fill: #f0f4ff; stroke: #336; stroke-width: 1.5; }"
        ".device.on { fill: #ffd84d; }"
        ".label { font-family: monospace; font-size: 9px; fill: #333; }"
        ".positive { fill: #c33; }"
        ".negative { fill: #33c; }"
    )

    for wire in model.wires:
        x1, y1 = centre_of(wire.first)
        x2, y2 = centre_of(wire.second)
        ET.SubElement(
            svg, "line", x1=str(x1), y1=str(y1), x2=str(x2), y2=str(y2), **{"class": "wire"}
        )

    lit = {id(lamp) for lamp in model.lamps.values() if lamp.is_lit}
    lit.update(id(coil) for coil in model.relay_coils.values() if coil.activated)
    for device in model.all_devices():
        tx, ty = centre_of(device.top)
        classes = "device on" if id(device) in lit else "device"
        ET.SubElement(
            svg,
            "rect",
            x=str(tx - cell / 2 + 2),
            y=str(ty - cell / 2),
            width=str(cell - 4),
            height=str(cell * 3),
            rx="2",
            **{"class": classes},
        )
        label = ET.SubElement(svg, "text", x=str(tx + cell / 2), y=str(ty + cell * 1.3), **{"class": "label"})
        kind = getattr(device, "switch_type", None)
        label.text = f"{device.label} {kind.value}" if kind is not None else device.label

    for source in model.power_sources:
        cx, cy = centre_of(source.position)
        polarity = "positive" if source.polarity is PowerType.POSITIVE else "negative"
        ET.SubElement(svg, "circle", cx=str(cx), cy=str(cy), r=str(cell / 3), **{"class": polarity})

    return ET.tostring(svg, encoding="unicode")


# --- Matplotlib plotting ---


def plot_trace(results: Iterable[TickResult], labels: Optional[list[str]] = None,
               title: Optional[str] = None):
    """Generate a matplotlib step plot of lamp and coil outputs over ticks.

    Each output gets its own lane; a raised line means lit/activated.
    Ticks that hit a short circuit are marked with a red band.

    Args:
        results: TickResult objects, oldest first.
        labels: Outputs to plot. Defaults to every lamp then every coil.
        title: Optional plot title.

    Returns:
        A matplotlib Figure, or None if there is nothing to plot.
    """
    import matplotlib.pyplot as plt

    results = list(results)
    if not results:
        return None
    if labels is None:
        lamps = sorted({label for r in results for label in r.lamps}, key=label_sort_key)
        coils = sorted({label for r in results for label in r.coils}, key=label_sort_key)
        labels = lamps + coils
    if not labels:
        return None

    ticks = [r.tick for r in results]
    fig, ax = plt.subplots(figsize=(10, 1 + 0.6 * len(labels)))
    for lane, label in enumerate(labels):
        values = []
        for r in results:
            value = r.lamps.get(label, r.coils.get(label, False))
            values.append(lane + (0.7 if value else 0.0))
        ax.step(ticks, values, where="post", label=label)

    for r in results:
        if r.short_circuit:
            ax.axvspan(r.tick - 0.5, r.tick + 0.5, color="red", alpha=0.2)

    ax.set_yticks(range(len(labels)))
    ax.set_yticklabels(labels)
    ax.set_xlabel("Tick")
    ax.set_title(title or "Relay circuit trace")
    ax.grid(axis="x", alpha=0.3)
    plt.tight_layout()
    return fig
