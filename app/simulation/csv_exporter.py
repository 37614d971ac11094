"""
simulation/csv_exporter.py

Export tick traces to CSV format.
No Qt dependencies. Writing the text to disk is left to the caller.
"""

import csv
import io
from datetime import datetime
from typing import Iterable

from models.device import label_sort_key

from .engine import TickResult


def export_trace_csv(results: Iterable[TickResult], circuit_name=""):
    """
    Export a sequence of tick results to a CSV string.

    One row per tick; lamp columns come before coil columns and outputs
    are written as 1/0.

    Args:
        results: TickResult objects, oldest first
        circuit_name: optional circuit filename

    Returns:
        str: CSV content
    """
    results = list(results)
    output = io.StringIO()
    writer = csv.writer(output)

    writer.writerow(["# Trace", "Relay circuit ticks"])
    writer.writerow(["# Date", datetime.now().strftime("%Y-%m-%d %H:%M:%S")])
    if circuit_name:
        writer.writerow(["# Circuit", circuit_name])
    writer.writerow([])

    lamp_labels = sorted({label for r in results for label in r.lamps}, key=label_sort_key)
    coil_labels = sorted({label for r in results for label in r.coils}, key=label_sort_key)
    writer.writerow(["tick", "short_circuit"] + lamp_labels + coil_labels)

    for result in results:
        row = [result.tick, int(result.short_circuit)]
        row += [_cell(result.lamps.get(label)) for label in lamp_labels]
        row += [_cell(result.coils.get(label)) for label in coil_labels]
        writer.writerow(row)

    return output.getvalue()


def _cell(value):
    if value is None:
        return ""
    return int(value)
