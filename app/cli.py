"""
Command-line interface for relay circuit batch operations.

Run ticks, validate circuits, watch a live simulation and re-export
circuit files without a GUI.

Usage::

    python -m cli run circuit.json --ticks 20
    python -m cli run circuit.json --ticks 20 --press 1@3 --format csv --output trace.csv
    python -m cli validate circuit.json
    python -m cli watch circuit.json --duration 5
    python -m cli export circuit.json --output normalized.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from controllers.circuit_controller import CircuitController
from controllers.file_controller import validate_circuit_data
from controllers.simulation_controller import SimulationController
from controllers.tick_driver import TICK_RATE_HZ
from models.circuit import CircuitModel
from simulation.circuit_validator import PowerSourceError
from simulation.csv_exporter import export_trace_csv

logger = logging.getLogger(__name__)


def try_load_circuit(filepath: str) -> tuple[CircuitModel | None, str]:
    """Load and validate a circuit JSON file without exiting.

    Args:
        filepath: Path to the circuit JSON file.

    Returns:
        (model, "") on success, or (None, error_message) on failure.
    """
    path = Path(filepath)
    if not path.exists():
        return None, f"file not found: {filepath}"

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        return None, f"invalid JSON in {filepath}: {e}"

    try:
        validate_circuit_data(data)
    except ValueError as e:
        return None, f"invalid circuit file: {e}"

    return CircuitModel.from_dict(data), ""


def load_circuit(filepath: str) -> CircuitModel:
    """Load and validate a circuit JSON file.

    Raises:
        SystemExit: On file read or validation errors.
    """
    model, error = try_load_circuit(filepath)
    if model is None:
        print(f"Error: {error}", file=sys.stderr)
        sys.exit(1)
    return model


def parse_press(text: str) -> tuple[int, int]:
    """Parse an ``ID@TICK`` button press argument."""
    button, sep, tick = text.partition("@")
    try:
        if not sep:
            raise ValueError
        button_id, tick_offset = int(button), int(tick)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected ID@TICK, got '{text}'") from None
    if tick_offset < 1:
        raise argparse.ArgumentTypeError(f"tick must be 1 or later, got {tick_offset}")
    return button_id, tick_offset


def cmd_run(args: argparse.Namespace) -> int:
    """Run a fixed number of ticks and output the trace."""
    model = load_circuit(args.circuit)
    logger.debug("Running %d tick(s) of %s", args.ticks, args.circuit)
    controller = CircuitController(model)
    sim = SimulationController(model, controller, max_history=max(1, args.ticks))

    presses: dict[int, list[int]] = {}
    for button_id, tick_offset in args.press or []:
        presses.setdefault(tick_offset, []).append(button_id)

    try:
        results = sim.run(args.ticks, presses)
    except PowerSourceError as e:
        print(f"Simulation failed: {e}", file=sys.stderr)
        return 1

    shorts = [r.tick for r in results if r.short_circuit]
    if shorts:
        print(f"Warning: short circuit on {len(shorts)} tick(s), first at tick {shorts[0]}", file=sys.stderr)

    circuit_name = Path(args.circuit).stem
    if args.format == "csv":
        output_text = export_trace_csv(results, circuit_name)
    else:
        output_text = json.dumps(
            {
                "circuit": circuit_name,
                "ticks": [r.to_dict() for r in results],
                "lamps": model.lamp_states(),
                "coils": model.coil_states(),
            },
            indent=2,
        )

    if args.output:
        with open(args.output, "w", newline="") as f:
            f.write(output_text)
        print(f"Results written to {args.output}", file=sys.stderr)
    else:
        print(output_text)

    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a circuit without ticking it."""
    model = load_circuit(args.circuit)
    sim = SimulationController(model)

    result = sim.validate_circuit()

    if result.success:
        print(f"Circuit is valid: {args.circuit}")
        for warning in result.warnings:
            print(f"  Warning: {warning}")
        return 0
    else:
        print(f"Circuit has errors: {args.circuit}", file=sys.stderr)
        for err in result.errors:
            print(f"  - {err}", file=sys.stderr)
        return 1


def cmd_watch(args: argparse.Namespace) -> int:
    """Run the circuit in real time on a Qt event loop, printing output changes."""
    from controllers.tick_driver import TickDriver
    from PyQt6.QtCore import QCoreApplication, QTimer

    model = load_circuit(args.circuit)
    controller = CircuitController(model)
    sim = SimulationController(model, controller)

    validation = sim.validate_circuit()
    if not validation.success:
        print(f"Circuit has errors: {args.circuit}", file=sys.stderr)
        for err in validation.errors:
            print(f"  - {err}", file=sys.stderr)
        return 1

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    driver = TickDriver(sim, rate_hz=args.rate)
    previous: dict[str, bool] = {}

    def on_tick(result):
        if result.short_circuit:
            print(f"tick {result.tick}: short circuit at {result.short_circuit_at!r}")
        current = {**result.lamps, **result.coils}
        for label, value in current.items():
            if previous.get(label) != value:
                print(f"tick {result.tick}: {label} {'on' if value else 'off'}")
        previous.clear()
        previous.update(current)

    def on_failed(message):
        print(f"Simulation failed: {message}", file=sys.stderr)
        app.exit(1)

    driver.tick_completed.connect(on_tick)
    driver.tick_failed.connect(on_failed)
    QTimer.singleShot(int(args.duration * 1000), app.quit)

    driver.start()
    try:
        code = app.exec()
    finally:
        driver.stop()
    print(f"{model.tick_count} ticks in {args.duration:g}s", file=sys.stderr)
    return code


def cmd_export(args: argparse.Namespace) -> int:
    """Re-serialise a validated circuit file."""
    model = load_circuit(args.circuit)
    output_text = json.dumps(model.to_dict(), indent=2)

    if args.output:
        Path(args.output).write_text(output_text)
        print(f"Exported {args.circuit} -> {args.output}", file=sys.stderr)
    else:
        print(output_text)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="relay-sim",
        description="Relay circuit simulator batch operations: run, validate, watch and export circuits.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug output to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # run
    run_parser = subparsers.add_parser("run", help="Run a number of ticks and output the trace")
    run_parser.add_argument("circuit", help="Path to circuit JSON file")
    run_parser.add_argument("--ticks", "-n", type=int, default=1, help="Number of ticks to run (default: 1)")
    run_parser.add_argument(
        "--press",
        type=parse_press,
        action="append",
        metavar="ID@TICK",
        help="Press button ID just before tick TICK (1-based, repeatable)",
    )
    run_parser.add_argument("--format", choices=["json", "csv"], default="json", help="Output format (default: json)")
    run_parser.add_argument("--output", "-o", help="Write results to file instead of stdout")

    # validate
    val_parser = subparsers.add_parser("validate", help="Check circuit for errors without ticking it")
    val_parser.add_argument("circuit", help="Path to circuit JSON file")

    # watch
    watch_parser = subparsers.add_parser("watch", help="Tick the circuit in real time and print output changes")
    watch_parser.add_argument("circuit", help="Path to circuit JSON file")
    watch_parser.add_argument("--duration", "-d", type=float, default=5.0, help="Seconds to run (default: 5)")
    watch_parser.add_argument(
        "--rate", type=int, default=TICK_RATE_HZ, help=f"Ticks per second (default: {TICK_RATE_HZ})"
    )

    # export
    exp_parser = subparsers.add_parser("export", help="Validate and re-serialise a circuit file")
    exp_parser.add_argument("circuit", help="Path to circuit JSON file")
    exp_parser.add_argument("--output", "-o", help="Write output to file instead of stdout")

    return parser


def main(argv=None) -> int:
    """CLI entry point. Returns exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    handlers = {
        "run": cmd_run,
        "validate": cmd_validate,
        "watch": cmd_watch,
        "export": cmd_export,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    if getattr(args, "ticks", 1) < 0:
        print("Error: --ticks must not be negative", file=sys.stderr)
        return 1
    if getattr(args, "rate", 1) <= 0:
        print("Error: --rate must be positive", file=sys.stderr)
        return 1

    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
