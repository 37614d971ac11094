from .circuit_validator import PowerSourceError, resolve_power_terminals, validate_circuit
from .engine import TickResult, run_tick
from .propagation import ShortCircuitError, propagate, walk
from .resolver import TerminalState, classify_terminals, resolve_lamps, resolve_relay_coils
from .topology import NodeMark, Topology, build_topology
from .result_history import OutputChange, TickHistory
from .csv_exporter import export_trace_csv

__all__ = [
    'NodeMark', 'Topology', 'build_topology',
    'ShortCircuitError', 'walk', 'propagate',
    'TerminalState', 'classify_terminals', 'resolve_lamps', 'resolve_relay_coils',
    'PowerSourceError', 'resolve_power_terminals', 'validate_circuit',
    'TickResult', 'run_tick',
    'TickHistory', 'OutputChange', 'export_trace_csv',
]
