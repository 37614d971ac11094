"""Relay circuit simulator: grid-based relay ladder circuits ticked at a fixed rate."""
