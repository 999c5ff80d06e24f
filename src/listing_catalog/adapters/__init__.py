"""Adapters – infrastructure implementations of the core's ports."""
