"""Simulated low-level runtime builtins: byte-addressed memory routines and stack probes."""

__version__ = "0.1.0"
__all__ = ["mem", "probe"]