"""Crate-level analysis driver."""

from .engine import analyze_crate, measure_files

__all__ = ["analyze_crate", "measure_files"]
