"""
Baseline Module

Turns canon templates into absolute windows for a day, and optionally
modulates window edges by fragility.
"""

from .fragility import apply_fragility_modulation, modulate_baseline_window
from .windows import generate_baseline_windows, parse_day, resolve_canon_time

__all__ = [
    "generate_baseline_windows",
    "parse_day",
    "resolve_canon_time",
    "apply_fragility_modulation",
    "modulate_baseline_window",
]
