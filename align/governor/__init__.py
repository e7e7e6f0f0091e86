"""
Governor Module

Per-mode governance verdicts for a day.

Invariants:
- Exactly one decision per mode, per call
- Reason strings come from a fixed vocabulary
- PERMIT carries one window, FRAGMENTED two or more segments, SILENCE neither
"""

from .evaluate import classify, evaluate_day, evaluate_mode, select_candidate
from .reasons import NOT_RELIABLE, REASONS, SPLIT_BY_UNAVAILABLE, SUPPORTS_MODE
from .subtraction import merge_intervals, overlaps, subtract
from .thresholds import MIN_DURATION_MINUTES, ThresholdConfigError, load_thresholds

__all__ = [
    "evaluate_day",
    "evaluate_mode",
    "select_candidate",
    "classify",
    "subtract",
    "overlaps",
    "merge_intervals",
    "MIN_DURATION_MINUTES",
    "load_thresholds",
    "ThresholdConfigError",
    "REASONS",
    "NOT_RELIABLE",
    "SPLIT_BY_UNAVAILABLE",
    "SUPPORTS_MODE",
]
