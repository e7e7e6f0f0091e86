"""
Canon Module

Single source of truth for chronotype window templates (v5.0).

Objects:
- ChronotypeTemplate (per chronotype, all five modes)
- CanonTimeWindow (clock times, may exceed 24:00)

Invariants:
- Every chronotype maps all five modes to at least one window
- Window end > start numerically (24:30 > 22:00)
"""

from .display import format_window_for_display, normalize_time_for_display
from .modes_copy import MODES_COPY, ModeCopy
from .templates import (
    CANON_VERSION,
    FOCUS_ENVELOPES,
    WINDOW_TEMPLATES,
    focus_envelope,
    has_split_windows,
    mode_windows,
    post_lunch_dip,
    primary_window,
    templates_for,
)

__all__ = [
    "CANON_VERSION",
    "FOCUS_ENVELOPES",
    "WINDOW_TEMPLATES",
    "MODES_COPY",
    "ModeCopy",
    "templates_for",
    "mode_windows",
    "primary_window",
    "has_split_windows",
    "post_lunch_dip",
    "focus_envelope",
    "normalize_time_for_display",
    "format_window_for_display",
]
