"""
Fragility modulation of window edges.

    Low:    widen, start -15 min / end +15 min
    Medium: unchanged
    High:   narrow, start +15 min / end -15 min; FRAMING, EVALUATION and
            SYNTHESIS narrow a further 7.5 min per edge

Not applied on the default evaluation path: baseline geometry stays
canonical until modulation is switched on by a caller.
"""

from dataclasses import replace
from datetime import timedelta

from align.types import (
    BaselineWindow,
    CanonTimeWindow,
    FragilityLevel,
    Mode,
    decimal_to_time,
)

EDGE_SHIFT_HOURS = 0.25  # 15 min
HIGH_STAKES_EXTRA_HOURS = 0.125  # 7.5 min

HIGH_STAKES_MODES = frozenset((Mode.EVALUATION, Mode.FRAMING, Mode.SYNTHESIS))


def edge_adjustments(mode: Mode, fragility: FragilityLevel) -> tuple[float, float]:
    """(start, end) shifts in decimal hours; positive moves later."""
    if fragility is FragilityLevel.LOW:
        return -EDGE_SHIFT_HOURS, EDGE_SHIFT_HOURS
    if fragility is FragilityLevel.HIGH:
        start_adjust, end_adjust = EDGE_SHIFT_HOURS, -EDGE_SHIFT_HOURS
        if mode in HIGH_STAKES_MODES:
            start_adjust += HIGH_STAKES_EXTRA_HOURS
            end_adjust -= HIGH_STAKES_EXTRA_HOURS
        return start_adjust, end_adjust
    return 0.0, 0.0


def apply_fragility_modulation(
    window: CanonTimeWindow, mode: Mode, fragility: FragilityLevel
) -> CanonTimeWindow:
    """Adjust a canon window's edges; minutes are rounded half-up."""
    start_adjust, end_adjust = edge_adjustments(mode, fragility)
    if start_adjust == 0 and end_adjust == 0:
        return window
    return CanonTimeWindow(
        start=decimal_to_time(window.start_hours + start_adjust),
        end=decimal_to_time(window.end_hours + end_adjust),
    )


def modulate_baseline_window(window: BaselineWindow, fragility: FragilityLevel) -> BaselineWindow:
    """Same offsets on an absolute window, without minute rounding."""
    start_adjust, end_adjust = edge_adjustments(window.mode, fragility)
    return replace(
        window,
        start=window.start + timedelta(hours=start_adjust),
        end=window.end + timedelta(hours=end_adjust),
    )
