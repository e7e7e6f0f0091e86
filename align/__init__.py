# Align - Governance Engine
"""
Exports for the API, CLI and other consumers.
"""

from .baseline import apply_fragility_modulation, generate_baseline_windows
from .canon import has_split_windows, primary_window, templates_for
from .governor import evaluate_day, subtract
from .pipeline import DayPlan, build_export, plan_day, plan_range
from .types import (
    BaselineWindow,
    BusyBlock,
    Chronotype,
    ChronotypeProfile,
    ConfidenceLevel,
    FragilityLevel,
    Mode,
    ModeGovernanceDecision,
    TimeSegment,
    Verdict,
)

__all__ = [
    "templates_for",
    "primary_window",
    "has_split_windows",
    "generate_baseline_windows",
    "apply_fragility_modulation",
    "subtract",
    "evaluate_day",
    "plan_day",
    "plan_range",
    "build_export",
    "DayPlan",
    "Chronotype",
    "ConfidenceLevel",
    "Mode",
    "Verdict",
    "FragilityLevel",
    "ChronotypeProfile",
    "BaselineWindow",
    "BusyBlock",
    "TimeSegment",
    "ModeGovernanceDecision",
]
