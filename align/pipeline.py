"""
Day pipeline - baseline generation followed by governance.

profile + day -> baseline windows -> (busy blocks) -> governor -> decisions

Pure apart from computed_at/exported_at timestamps. Callers own caching.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Any

from align.baseline.windows import generate_baseline_windows, parse_day
from align.governor.evaluate import evaluate_day
from align.observability.context import EvaluationContext
from align.types import (
    BaselineWindow,
    BusyBlock,
    ChronotypeProfile,
    Mode,
    ModeGovernanceDecision,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayPlan:
    day: date
    baseline_windows: list[BaselineWindow]
    decisions: list[ModeGovernanceDecision]

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.day.isoformat(),
            "windows": [w.to_dict() for w in self.baseline_windows],
            "decisions": [d.to_dict() for d in self.decisions],
        }


def plan_day(
    profile: ChronotypeProfile | None,
    day: date | str,
    busy_blocks: Iterable[BusyBlock] = (),
    tz: str | tzinfo | None = None,
    now: datetime | None = None,
    thresholds: Mapping[Mode, int] | None = None,
) -> DayPlan:
    """
    Generate baseline windows and evaluate every mode for one day.

    busy_blocks are passed through unfiltered; the governor only looks at
    the ones overlapping each candidate window.
    thresholds overrides the per-mode minimum durations.
    """
    base_day = parse_day(day)
    blocks = list(busy_blocks)

    with EvaluationContext(day=base_day.isoformat()):
        windows = generate_baseline_windows(profile, base_day, tz=tz)
        decisions = evaluate_day(
            profile, blocks, windows, day=base_day.isoformat(), now=now, thresholds=thresholds
        )
    return DayPlan(day=base_day, baseline_windows=windows, decisions=decisions)


def plan_range(
    profile: ChronotypeProfile | None,
    start_day: date | str,
    days: int,
    busy_blocks: Iterable[BusyBlock] = (),
    tz: str | tzinfo | None = None,
    now: datetime | None = None,
    thresholds: Mapping[Mode, int] | None = None,
) -> list[DayPlan]:
    """Plan `days` consecutive days starting at start_day."""
    first = parse_day(start_day)
    blocks = list(busy_blocks)
    plans = []
    with EvaluationContext():
        for offset in range(days):
            day = first + timedelta(days=offset)
            plans.append(plan_day(profile, day, blocks, tz=tz, now=now, thresholds=thresholds))
    return plans


def build_export(
    profile: ChronotypeProfile | None,
    busy_blocks: Iterable[BusyBlock],
    days: Iterable[date | str],
    tz: str | tzinfo | None = None,
    now: datetime | None = None,
    thresholds: Mapping[Mode, int] | None = None,
) -> dict[str, Any]:
    """
    JSON-ready snapshot of inputs and per-day outputs.

    Shape:
        {exported_at, chronotype_profile, busy_blocks,
         baseline_windows: {day: [...]}, governor_decisions: {day: [...]}}
    """
    blocks = list(busy_blocks)
    exported_at = (now or datetime.now(timezone.utc)).isoformat()

    baseline: dict[str, list[dict]] = {}
    decisions: dict[str, list[dict]] = {}
    with EvaluationContext():
        for day in days:
            plan = plan_day(profile, day, blocks, tz=tz, now=now, thresholds=thresholds)
            key = plan.day.isoformat()
            baseline[key] = [w.to_dict() for w in plan.baseline_windows]
            decisions[key] = [d.to_dict() for d in plan.decisions]

    logger.info("Built export for %d day(s)", len(decisions))
    return {
        "exported_at": exported_at,
        "chronotype_profile": profile.to_dict() if profile else None,
        "busy_blocks": [b.to_dict() for b in blocks],
        "baseline_windows": baseline,
        "governor_decisions": decisions,
    }
