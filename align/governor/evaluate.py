"""
Governor - per-mode verdicts for one day.

Rules:
1) SILENCE for every mode if the profile is missing, confidence is LOW,
   or the day has no baseline windows
2) Per mode, take the RELIABLE windows; none -> SILENCE
3) Candidate = earliest start (ties keep input order)
4) Subtract busy blocks, drop segments shorter than the mode minimum
5) 0 segments -> SILENCE, 1 -> PERMIT, 2+ -> FRAGMENTED

Always returns exactly one decision per mode, in canonical mode order.
"""

import logging
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime, timezone

from align.governor.reasons import REASONS
from align.governor.subtraction import Interval, subtract
from align.governor.thresholds import MIN_DURATION_MINUTES
from align.types import (
    ALL_MODES,
    BaselineWindow,
    ChronotypeProfile,
    ConfidenceLevel,
    Mode,
    ModeGovernanceDecision,
    Reliability,
    TimeSegment,
    Verdict,
)

logger = logging.getLogger(__name__)


def _silence(mode: Mode, computed_at: str) -> ModeGovernanceDecision:
    return ModeGovernanceDecision(
        mode=mode,
        decision=Verdict.SILENCE,
        reason=REASONS[Verdict.SILENCE],
        computed_at=computed_at,
    )


def select_candidate(
    mode: Mode, baseline_windows: Iterable[BaselineWindow]
) -> BaselineWindow | None:
    """
    Earliest-starting RELIABLE window for a mode.

    sorted() is stable, so equal starts resolve to the first in input order,
    which for generated windows is template declaration order.
    """
    reliable = [
        w for w in baseline_windows if w.mode is mode and w.reliability is Reliability.RELIABLE
    ]
    if not reliable:
        return None
    return sorted(reliable, key=lambda w: w.start)[0]


def classify(
    mode: Mode, segments: Sequence[TimeSegment], computed_at: str
) -> ModeGovernanceDecision:
    """Map valid (already filtered) segments to a verdict."""
    if not segments:
        return _silence(mode, computed_at)

    if len(segments) == 1:
        return ModeGovernanceDecision(
            mode=mode,
            decision=Verdict.PERMIT,
            reason=REASONS[Verdict.PERMIT],
            computed_at=computed_at,
            window=segments[0],
        )

    return ModeGovernanceDecision(
        mode=mode,
        decision=Verdict.FRAGMENTED,
        reason=REASONS[Verdict.FRAGMENTED],
        computed_at=computed_at,
        segments=tuple(segments),
    )


def evaluate_mode(
    mode: Mode,
    baseline_windows: Sequence[BaselineWindow],
    busy_blocks: Sequence[Interval],
    computed_at: str,
    thresholds: Mapping[Mode, int] = MIN_DURATION_MINUTES,
) -> ModeGovernanceDecision:
    candidate = select_candidate(mode, baseline_windows)
    if candidate is None:
        return _silence(mode, computed_at)

    minimum = thresholds[mode]
    segments = [s for s in subtract(candidate, busy_blocks) if s.duration_minutes >= minimum]
    return classify(mode, segments, computed_at)


def evaluate_day(
    profile: ChronotypeProfile | None,
    busy_blocks: Iterable[Interval],
    baseline_windows: Iterable[BaselineWindow],
    day: date | str | None = None,
    now: datetime | None = None,
    thresholds: Mapping[Mode, int] | None = None,
) -> list[ModeGovernanceDecision]:
    """
    Evaluate governance decisions for a day.

    Args:
        profile: Chronotype profile, or None
        busy_blocks: Unavailable intervals, already resolved for the day
        baseline_windows: Output of generate_baseline_windows
        day: Target day, informational (used in logs)
        now: Override for computed_at; wall clock if omitted
        thresholds: Per-mode minimum minutes; MIN_DURATION_MINUTES if omitted

    Returns:
        Five ModeGovernanceDecision, one per mode in canonical order
    """
    computed_at = (now or datetime.now(timezone.utc)).isoformat()
    windows = list(baseline_windows)
    blocks = list(busy_blocks)
    minimums = MIN_DURATION_MINUTES if thresholds is None else thresholds

    if profile is None or profile.confidence is ConfidenceLevel.LOW or not windows:
        logger.debug("Entry guard tripped for %s; all modes silent", day)
        return [_silence(mode, computed_at) for mode in ALL_MODES]

    decisions = [evaluate_mode(mode, windows, blocks, computed_at, minimums) for mode in ALL_MODES]

    counts = Counter(d.decision.value for d in decisions)
    logger.info(
        "Evaluated %s: %d permit, %d fragmented, %d silence",
        day,
        counts["PERMIT"],
        counts["FRAGMENTED"],
        counts["SILENCE"],
        extra={"busy_blocks": len(blocks), "baseline_windows": len(windows)},
    )
    return decisions
