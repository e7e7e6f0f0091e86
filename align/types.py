"""
Core types for the Align governance engine.

Objects:
- ChronotypeProfile (opaque input from quiz scoring)
- CanonTimeWindow / ChronotypeTemplate (canon template table)
- BaselineWindow (absolute reliable window for one mode on one day)
- BusyBlock (unavailable time, timing only)
- TimeSegment (free time left after subtraction)
- ModeGovernanceDecision (one verdict per mode per day)

Invariants:
- BaselineWindow.end strictly follows BaselineWindow.start
- window is set only for PERMIT, segments only for FRAGMENTED
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class Chronotype(Enum):
    """Circadian timing categories."""

    AURORA = "AURORA"
    DAYBREAK = "DAYBREAK"
    MERIDIAN = "MERIDIAN"
    TWILIGHT = "TWILIGHT"
    NOCTURNE = "NOCTURNE"


class ConfidenceLevel(Enum):
    """Reliability of the chronotype determination."""

    HIGH = "HIGH"
    MED = "MED"
    LOW = "LOW"  # forces blanket silence


class Mode(Enum):
    """Cognitive modes, in canonical order."""

    FRAMING = "FRAMING"
    EVALUATION = "EVALUATION"
    SYNTHESIS = "SYNTHESIS"
    EXECUTION = "EXECUTION"
    REFLECTION = "REFLECTION"


ALL_MODES: tuple[Mode, ...] = tuple(Mode)


class Verdict(Enum):
    PERMIT = "PERMIT"
    FRAGMENTED = "FRAGMENTED"
    SILENCE = "SILENCE"


class Reliability(Enum):
    RELIABLE = "RELIABLE"
    FRAGILE = "FRAGILE"  # reserved, does not alter geometry


class FragilityLevel(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class BusySource(Enum):
    MANUAL = "manual"
    GOOGLE = "google"
    MICROSOFT = "microsoft"


# ============================================================
# Canon (time-of-day) types
# ============================================================


def parse_time_to_decimal(time: str) -> float:
    """
    Parse HH:MM to decimal hours.

    Accepts values past 24:00, e.g. "24:30" -> 24.5.
    """
    hours, minutes = time.split(":")
    return int(hours) + int(minutes) / 60


def decimal_to_time(decimal: float) -> str:
    """
    Convert decimal hours to HH:MM, keeping values past 24:00.

    Minutes are rounded half-up, so 7.5 minutes becomes 8.
    """
    total_minutes = math.floor(decimal * 60 + 0.5)
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours:02d}:{minutes:02d}"


@dataclass(frozen=True)
class CanonTimeWindow:
    """Clock-time window. start/end may exceed 24:00 to mean the next day."""

    start: str
    end: str

    def __post_init__(self):
        if self.end_hours <= self.start_hours:
            raise ValueError(f"Canon window end must follow start: {self.start}-{self.end}")

    @property
    def start_hours(self) -> float:
        return parse_time_to_decimal(self.start)

    @property
    def end_hours(self) -> float:
        return parse_time_to_decimal(self.end)

    @property
    def duration_minutes(self) -> int:
        return round((self.end_hours - self.start_hours) * 60)

    @property
    def crosses_midnight(self) -> bool:
        return self.end_hours > 24

    def to_dict(self) -> dict[str, str]:
        return {"start": self.start, "end": self.end}


ModeTemplate = tuple[CanonTimeWindow, ...]


@dataclass(frozen=True)
class ChronotypeTemplate:
    chronotype: Chronotype
    typical_wake: str
    sleep_inertia_ends: str
    post_lunch_dip: CanonTimeWindow
    modes: Mapping[Mode, ModeTemplate]

    def to_dict(self) -> dict[str, Any]:
        return {
            "chronotype": self.chronotype.value,
            "typical_wake": self.typical_wake,
            "sleep_inertia_ends": self.sleep_inertia_ends,
            "post_lunch_dip": self.post_lunch_dip.to_dict(),
            "modes": {
                mode.value: [w.to_dict() for w in self.modes[mode]] for mode in ALL_MODES
            },
        }


# ============================================================
# Absolute-time types
# ============================================================


def elapsed_minutes(start: datetime, end: datetime) -> float:
    """Real elapsed minutes. Aware values are measured in UTC, so DST shifts count."""
    if start.tzinfo is not None and end.tzinfo is not None:
        start, end = start.astimezone(timezone.utc), end.astimezone(timezone.utc)
    return (end - start).total_seconds() / 60


@dataclass(frozen=True)
class ChronotypeProfile:
    chronotype: Chronotype
    confidence: ConfidenceLevel
    computed_at: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "chronotype": self.chronotype.value,
            "confidence": self.confidence.value,
            "computed_at": self.computed_at,
        }


@dataclass(frozen=True)
class TimeSegment:
    start: datetime
    end: datetime

    @property
    def duration_minutes(self) -> float:
        return elapsed_minutes(self.start, self.end)

    def to_dict(self) -> dict[str, str]:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}


@dataclass(frozen=True)
class BaselineWindow:
    start: datetime
    end: datetime
    mode: Mode
    reliability: Reliability = Reliability.RELIABLE
    source: str = "baseline"

    def __post_init__(self):
        if self.end <= self.start:
            raise ValueError(f"Baseline window end must follow start for {self.mode.value}")

    @property
    def duration_minutes(self) -> float:
        return elapsed_minutes(self.start, self.end)

    def to_dict(self) -> dict[str, str]:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "mode": self.mode.value,
            "reliability": self.reliability.value,
            "source": self.source,
        }


@dataclass(frozen=True)
class BusyBlock:
    """Unavailable time. Only start/end matter to the engine."""

    start: datetime
    end: datetime
    all_day: bool = False
    source: BusySource = BusySource.MANUAL
    id: str | None = None

    def __post_init__(self):
        if self.end <= self.start:
            raise ValueError("Busy block end must follow start")

    @property
    def duration_minutes(self) -> int:
        return math.floor(elapsed_minutes(self.start, self.end))

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "all_day": self.all_day,
            "source": self.source.value,
        }
        if self.id is not None:
            data["id"] = self.id
        return data


@dataclass(frozen=True)
class ModeGovernanceDecision:
    mode: Mode
    decision: Verdict
    reason: str
    computed_at: str
    window: TimeSegment | None = None
    segments: tuple[TimeSegment, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "mode": self.mode.value,
            "decision": self.decision.value,
            "reason": self.reason,
        }
        if self.window is not None:
            data["window"] = self.window.to_dict()
        if self.segments is not None:
            data["segments"] = [s.to_dict() for s in self.segments]
        data["computed_at"] = self.computed_at
        return data
