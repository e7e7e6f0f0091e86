"""
Baseline window generation (canon v5.0).

Expands a chronotype's canon templates into absolute windows for one
calendar day. Handles:
- Split windows (several windows for one mode)
- Midnight wraparound (canon times past 24:00)

Times >= 24:00 land on the following calendar day:
    22:00-24:30 on 2024-01-15 -> 2024-01-15 22:00 .. 2024-01-16 00:30
    25:00-27:00 on 2024-01-15 -> 2024-01-16 01:00 .. 2024-01-16 03:00

Silence-first: without a confident profile no windows are produced.
"""

import logging
from datetime import date, datetime, time, timedelta, tzinfo
from zoneinfo import ZoneInfo

from align.canon.templates import templates_for
from align.types import (
    ALL_MODES,
    BaselineWindow,
    CanonTimeWindow,
    ChronotypeProfile,
    ConfidenceLevel,
    Reliability,
)

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60


def parse_day(day: date | str) -> date:
    """Accept a date or a YYYY-MM-DD string."""
    if isinstance(day, datetime):
        return day.date()
    if isinstance(day, date):
        return day
    try:
        return date.fromisoformat(day)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid calendar date (use YYYY-MM-DD): {day!r}") from e


def resolve_tz(tz: str | tzinfo | None) -> tzinfo | None:
    if tz is None or isinstance(tz, tzinfo):
        return tz
    return ZoneInfo(tz)


def resolve_canon_time(base_day: date, canon_time: str, tz: tzinfo | None = None) -> datetime:
    """
    Resolve one canon clock time against a base day.

    The day offset is floor(minutes / 1440); the remainder is the time of day.
    """
    hours, minutes = canon_time.split(":")
    total_minutes = int(hours) * 60 + int(minutes)
    day_offset, minute_of_day = divmod(total_minutes, MINUTES_PER_DAY)
    resolved_day = base_day + timedelta(days=day_offset)
    clock = time(minute_of_day // 60, minute_of_day % 60)
    return datetime.combine(resolved_day, clock, tzinfo=tz)


def resolve_window(
    base_day: date, window: CanonTimeWindow, tz: tzinfo | None = None
) -> tuple[datetime, datetime]:
    return (
        resolve_canon_time(base_day, window.start, tz),
        resolve_canon_time(base_day, window.end, tz),
    )


def generate_baseline_windows(
    profile: ChronotypeProfile | None,
    day: date | str,
    tz: str | tzinfo | None = None,
) -> list[BaselineWindow]:
    """
    Generate baseline windows for a profile on a specific day.

    Returns [] when the profile is missing or its confidence is LOW.
    Output order is canonical mode order, then template declaration order,
    and depends only on (profile, day, tz).

    Args:
        profile: Chronotype profile, or None
        day: Target date (date or YYYY-MM-DD)
        tz: Optional IANA zone name or tzinfo; None yields naive local datetimes

    Returns:
        List of BaselineWindow
    """
    if profile is None:
        logger.debug("No chronotype profile; emitting no baseline windows")
        return []

    if profile.confidence is ConfidenceLevel.LOW:
        logger.debug("LOW confidence profile; emitting no baseline windows")
        return []

    base_day = parse_day(day)
    zone = resolve_tz(tz)
    template = templates_for(profile.chronotype)

    windows: list[BaselineWindow] = []
    for mode in ALL_MODES:
        for canon_window in template.modes[mode]:
            start, end = resolve_window(base_day, canon_window, zone)
            windows.append(
                BaselineWindow(
                    start=start,
                    end=end,
                    mode=mode,
                    reliability=Reliability.RELIABLE,
                    source="baseline",
                )
            )

    logger.debug(
        "Generated %d baseline windows for %s on %s",
        len(windows),
        profile.chronotype.value,
        base_day.isoformat(),
    )
    return windows
