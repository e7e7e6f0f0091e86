"""
Interval subtraction: free time left in a window after removing busy time.

Sweep-line over merged busy intervals:
1. Put every timestamp on the window's clock
2. Keep blocks strictly overlapping the window (touching edges do not count)
3. Sort by start, merge overlapping or adjacent blocks
4. Emit the gaps between window start, merged blocks and window end

Clocks:
- Naive window: aware blocks become naive local wall time
- Aware window: naive blocks take the window's zone; the sweep runs in UTC
  so DST transitions inside the window keep their real length
"""

from collections.abc import Iterable
from datetime import datetime, timezone, tzinfo
from typing import Protocol

from align.types import TimeSegment


class Interval(Protocol):
    start: datetime
    end: datetime


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """Strict overlap. a_end == b_start is not an overlap."""
    return a_start < b_end and b_start < a_end


def to_window_clock(value: datetime, zone: tzinfo | None) -> datetime:
    """
    Express `value` on the clock of a window whose tzinfo is `zone`.

    Returns naive local time for naive windows, UTC for aware windows.
    """
    if zone is None:
        if value.tzinfo is None:
            return value
        return value.astimezone().replace(tzinfo=None)
    if value.tzinfo is None:
        value = value.replace(tzinfo=zone)
    return value.astimezone(timezone.utc)


def merge_intervals(intervals: Iterable[Interval]) -> list[tuple[datetime, datetime]]:
    """
    Coalesce intervals that overlap or touch.

    Returns (start, end) pairs in chronological order.
    """
    merged: list[list[datetime]] = []
    for interval in sorted(intervals, key=lambda i: i.start):
        if merged and interval.start <= merged[-1][1]:
            merged[-1][1] = max(merged[-1][1], interval.end)
        else:
            merged.append([interval.start, interval.end])
    return [(start, end) for start, end in merged]


def subtract(window: Interval, busy_blocks: Iterable[Interval]) -> list[TimeSegment]:
    """
    Subtract busy blocks from a window.

    Args:
        window: Anything with start/end datetimes
        busy_blocks: Anything with start/end datetimes, naive or aware

    Returns:
        Free segments in chronological order (possibly empty), in the
        window's own tzinfo
    """
    zone = window.start.tzinfo
    start = to_window_clock(window.start, zone)
    end = to_window_clock(window.end, zone)

    overlapping = []
    for block in busy_blocks:
        busy = TimeSegment(
            start=to_window_clock(block.start, zone),
            end=to_window_clock(block.end, zone),
        )
        if overlaps(busy.start, busy.end, start, end):
            overlapping.append(busy)

    if not overlapping:
        return [TimeSegment(start=window.start, end=window.end)]

    segments: list[TimeSegment] = []
    cursor = start

    for busy_start, busy_end in merge_intervals(overlapping):
        if cursor < busy_start:
            segments.append(_segment(cursor, busy_start, zone))
        cursor = max(cursor, busy_end)

    if cursor < end:
        segments.append(_segment(cursor, end, zone))

    return segments


def _segment(start: datetime, end: datetime, zone: tzinfo | None) -> TimeSegment:
    if zone is None:
        return TimeSegment(start=start, end=end)
    return TimeSegment(start=start.astimezone(zone), end=end.astimezone(zone))
