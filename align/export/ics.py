"""
ICS export of a day's governance decisions.

- PERMIT: one event "Align — MODE"
- FRAGMENTED: one event per segment "Align — MODE (Segment)"
- SILENCE: no event

Times are written as floating local times (YYYYMMDDTHHMMSS) taken from
each segment's own wall clock.
"""

import uuid
from collections.abc import Iterable
from datetime import date, datetime

from align.canon.modes_copy import MODES_COPY
from align.types import Mode, ModeGovernanceDecision, TimeSegment, Verdict

MAX_LINE_LENGTH = 75
CRLF = "\r\n"
STATUS_LINE = "Status: Structurally reliable."
SEGMENT_NOTE = "This is a segment. The baseline window is split by unavailable time(s)."
FOOTER_NOTE = "Align does not schedule for you. Importing is optional."


def format_ics_datetime(value: datetime) -> str:
    return value.strftime("%Y%m%dT%H%M%S")


def escape_ics_text(text: str) -> str:
    return (
        text.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\n", "\\n")
    )


def fold_line(line: str) -> str:
    """Fold to 75 chars; continuation lines start with one space."""
    if len(line) <= MAX_LINE_LENGTH:
        return line
    parts = [line[:MAX_LINE_LENGTH]]
    remaining = line[MAX_LINE_LENGTH:]
    while remaining:
        parts.append(" " + remaining[: MAX_LINE_LENGTH - 1])
        remaining = remaining[MAX_LINE_LENGTH - 1 :]
    return CRLF.join(parts)


def _uid() -> str:
    return f"{uuid.uuid4().hex}@align"


def segment_vevent(mode: Mode, segment: TimeSegment, is_fragmented: bool, dtstamp: str) -> str:
    copy = MODES_COPY[mode]
    title = f"Align — {mode.value} (Segment)" if is_fragmented else f"Align — {mode.value}"

    description_parts = [copy.definition, "", "Examples:"]
    description_parts += [f"- {example}" for example in copy.examples[:6]]
    description_parts += ["", STATUS_LINE]
    if is_fragmented:
        description_parts += ["", SEGMENT_NOTE]
    description_parts += ["", FOOTER_NOTE]
    description = escape_ics_text("\n".join(description_parts))

    lines = [
        "BEGIN:VEVENT",
        f"UID:{_uid()}",
        f"DTSTAMP:{dtstamp}",
        f"DTSTART:{format_ics_datetime(segment.start)}",
        f"DTEND:{format_ics_datetime(segment.end)}",
        fold_line(f"SUMMARY:{escape_ics_text(title)}"),
        fold_line(f"DESCRIPTION:{description}"),
        "END:VEVENT",
    ]
    return CRLF.join(lines)


def generate_ics(
    decisions: Iterable[ModeGovernanceDecision],
    day: date | str,
    now: datetime | None = None,
) -> str:
    """
    Build an ICS calendar for a day's decisions.

    Args:
        decisions: Output of evaluate_day
        day: The evaluated day (used in the calendar name)
        now: Override for DTSTAMP

    Returns:
        ICS text with CRLF line endings
    """
    dtstamp = format_ics_datetime(now or datetime.now())
    day_str = day.isoformat() if isinstance(day, date) else day

    events = []
    for decision in decisions:
        if decision.decision is Verdict.PERMIT and decision.window is not None:
            events.append(segment_vevent(decision.mode, decision.window, False, dtstamp))
        elif decision.decision is Verdict.FRAGMENTED and decision.segments:
            for segment in decision.segments:
                events.append(segment_vevent(decision.mode, segment, True, dtstamp))

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//Align//Align MVP//EN",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        f"X-WR-CALNAME:Align {day_str}",
        *events,
        "END:VCALENDAR",
    ]
    return CRLF.join(lines) + CRLF
