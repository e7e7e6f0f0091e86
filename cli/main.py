#!/usr/bin/env python3
"""
Align CLI - per-mode governance verdicts from the terminal.
Deterministic. No scheduling, no advice.
"""

import sys

from align import config
from align.baseline.windows import (
    generate_baseline_windows,
    parse_day,
    resolve_canon_time,
    resolve_tz,
)
from align.calendar.busy_blocks import blocks_for_date, format_duration, total_busy_minutes
from align.canon import (
    CANON_VERSION,
    format_window_for_display,
    has_split_windows,
    templates_for,
)
from align.export.ics import generate_ics
from align.governor.thresholds import ThresholdConfigError, load_thresholds
from align.observability import configure_logging
from align.pipeline import plan_day
from align.types import (
    ALL_MODES,
    BusyBlock,
    BusySource,
    Chronotype,
    ChronotypeProfile,
    ConfidenceLevel,
    Verdict,
)

VERDICT_ICONS = {
    Verdict.PERMIT: "✓",
    Verdict.FRAGMENTED: "◐",
    Verdict.SILENCE: "·",
}


class UsageError(Exception):
    """Bad command-line arguments."""


def print_header(text: str):
    """Print a section header."""
    print(f"\n{'═' * 50}")
    print(f"  {text}")
    print(f"{'═' * 50}")


def print_table(headers: list, rows: list, widths: list = None):
    """Print a simple table."""
    if not widths:
        widths = [
            max(len(str(row[i])) for row in [headers] + rows)
            for i in range(len(headers))
        ]

    header_str = " │ ".join(str(h).ljust(w) for h, w in zip(headers, widths))
    print(header_str)
    print("─" * len(header_str))

    for row in rows:
        print(" │ ".join(str(c)[:w].ljust(w) for c, w in zip(row, widths)))


def hhmm(value) -> str:
    return value.strftime("%H:%M")


def parse_chronotype(value: str) -> Chronotype:
    try:
        return Chronotype(value.upper())
    except ValueError:
        names = ", ".join(c.value for c in Chronotype)
        raise UsageError(f"Unknown chronotype: {value} (expected one of {names})") from None


def parse_profile(args: list) -> ChronotypeProfile:
    if len(args) < 2:
        raise UsageError("Missing <CHRONOTYPE> <CONFIDENCE>")
    try:
        confidence = ConfidenceLevel(args[1].upper())
    except ValueError:
        raise UsageError(f"Unknown confidence: {args[1]} (expected HIGH, MED or LOW)") from None
    return ChronotypeProfile(chronotype=parse_chronotype(args[0]), confidence=confidence)


def parse_busy_ranges(day, ranges: list) -> list[BusyBlock]:
    """Parse "HH:MM-HH:MM" ranges on `day`. Times past 24:00 mean the next day."""
    zone = resolve_tz(config.TIMEZONE)
    blocks = []
    for item in ranges:
        try:
            start_str, end_str = item.split("-")
            start = resolve_canon_time(day, start_str, zone)
            end = resolve_canon_time(day, end_str, zone)
        except ValueError:
            raise UsageError(f"Bad busy range: {item} (use HH:MM-HH:MM)") from None
        if end <= start:
            raise UsageError(f"Busy range must end after it starts: {item}")
        blocks.append(BusyBlock(start=start, end=end, all_day=False, source=BusySource.MANUAL))
    return blocks


def parse_day_args(args: list):
    """<CHRONOTYPE> <CONFIDENCE> <YYYY-MM-DD> [HH:MM-HH:MM ...]"""
    profile = parse_profile(args)
    if len(args) < 3:
        raise UsageError("Missing <YYYY-MM-DD>")
    try:
        day = parse_day(args[2])
    except ValueError as e:
        raise UsageError(str(e)) from None
    return profile, day, parse_busy_ranges(day, args[3:])


# ============================================================
# Commands
# ============================================================


def cmd_canon(args):
    """Show the canon template for a chronotype."""
    if not args:
        raise UsageError("Usage: canon <CHRONOTYPE>")

    template = templates_for(parse_chronotype(args[0]))
    print_header(f"CANON v{CANON_VERSION}: {template.chronotype.value}")
    print(f"  Typical wake: {template.typical_wake}")
    print(f"  Sleep inertia ends: {template.sleep_inertia_ends}")
    print(f"  Post-lunch dip: {format_window_for_display(template.post_lunch_dip)}\n")

    rows = []
    for mode in ALL_MODES:
        windows = ", ".join(format_window_for_display(w) for w in template.modes[mode])
        split = "split" if has_split_windows(template.chronotype, mode) else ""
        rows.append([mode.value, windows, split])
    print_table(["Mode", "Windows", ""], rows, [10, 28, 5])


def cmd_baseline(args):
    """Show baseline windows for a day."""
    profile, day, _ = parse_day_args(args)
    windows = generate_baseline_windows(profile, day, tz=config.TIMEZONE)

    print_header(f"BASELINE: {profile.chronotype.value} {day.isoformat()}")
    if not windows:
        print("No baseline windows (confidence too low).")
        return

    rows = [
        [w.mode.value, w.start.strftime("%Y-%m-%d %H:%M"), w.end.strftime("%Y-%m-%d %H:%M")]
        for w in windows
    ]
    print_table(["Mode", "Start", "End"], rows, [10, 16, 16])


def cmd_evaluate(args):
    """Show per-mode verdicts for a day."""
    profile, day, blocks = parse_day_args(args)
    plan = plan_day(profile, day, blocks, tz=config.TIMEZONE, thresholds=load_thresholds())

    print_header(f"GOVERNOR: {profile.chronotype.value} {day.isoformat()}")
    busy = total_busy_minutes(blocks_for_date(blocks, day))
    print(f"  Unavailable today: {format_duration(busy)}\n")

    for decision in plan.decisions:
        icon = VERDICT_ICONS[decision.decision]
        print(f"{icon} {decision.mode.value:<11} {decision.decision.value:<11} {decision.reason}")
        if decision.window is not None:
            print(f"    {hhmm(decision.window.start)}–{hhmm(decision.window.end)}")
        for segment in decision.segments or ():
            print(f"    {hhmm(segment.start)}–{hhmm(segment.end)}")


def cmd_ics(args):
    """Print an ICS calendar of the day's verdicts."""
    profile, day, blocks = parse_day_args(args)
    plan = plan_day(profile, day, blocks, tz=config.TIMEZONE, thresholds=load_thresholds())
    sys.stdout.write(generate_ics(plan.decisions, day))


def cmd_help(args):
    """Show help."""
    print("""
ALIGN CLI

COMMANDS:
  canon <CHRONOTYPE>                           Show canon windows
  baseline <CHRONOTYPE> <CONF> <DATE>          Show baseline windows for a day
  evaluate <CHRONOTYPE> <CONF> <DATE> [BUSY]   Show per-mode verdicts
  ics <CHRONOTYPE> <CONF> <DATE> [BUSY]        Print verdicts as ICS
  help                                         Show this help

ARGUMENTS:
  CHRONOTYPE   AURORA, DAYBREAK, MERIDIAN, TWILIGHT, NOCTURNE
  CONF         HIGH, MED, LOW
  DATE         YYYY-MM-DD
  BUSY         HH:MM-HH:MM ranges on DATE (times past 24:00 mean next day)
""")


COMMANDS = {
    "canon": cmd_canon,
    "baseline": cmd_baseline,
    "b": cmd_baseline,
    "evaluate": cmd_evaluate,
    "e": cmd_evaluate,
    "ics": cmd_ics,
    "help": cmd_help,
    "h": cmd_help,
}


def main(argv: list = None) -> int:
    """Main entry point."""
    argv = sys.argv[1:] if argv is None else argv
    configure_logging(config.LOG_LEVEL, config.LOG_JSON)

    if not argv:
        cmd_help([])
        return 0

    cmd, args = argv[0], argv[1:]
    if cmd not in COMMANDS:
        print(f"Unknown command: {cmd}")
        print("Run 'help' for available commands.")
        return 2

    try:
        COMMANDS[cmd](args)
    except UsageError as e:
        print(f"Error: {e}")
        return 2
    except ThresholdConfigError as e:
        print(f"Config error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
