"""
Display helpers for canon times past 24:00.
"""

from align.types import CanonTimeWindow, decimal_to_time, parse_time_to_decimal


def normalize_time_for_display(time: str) -> tuple[str, bool]:
    """
    Fold a canon time into a 24h clock.

    Returns (time, is_next_day): "24:30" -> ("00:30", True).
    """
    decimal = parse_time_to_decimal(time)
    if decimal >= 24:
        return decimal_to_time(decimal % 24), True
    return time, False


def format_window_for_display(window: CanonTimeWindow) -> str:
    """CanonTimeWindow("22:00", "24:30") -> "22:00–00:30"."""
    start, _ = normalize_time_for_display(window.start)
    end, _ = normalize_time_for_display(window.end)
    return f"{start}–{end}"
