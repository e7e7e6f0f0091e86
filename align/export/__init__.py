"""
Export Module

Calendar (ICS) rendering of governance decisions.
"""

from .ics import escape_ics_text, fold_line, format_ics_datetime, generate_ics

__all__ = [
    "generate_ics",
    "escape_ics_text",
    "fold_line",
    "format_ics_datetime",
]
