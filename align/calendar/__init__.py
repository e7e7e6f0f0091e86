"""
Calendar Module

Boundary handling for busy blocks supplied by storage or HTTP callers.
"""

from .busy_blocks import (
    BusyBlockRecord,
    ValidationResult,
    blocks_for_date,
    format_duration,
    normalize_busy_block,
    normalize_busy_blocks,
    parse_busy_block,
    total_busy_minutes,
    validate_busy_block,
)

__all__ = [
    "BusyBlockRecord",
    "ValidationResult",
    "validate_busy_block",
    "parse_busy_block",
    "normalize_busy_block",
    "normalize_busy_blocks",
    "blocks_for_date",
    "total_busy_minutes",
    "format_duration",
]
