"""
Busy block boundary - validation and normalization of stored records.

Structure only: a busy block carries start, end, all-day flag and source.
Titles, descriptions, attendees and locations are rejected.

Accepted start/end forms: datetime, ISO-8601 string, epoch number
(seconds, or milliseconds for large values, as pydantic interprets them).
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError, model_validator

from align.errors import BusyBlockValidationError
from align.types import BusyBlock, BusySource

logger = logging.getLogger(__name__)


class BusyBlockRecord(BaseModel):
    """Wire/storage shape of a busy block."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: str | None = Field(default=None, min_length=1)
    start: datetime
    end: datetime
    all_day: StrictBool = Field(alias="allDay")
    source: Literal["manual", "google", "microsoft"]

    @model_validator(mode="after")
    def _end_after_start(self) -> "BusyBlockRecord":
        if (self.start.tzinfo is None) != (self.end.tzinfo is None):
            raise ValueError("Start and end must both carry a timezone, or neither")
        if self.end <= self.start:
            raise ValueError("End must be after start")
        return self

    def to_busy_block(self) -> BusyBlock:
        return BusyBlock(
            start=self.start,
            end=self.end,
            all_day=self.all_day,
            source=BusySource(self.source),
            id=self.id,
        )


@dataclass
class ValidationResult:
    ok: bool
    error: str | None = None


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(part) for part in err.get("loc", ()))
    msg = err.get("msg", "invalid")
    return f"{loc}: {msg}" if loc else msg


def parse_busy_block(raw: Any) -> BusyBlock:
    """
    Validate and convert a raw record.

    Raises:
        BusyBlockValidationError: with the first validation message
    """
    if isinstance(raw, BusyBlock):
        return raw
    if not isinstance(raw, dict):
        raise BusyBlockValidationError("Block must be an object", record=raw)
    try:
        return BusyBlockRecord.model_validate(raw).to_busy_block()
    except ValidationError as e:
        raise BusyBlockValidationError(_first_error(e), record=raw) from e


def validate_busy_block(raw: Any) -> ValidationResult:
    try:
        parse_busy_block(raw)
    except BusyBlockValidationError as e:
        return ValidationResult(ok=False, error=e.message)
    return ValidationResult(ok=True)


def normalize_busy_block(raw: Any) -> BusyBlock | None:
    """Convert a raw record, or None if it is invalid."""
    try:
        return parse_busy_block(raw)
    except BusyBlockValidationError as e:
        logger.warning("Rejected busy block: %s", e.message)
        return None


def normalize_busy_blocks(raws: list[Any]) -> list[BusyBlock]:
    """Convert records, dropping the invalid ones."""
    blocks = []
    for raw in raws:
        block = normalize_busy_block(raw)
        if block is not None:
            blocks.append(block)
    return blocks


def blocks_for_date(blocks: list[BusyBlock], day: date) -> list[BusyBlock]:
    """
    Blocks overlapping [day 00:00, day+1 00:00), sorted by start.

    Day bounds take the tzinfo of each block, so naive and aware blocks
    are both compared on their own terms.
    """
    selected = []
    for block in blocks:
        day_start = datetime.combine(day, time.min, tzinfo=block.start.tzinfo)
        day_end = day_start + timedelta(days=1)
        if block.start < day_end and block.end > day_start:
            selected.append(block)
    return sorted(selected, key=lambda b: b.start)


def total_busy_minutes(blocks: list[BusyBlock]) -> int:
    """Sum of block durations, each floored to whole minutes."""
    return sum(block.duration_minutes for block in blocks)


def format_duration(minutes: int) -> str:
    """Format minutes as "0m", "45m", "2h" or "3h 30m"."""
    if minutes == 0:
        return "0m"
    hours, mins = divmod(minutes, 60)
    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"
