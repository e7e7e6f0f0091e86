"""
Test configuration: repo root on sys.path, plus shared factories.

This allows tests to import from top-level packages (align, api, cli).
"""

import sys
from datetime import date, datetime
from pathlib import Path

import pytest

# Add repo root to sys.path so tests can import align.*, api.*, cli.*
REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from align.types import (  # noqa: E402
    BaselineWindow,
    BusyBlock,
    BusySource,
    Chronotype,
    ChronotypeProfile,
    ConfidenceLevel,
    Mode,
)

TEST_DATE = date(2024, 1, 15)
FIXED_NOW = datetime(2024, 1, 15, 6, 0, 0)


def at(hour: int, minute: int = 0, day: date = TEST_DATE) -> datetime:
    """Naive local datetime on the test day."""
    return datetime(day.year, day.month, day.day, hour, minute)


def make_profile(
    confidence: ConfidenceLevel = ConfidenceLevel.HIGH,
    chronotype: Chronotype = Chronotype.MERIDIAN,
) -> ChronotypeProfile:
    return ChronotypeProfile(
        chronotype=chronotype,
        confidence=confidence,
        computed_at="2024-01-01T00:00:00+00:00",
    )


def make_window(mode: Mode, start: datetime, end: datetime) -> BaselineWindow:
    return BaselineWindow(start=start, end=end, mode=mode)


def make_busy(start: datetime, end: datetime) -> BusyBlock:
    return BusyBlock(start=start, end=end, all_day=False, source=BusySource.MANUAL)


@pytest.fixture
def profile():
    """HIGH-confidence MERIDIAN profile."""
    return make_profile()


@pytest.fixture
def governor_config(tmp_path, monkeypatch):
    """Empty config dir; tests write governor.yaml into it as needed."""
    monkeypatch.setenv("ALIGN_CONFIG_DIR", str(tmp_path))
    return tmp_path
