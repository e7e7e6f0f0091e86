"""
Tests for the busy block boundary (validation, normalization, day helpers).
"""

from datetime import date, datetime, timezone

import pytest

from align.calendar import (
    blocks_for_date,
    format_duration,
    normalize_busy_block,
    normalize_busy_blocks,
    parse_busy_block,
    total_busy_minutes,
    validate_busy_block,
)
from align.errors import AlignError, BusyBlockValidationError
from align.types import BusyBlock, BusySource
from conftest import TEST_DATE, at, make_busy


def raw_block(**overrides):
    data = {
        "start": "2024-01-15T09:00:00",
        "end": "2024-01-15T10:00:00",
        "allDay": False,
        "source": "manual",
    }
    data.update(overrides)
    return data


class TestValidation:
    def test_valid_block(self):
        result = validate_busy_block(raw_block())
        assert result.ok is True
        assert result.error is None

    def test_snake_case_all_day_accepted(self):
        data = raw_block()
        del data["allDay"]
        data["all_day"] = True
        assert parse_busy_block(data).all_day is True

    @pytest.mark.parametrize("source", ["manual", "google", "microsoft"])
    def test_known_sources(self, source):
        assert parse_busy_block(raw_block(source=source)).source is BusySource(source)

    def test_unknown_source_rejected(self):
        result = validate_busy_block(raw_block(source="outlook"))
        assert result.ok is False
        assert "source" in result.error

    def test_end_before_start_rejected(self):
        result = validate_busy_block(raw_block(end="2024-01-15T08:00:00"))
        assert result.ok is False
        assert "End must be after start" in result.error

    def test_zero_length_rejected(self):
        result = validate_busy_block(raw_block(end="2024-01-15T09:00:00"))
        assert result.ok is False

    def test_missing_start_rejected(self):
        data = raw_block()
        del data["start"]
        result = validate_busy_block(data)
        assert result.ok is False
        assert result.error.startswith("start")

    def test_unparseable_date_rejected(self):
        assert validate_busy_block(raw_block(start="next tuesday")).ok is False

    def test_non_boolean_all_day_rejected(self):
        assert validate_busy_block(raw_block(allDay="yes")).ok is False

    @pytest.mark.parametrize("field", ["title", "attendees", "location", "description"])
    def test_content_fields_rejected(self, field):
        result = validate_busy_block(raw_block(**{field: "Quarterly review"}))
        assert result.ok is False
        assert field in result.error

    def test_empty_id_rejected(self):
        assert validate_busy_block(raw_block(id="")).ok is False

    def test_id_kept(self):
        assert parse_busy_block(raw_block(id="evt-1")).id == "evt-1"

    def test_non_object_rejected(self):
        result = validate_busy_block(["2024-01-15T09:00:00", "2024-01-15T10:00:00"])
        assert result == result.__class__(ok=False, error="Block must be an object")

    def test_mixed_naive_and_aware_rejected(self):
        result = validate_busy_block(raw_block(end="2024-01-15T10:00:00+00:00"))
        assert result.ok is False
        assert "timezone" in result.error

    def test_epoch_seconds_accepted(self):
        block = parse_busy_block(raw_block(start=1705309200, end=1705312800))
        assert block.start == datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc)
        assert block.duration_minutes == 60

    def test_datetime_objects_accepted(self):
        block = parse_busy_block(raw_block(start=at(9), end=at(10)))
        assert (block.start, block.end) == (at(9), at(10))


class TestParseBusyBlock:
    def test_raises_typed_error(self):
        with pytest.raises(BusyBlockValidationError) as excinfo:
            parse_busy_block(raw_block(source="fax"))
        assert excinfo.value.record["source"] == "fax"
        assert isinstance(excinfo.value, AlignError)
        assert isinstance(excinfo.value, ValueError)

    def test_busy_block_passes_through(self):
        block = make_busy(at(9), at(10))
        assert parse_busy_block(block) is block


class TestNormalize:
    def test_invalid_returns_none(self):
        assert normalize_busy_block(raw_block(end="2024-01-15T08:00:00")) is None

    def test_invalid_is_logged(self, caplog):
        with caplog.at_level("WARNING"):
            normalize_busy_block({"start": "x"})
        assert "Rejected busy block" in caplog.text

    def test_valid_returns_busy_block(self):
        block = normalize_busy_block(raw_block())
        assert block == BusyBlock(start=at(9), end=at(10), all_day=False, source=BusySource.MANUAL)

    def test_batch_drops_invalid(self):
        blocks = normalize_busy_blocks([raw_block(), raw_block(source="fax"), "junk"])
        assert len(blocks) == 1


class TestDayHelpers:
    def test_blocks_for_date_filters_and_sorts(self):
        blocks = [
            make_busy(at(14), at(15)),
            make_busy(at(9), at(10)),
            make_busy(datetime(2024, 1, 16, 9), datetime(2024, 1, 16, 10)),
            make_busy(datetime(2024, 1, 14, 23), at(0, 30)),
        ]
        selected = blocks_for_date(blocks, TEST_DATE)
        assert [b.start for b in selected] == [datetime(2024, 1, 14, 23), at(9), at(14)]

    def test_block_ending_at_midnight_excluded_from_next_day(self):
        blocks = [make_busy(at(23), datetime(2024, 1, 16, 0, 0))]
        assert blocks_for_date(blocks, date(2024, 1, 16)) == []

    def test_aware_blocks(self):
        block = make_busy(
            datetime(2024, 1, 15, 9, tzinfo=timezone.utc),
            datetime(2024, 1, 15, 10, tzinfo=timezone.utc),
        )
        assert blocks_for_date([block], TEST_DATE) == [block]

    def test_total_busy_minutes_floors_each_block(self):
        blocks = [
            make_busy(at(9), at(9, 45)),
            make_busy(at(10), at(10, 30).replace(second=59)),
        ]
        assert total_busy_minutes(blocks) == 75

    @pytest.mark.parametrize(
        "minutes,expected",
        [(0, "0m"), (45, "45m"), (120, "2h"), (210, "3h 30m"), (61, "1h 1m")],
    )
    def test_format_duration(self, minutes, expected):
        assert format_duration(minutes) == expected
