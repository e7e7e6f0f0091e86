"""
Tests for the day pipeline (plan_day, plan_range, build_export).
"""

from datetime import date, datetime
from types import MappingProxyType

from align.calendar import normalize_busy_block
from align.governor import MIN_DURATION_MINUTES
from align.observability import EvaluationContext, get_evaluation_id
from align.pipeline import DayPlan, build_export, plan_day, plan_range
from align.types import ALL_MODES, Chronotype, ConfidenceLevel, Mode, Verdict
from conftest import FIXED_NOW, TEST_DATE, at, make_busy, make_profile


class TestPlanDay:
    def test_clean_day_permits_every_mode(self, profile):
        plan = plan_day(profile, TEST_DATE, now=FIXED_NOW)
        assert isinstance(plan, DayPlan)
        assert plan.day == TEST_DATE
        assert len(plan.baseline_windows) == 5
        assert [d.decision for d in plan.decisions] == [Verdict.PERMIT] * 5

    def test_busy_block_fragments_meridian_evaluation(self, profile):
        # MERIDIAN EVALUATION is 11:30-14:30
        plan = plan_day(profile, "2024-01-15", [make_busy(at(12, 30), at(13))], now=FIXED_NOW)
        evaluation = next(d for d in plan.decisions if d.mode is Mode.EVALUATION)
        assert evaluation.decision is Verdict.FRAGMENTED
        assert len(evaluation.segments) == 2

    def test_low_confidence_is_silent(self):
        plan = plan_day(make_profile(confidence=ConfidenceLevel.LOW), TEST_DATE, now=FIXED_NOW)
        assert plan.baseline_windows == []
        assert all(d.decision is Verdict.SILENCE for d in plan.decisions)

    def test_no_profile_is_silent(self):
        plan = plan_day(None, TEST_DATE, now=FIXED_NOW)
        assert [d.mode for d in plan.decisions] == list(ALL_MODES)
        assert all(d.decision is Verdict.SILENCE for d in plan.decisions)

    def test_next_day_block_reaches_wrapped_window(self):
        # NOCTURNE REFLECTION is 01:00-03:00 on the following day
        profile = make_profile(chronotype=Chronotype.NOCTURNE)
        block = make_busy(datetime(2024, 1, 16, 0, 30), datetime(2024, 1, 16, 3, 30))
        plan = plan_day(profile, TEST_DATE, [block], now=FIXED_NOW)
        reflection = next(d for d in plan.decisions if d.mode is Mode.REFLECTION)
        assert reflection.decision is Verdict.SILENCE

    def test_stored_utc_blocks_with_naive_windows(self, profile):
        block = normalize_busy_block(
            {
                "start": "2024-01-15T12:00:00.000Z",
                "end": "2024-01-15T13:00:00.000Z",
                "allDay": False,
                "source": "manual",
            }
        )
        plan = plan_day(profile, TEST_DATE, [block], now=FIXED_NOW)
        assert [d.mode for d in plan.decisions] == list(ALL_MODES)

    def test_stored_utc_blocks_in_export(self, profile):
        block = normalize_busy_block(
            {
                "start": "2024-01-15T12:00:00.000Z",
                "end": "2024-01-15T13:00:00.000Z",
                "allDay": False,
                "source": "google",
            }
        )
        export = build_export(profile, [block], [TEST_DATE], now=FIXED_NOW)
        assert len(export["governor_decisions"]["2024-01-15"]) == 5
        assert export["busy_blocks"][0]["start"] == "2024-01-15T12:00:00+00:00"

    def test_thresholds_passed_through(self, profile):
        thresholds = dict(MIN_DURATION_MINUTES)
        thresholds[Mode.REFLECTION] = 180
        plan = plan_day(profile, TEST_DATE, now=FIXED_NOW, thresholds=MappingProxyType(thresholds))
        reflection = next(d for d in plan.decisions if d.mode is Mode.REFLECTION)
        assert reflection.decision is Verdict.SILENCE

    def test_keeps_outer_evaluation_id(self, profile):
        with EvaluationContext(evaluation_id="eval-outer") as ctx:
            plan_day(profile, TEST_DATE, now=FIXED_NOW)
            assert get_evaluation_id() == ctx.evaluation_id
        assert get_evaluation_id() is None

    def test_to_dict_shape(self, profile):
        data = plan_day(profile, TEST_DATE, now=FIXED_NOW).to_dict()
        assert data["date"] == "2024-01-15"
        assert len(data["windows"]) == 5
        assert data["decisions"][0]["mode"] == "FRAMING"
        assert data["decisions"][0]["computed_at"] == FIXED_NOW.isoformat()


class TestPlanRange:
    def test_consecutive_days(self, profile):
        plans = plan_range(profile, TEST_DATE, 3, now=FIXED_NOW)
        assert [p.day for p in plans] == [
            date(2024, 1, 15),
            date(2024, 1, 16),
            date(2024, 1, 17),
        ]

    def test_blocks_only_affect_their_day(self, profile):
        # MERIDIAN EXECUTION is 15:00-19:00
        block = make_busy(datetime(2024, 1, 16, 15), datetime(2024, 1, 16, 19))
        plans = plan_range(profile, TEST_DATE, 2, [block], now=FIXED_NOW)
        first, second = (
            next(d for d in p.decisions if d.mode is Mode.EXECUTION) for p in plans
        )
        assert first.decision is Verdict.PERMIT
        assert second.decision is Verdict.SILENCE

    def test_zero_days(self, profile):
        assert plan_range(profile, TEST_DATE, 0) == []


class TestBuildExport:
    def test_shape(self, profile):
        block = make_busy(at(12, 30), at(13))
        export = build_export(profile, [block], [TEST_DATE, "2024-01-16"], now=FIXED_NOW)
        assert set(export) == {
            "exported_at",
            "chronotype_profile",
            "busy_blocks",
            "baseline_windows",
            "governor_decisions",
        }
        assert export["exported_at"] == FIXED_NOW.isoformat()
        assert export["chronotype_profile"]["chronotype"] == "MERIDIAN"
        assert export["busy_blocks"] == [block.to_dict()]
        assert list(export["baseline_windows"]) == ["2024-01-15", "2024-01-16"]
        assert len(export["governor_decisions"]["2024-01-16"]) == 5

    def test_without_profile(self):
        export = build_export(None, [], [TEST_DATE], now=FIXED_NOW)
        assert export["chronotype_profile"] is None
        assert export["baseline_windows"]["2024-01-15"] == []
        decisions = export["governor_decisions"]["2024-01-15"]
        assert {d["decision"] for d in decisions} == {"SILENCE"}
