"""
Property-based tests for engine invariants using Hypothesis.

Random busy schedules and days are thrown at the subtraction engine, the
baseline generator and the governor.
"""

from datetime import date, datetime, timedelta

from hypothesis import given, settings
from hypothesis import strategies as st

from align.baseline import generate_baseline_windows
from align.governor import MIN_DURATION_MINUTES, REASONS, evaluate_day, subtract
from align.types import (
    ALL_MODES,
    BusyBlock,
    Chronotype,
    ChronotypeProfile,
    ConfidenceLevel,
    TimeSegment,
    Verdict,
)

BASE = datetime(2024, 1, 15, 0, 0)

# ============================================================================
# Strategies
# ============================================================================


@st.composite
def busy_blocks(draw, max_blocks=8):
    """Busy blocks within a 36h span, on a 5 minute grid."""
    count = draw(st.integers(min_value=0, max_value=max_blocks))
    blocks = []
    for _ in range(count):
        start = draw(st.integers(min_value=0, max_value=36 * 12 - 1))
        length = draw(st.integers(min_value=1, max_value=48))
        blocks.append(
            BusyBlock(
                start=BASE + timedelta(minutes=5 * start),
                end=BASE + timedelta(minutes=5 * (start + length)),
            )
        )
    return blocks


@st.composite
def windows(draw):
    start = draw(st.integers(min_value=0, max_value=24 * 12))
    length = draw(st.integers(min_value=1, max_value=6 * 12))
    return TimeSegment(
        start=BASE + timedelta(minutes=5 * start),
        end=BASE + timedelta(minutes=5 * (start + length)),
    )


profiles = st.builds(
    ChronotypeProfile,
    chronotype=st.sampled_from(list(Chronotype)),
    confidence=st.sampled_from([ConfidenceLevel.HIGH, ConfidenceLevel.MED]),
)

days = st.dates(min_value=date(2000, 1, 1), max_value=date(2099, 12, 31))

# ============================================================================
# Subtraction
# ============================================================================


@given(windows(), busy_blocks())
def test_segments_stay_inside_window(window, blocks):
    """Every segment lies within the window and has positive length."""
    for segment in subtract(window, blocks):
        assert window.start <= segment.start < segment.end <= window.end


@given(windows(), busy_blocks())
def test_segments_are_ordered_and_disjoint(window, blocks):
    segments = subtract(window, blocks)
    for earlier, later in zip(segments, segments[1:]):
        assert earlier.end < later.start


@given(windows(), busy_blocks())
def test_segments_never_overlap_busy_time(window, blocks):
    for segment in subtract(window, blocks):
        for block in blocks:
            assert not (segment.start < block.end and block.start < segment.end)


@given(windows(), busy_blocks())
def test_free_plus_busy_covers_window(window, blocks):
    """Free minutes + busy minutes inside the window == window minutes."""
    free = sum(s.duration_minutes for s in subtract(window, blocks))

    covered = set()
    for block in blocks:
        start = max(block.start, window.start)
        end = min(block.end, window.end)
        minute = start
        while minute < end:
            covered.add(minute)
            minute += timedelta(minutes=5)

    total = window.duration_minutes
    assert free + 5 * len(covered) == total


@given(windows(), busy_blocks())
def test_subtraction_ignores_block_order(window, blocks):
    assert subtract(window, blocks) == subtract(window, list(reversed(blocks)))


# ============================================================================
# Baseline generation
# ============================================================================


@given(profiles, days)
def test_baseline_windows_positive_and_near_day(profile, day):
    day_start = datetime(day.year, day.month, day.day)
    for window in generate_baseline_windows(profile, day):
        assert window.end > window.start
        assert day_start <= window.start < day_start + timedelta(days=2)


@given(profiles, days)
def test_baseline_generation_is_deterministic(profile, day):
    assert generate_baseline_windows(profile, day) == generate_baseline_windows(profile, day)


@given(st.sampled_from(list(Chronotype)), days)
def test_low_confidence_never_yields_windows(chronotype, day):
    profile = ChronotypeProfile(chronotype=chronotype, confidence=ConfidenceLevel.LOW)
    assert generate_baseline_windows(profile, day) == []


# ============================================================================
# Governor
# ============================================================================


@settings(max_examples=200)
@given(profiles, busy_blocks(max_blocks=12))
def test_governor_verdict_invariants(profile, blocks):
    """Every verdict carries the geometry and minimum length its kind requires."""
    baseline = generate_baseline_windows(profile, BASE.date())
    decisions = evaluate_day(profile, blocks, baseline, now=BASE)

    assert [d.mode for d in decisions] == list(ALL_MODES)
    for d in decisions:
        assert d.reason == REASONS[d.decision]
        minimum = MIN_DURATION_MINUTES[d.mode]
        if d.decision is Verdict.PERMIT:
            assert d.segments is None
            assert d.window.duration_minutes >= minimum
        elif d.decision is Verdict.FRAGMENTED:
            assert d.window is None
            assert len(d.segments) >= 2
            assert all(s.duration_minutes >= minimum for s in d.segments)
        else:
            assert d.window is None and d.segments is None


@given(profiles, busy_blocks())
def test_governor_is_deterministic(profile, blocks):
    baseline = generate_baseline_windows(profile, BASE.date())
    first = evaluate_day(profile, blocks, baseline, now=BASE)
    second = evaluate_day(profile, blocks, baseline, now=BASE)
    assert first == second


@given(profiles, busy_blocks())
def test_adding_busy_time_never_upgrades_silence(profile, blocks):
    """A mode silenced by some blocks stays silent when more blocks are added."""
    baseline = generate_baseline_windows(profile, BASE.date())
    before = evaluate_day(profile, blocks[:1], baseline, now=BASE)
    after = evaluate_day(profile, blocks, baseline, now=BASE)
    for b, a in zip(before, after):
        if b.decision is Verdict.SILENCE:
            assert a.decision is Verdict.SILENCE
