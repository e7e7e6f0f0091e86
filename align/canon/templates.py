"""
Canon window templates v5.0.

Per-chronotype, per-mode reliability windows. These are fixed domain
constants; tests compare them verbatim.

MIDNIGHT WRAPAROUND:
Windows crossing midnight use times past 24:00.
    22:00-00:30 is stored as CanonTimeWindow("22:00", "24:30")
    01:00-03:00 next day is stored as CanonTimeWindow("25:00", "27:00")

SPLIT WINDOWS:
A mode may carry more than one window (Twilight/Nocturne Execution).
"""

from types import MappingProxyType

from align.types import (
    ALL_MODES,
    CanonTimeWindow,
    Chronotype,
    ChronotypeTemplate,
    Mode,
    ModeTemplate,
)

CANON_VERSION = "5.0"

W = CanonTimeWindow


def _template(
    chronotype: Chronotype,
    typical_wake: str,
    sleep_inertia_ends: str,
    post_lunch_dip: CanonTimeWindow,
    modes: dict[Mode, ModeTemplate],
) -> ChronotypeTemplate:
    missing = [m.value for m in ALL_MODES if not modes.get(m)]
    if missing:
        raise ValueError(f"{chronotype.value} template missing modes: {missing}")
    return ChronotypeTemplate(
        chronotype=chronotype,
        typical_wake=typical_wake,
        sleep_inertia_ends=sleep_inertia_ends,
        post_lunch_dip=post_lunch_dip,
        modes=MappingProxyType(dict(modes)),
    )


# MSFsc < 2.5
AURORA = _template(
    Chronotype.AURORA,
    typical_wake="05:30",
    sleep_inertia_ends="07:00",
    post_lunch_dip=W("13:00", "14:00"),
    modes={
        Mode.FRAMING: (W("07:00", "09:00"),),
        Mode.EVALUATION: (W("08:00", "10:30"),),
        Mode.SYNTHESIS: (W("07:30", "11:00"),),
        Mode.EXECUTION: (W("11:00", "15:00"),),
        Mode.REFLECTION: (W("19:00", "21:00"),),
    },
)

# MSFsc 2.5 - <3.5
DAYBREAK = _template(
    Chronotype.DAYBREAK,
    typical_wake="07:00",
    sleep_inertia_ends="08:30",
    post_lunch_dip=W("13:30", "14:30"),
    modes={
        Mode.FRAMING: (W("09:00", "11:00"),),
        Mode.EVALUATION: (W("10:00", "12:30"),),
        Mode.SYNTHESIS: (W("09:30", "13:00"),),
        Mode.EXECUTION: (W("13:00", "17:00"),),
        Mode.REFLECTION: (W("20:00", "22:00"),),
    },
)

# MSFsc 3.5 - <4.5
MERIDIAN = _template(
    Chronotype.MERIDIAN,
    typical_wake="08:30",
    sleep_inertia_ends="10:00",
    post_lunch_dip=W("14:00", "15:00"),
    modes={
        Mode.FRAMING: (W("10:30", "12:30"),),
        Mode.EVALUATION: (W("11:30", "14:30"),),
        Mode.SYNTHESIS: (W("11:00", "15:00"),),
        Mode.EXECUTION: (W("15:00", "19:00"),),
        Mode.REFLECTION: (W("21:00", "23:00"),),
    },
)

# MSFsc 4.5 - <5.5
TWILIGHT = _template(
    Chronotype.TWILIGHT,
    typical_wake="09:30",
    sleep_inertia_ends="11:00",
    post_lunch_dip=W("14:30", "15:30"),
    modes={
        Mode.FRAMING: (W("13:00", "15:30"),),
        Mode.EVALUATION: (W("14:30", "17:30"),),
        Mode.SYNTHESIS: (W("13:30", "18:00"),),
        # Split: morning + evening
        Mode.EXECUTION: (W("11:00", "13:00"), W("18:00", "21:00")),
        # 22:00-00:00
        Mode.REFLECTION: (W("22:00", "24:00"),),
    },
)

# MSFsc >= 5.5
NOCTURNE = _template(
    Chronotype.NOCTURNE,
    typical_wake="10:00",
    sleep_inertia_ends="11:30",
    post_lunch_dip=W("15:00", "16:00"),
    modes={
        Mode.FRAMING: (W("21:00", "23:30"),),
        # 22:00-00:30
        Mode.EVALUATION: (W("22:00", "24:30"),),
        Mode.SYNTHESIS: (W("19:00", "23:30"),),
        # Split: afternoon + 00:30-02:00 next day
        Mode.EXECUTION: (W("14:00", "19:00"), W("24:30", "26:00")),
        # 01:00-03:00 next day
        Mode.REFLECTION: (W("25:00", "27:00"),),
    },
)

WINDOW_TEMPLATES: MappingProxyType = MappingProxyType(
    {t.chronotype: t for t in (AURORA, DAYBREAK, MERIDIAN, TWILIGHT, NOCTURNE)}
)

FOCUS_ENVELOPES: MappingProxyType = MappingProxyType(
    {
        Chronotype.AURORA: W("07:00", "11:00"),
        Chronotype.DAYBREAK: W("09:00", "13:00"),
        Chronotype.MERIDIAN: W("10:30", "15:00"),
        Chronotype.TWILIGHT: W("13:00", "18:00"),
        Chronotype.NOCTURNE: W("19:00", "23:30"),
    }
)


# ============================================================
# Lookup
# ============================================================


def templates_for(chronotype: Chronotype) -> ChronotypeTemplate:
    """
    Get the full template for a chronotype.

    Raises KeyError for a value outside the Chronotype enum. That is a
    caller bug, not a runtime condition to recover from.
    """
    return WINDOW_TEMPLATES[chronotype]


def mode_windows(chronotype: Chronotype, mode: Mode) -> ModeTemplate:
    """All windows for a mode, in declaration order."""
    return templates_for(chronotype).modes[mode]


def primary_window(chronotype: Chronotype, mode: Mode) -> CanonTimeWindow:
    """First window of a (possibly split) mode template."""
    return mode_windows(chronotype, mode)[0]


def has_split_windows(chronotype: Chronotype, mode: Mode) -> bool:
    return len(mode_windows(chronotype, mode)) > 1


def post_lunch_dip(chronotype: Chronotype) -> CanonTimeWindow:
    return templates_for(chronotype).post_lunch_dip


def focus_envelope(chronotype: Chronotype) -> CanonTimeWindow:
    return FOCUS_ENVELOPES[chronotype]
