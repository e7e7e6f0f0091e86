"""
Fixed reason vocabulary for governor verdicts.

Consumers match on these exact strings. They never vary by mode or input.
"""

from align.types import Verdict

NOT_RELIABLE = "Conditions are not structurally reliable right now."
SPLIT_BY_UNAVAILABLE = "Window is split by an unavailable time."
SUPPORTS_MODE = "Conditions support this mode of thinking."

REASONS: dict[Verdict, str] = {
    Verdict.SILENCE: NOT_RELIABLE,
    Verdict.FRAGMENTED: SPLIT_BY_UNAVAILABLE,
    Verdict.PERMIT: SUPPORTS_MODE,
}
