"""
Canonical mode copy: a one-line definition and short examples per mode.

Descriptive only. Used by exports, never by verdict logic.
"""

from dataclasses import dataclass

from align.types import Mode


@dataclass(frozen=True)
class ModeCopy:
    definition: str
    examples: tuple[str, ...]


MODES_COPY: dict[Mode, ModeCopy] = {
    Mode.FRAMING: ModeCopy(
        definition="Defining the problem and the decision space.",
        examples=(
            "Defining the question for a strategy discussion",
            "Deciding what problem to solve before jumping to solutions",
            "Writing a brief or decision memo outline",
            'Asking "what are we actually deciding here?"',
        ),
    ),
    Mode.EVALUATION: ModeCopy(
        definition="Comparing options and making tradeoffs.",
        examples=(
            "Comparing vendors or tools",
            "Deciding between two job offers",
            "Reviewing pros and cons",
            "Investment decisions",
        ),
    ),
    Mode.SYNTHESIS: ModeCopy(
        definition="Integrating information into a coherent view.",
        examples=(
            "Making sense of user research",
            "Pulling insights from multiple meetings",
            "Connecting dots across data, feedback, and intuition",
            "Preparing a recommendation",
        ),
    ),
    Mode.EXECUTION: ModeCopy(
        definition="Acting on an already-made decision.",
        examples=(
            "Writing emails based on a decided approach",
            "Implementing a plan",
            "Shipping work",
            "Doing tasks that require focus but not judgment",
        ),
    ),
    Mode.REFLECTION: ModeCopy(
        definition="Looking back, not deciding forward.",
        examples=(
            "Post-mortems",
            "Journaling",
            "Reviewing a day or week",
            "Asking \"what worked / what didn't?\"",
        ),
    ),
}
