"""
Check State Vocabulary

The closed set of states a check can report, plus the lookup tables
derived from it. Aggregation severity and display rank are separate
orderings and are kept in separate tables.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple


class State(str, Enum):
    """Recognized check states."""
    NEUTRAL = "neutral"
    SUCCESS = "success"
    PENDING = "pending"
    CANCELLED = "cancelled"
    TIMED_OUT = "timed_out"
    ACTION_REQUIRED = "action_required"
    FAILURE = "failure"
    ERROR = "error"


# Lowest to highest severity; the index is the severity.
SEVERITY_ORDER: Tuple[str, ...] = (
    State.NEUTRAL.value,
    State.SUCCESS.value,
    State.PENDING.value,
    State.CANCELLED.value,
    State.TIMED_OUT.value,
    State.ACTION_REQUIRED.value,
    State.FAILURE.value,
    State.ERROR.value,
)

SEVERITY: Mapping[str, int] = MappingProxyType(
    {state: index for index, state in enumerate(SEVERITY_ORDER)}
)

UNKNOWN_SEVERITY = -1

FAILING_STATES: Tuple[str, ...] = (
    State.FAILURE.value,
    State.ERROR.value,
    State.ACTION_REQUIRED.value,
    State.CANCELLED.value,
    State.TIMED_OUT.value,
)

PASSING_STATES: Tuple[str, ...] = (
    State.SUCCESS.value,
    State.NEUTRAL.value,
)

# Display rank: failing first, then pending/unknown, then passing.
RANK_FAILING = 1
RANK_PENDING = 2
RANK_PASSING = 3

DISPLAY_RANK: Mapping[str, int] = MappingProxyType({
    **{state: RANK_FAILING for state in FAILING_STATES},
    State.PENDING.value: RANK_PENDING,
    **{state: RANK_PASSING for state in PASSING_STATES},
})

# state -> (marker glyph, ANSI color code)
MARKERS: Mapping[str, Tuple[str, int]] = MappingProxyType({
    State.SUCCESS.value: ("✔︎", 32),
    **{state: ("✖︎", 31) for state in FAILING_STATES},
    State.NEUTRAL.value: ("◦", 30),
    State.PENDING.value: ("●", 33),
})


def is_recognized(state: str) -> bool:
    """Return True if ``state`` is part of the known vocabulary."""
    return state in SEVERITY


def severity(state: str) -> int:
    """Aggregation severity of a state; unrecognized states rank below all."""
    return SEVERITY.get(state, UNKNOWN_SEVERITY)


def display_rank(state: str) -> int:
    """Display bucket of a state; unrecognized states sort with pending."""
    return DISPLAY_RANK.get(state, RANK_PENDING)


def marker_for(state: str) -> Tuple[str, str]:
    """
    Get the marker glyph and color escape for a state.

    Returns:
        ``(glyph, color_escape)``; both empty for states without a marker
    """
    if state not in MARKERS:
        return "", ""
    glyph, color = MARKERS[state]
    return glyph, f"\033[{color}m"
