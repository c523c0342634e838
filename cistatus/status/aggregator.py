"""
Status Aggregation

Collapses a set of check results into one overall state and maps that
state to a process exit code.
"""

from typing import Iterable

from .models import CheckResult
from .states import FAILING_STATES, PASSING_STATES, State, severity

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_PENDING = 2
EXIT_UNRECOGNIZED = 3

NO_STATUS = "no status"


def aggregate(checks: Iterable[CheckResult]) -> str:
    """
    Reduce checks to the state with the highest severity.

    Ties keep the first state seen. Unrecognized states only win when no
    recognized state is present.

    Args:
        checks: Check results in any order

    Returns:
        The overall state, or an empty string when there are no checks
    """
    overall = ""
    found = False
    for check in checks:
        if not found or severity(check.state) > severity(overall):
            overall = check.state
            found = True
    return overall


def exit_code(overall_state: str) -> int:
    """Map an overall state to the process exit code."""
    if overall_state in PASSING_STATES or overall_state == "":
        return EXIT_PASSED
    if overall_state in FAILING_STATES:
        return EXIT_FAILED
    if overall_state == State.PENDING.value:
        return EXIT_PENDING
    return EXIT_UNRECOGNIZED
