"""
Check Status Module

State vocabulary, aggregation, and exit code mapping for CI checks.
"""

from .models import CheckResult, CIStatusResponse, ReportSpec
from .states import State, is_recognized
from .aggregator import aggregate, exit_code, NO_STATUS

__all__ = [
    "CheckResult",
    "CIStatusResponse",
    "ReportSpec",
    "State",
    "is_recognized",
    "aggregate",
    "exit_code",
    "NO_STATUS",
]
