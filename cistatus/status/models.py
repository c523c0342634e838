"""
Check Status Models

Shared data types for check results and report configuration.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class CheckResult:
    """A single check reported for a commit."""
    name: str
    state: str
    target_url: str = ""

    @property
    def has_url(self) -> bool:
        return self.target_url != ""


@dataclass(frozen=True)
class ReportSpec:
    """Options for one rendering pass."""
    verbose: bool = False
    format: str = ""
    colorize: bool = False

    @property
    def is_verbose(self) -> bool:
        """A custom format implies verbose output."""
        return self.verbose or self.format != ""


@dataclass
class CIStatusResponse:
    """Checks fetched for one commit."""
    sha: str
    statuses: List[CheckResult] = field(default_factory=list)

    def sort(self) -> None:
        """Order statuses by case-insensitive name, then target URL."""
        self.statuses.sort(key=lambda s: (s.name.lower(), s.target_url))
