"""
Verbose check report rendering.

Orders checks so failures surface first and expands a format string per
check into one output line.
"""

from typing import Dict, List, Optional, Sequence

from rich.cells import cell_len

from .status.models import CheckResult, ReportSpec
from .status.states import display_rank, marker_for
from .templating import Expander, FormatExpander


DEFAULT_FORMAT = "%sC{marker}%Creset\t%t"
DEFAULT_FORMAT_WITH_URL = "%sC{marker}%Creset\t%<({width})%t\t%U"


class ReportRenderer:
    """
    Renders checks as formatted report lines.

    The expander is injected so any format engine with an
    ``expand(template, placeholders, colorize)`` method can be used.
    """

    def __init__(self, spec: ReportSpec, expander: Optional[Expander] = None):
        """
        Initialize the renderer.

        Args:
            spec: Report options (format string and color)
            expander: Format engine, defaults to FormatExpander
        """
        self.spec = spec
        self.expander = expander or FormatExpander()

    def render(self, checks: Sequence[CheckResult]) -> List[str]:
        """
        Render one line per check, failing checks first.

        Args:
            checks: Check results; not modified

        Returns:
            Expanded lines without trailing newlines
        """
        width = context_width(checks)
        lines = []
        for check in sort_for_display(checks):
            text = self.expander.expand(
                self.template_for(check, width),
                self.placeholders_for(check),
                self.spec.colorize,
            )
            if text.endswith("\n"):
                text = text[:-1]
            lines.append(text)
        return lines

    def template_for(self, check: CheckResult, width: int) -> str:
        """Pick the user's format, or the built-in one for this check."""
        if self.spec.format:
            return self.spec.format

        marker, _ = marker_for(check.state)
        if not check.has_url:
            return DEFAULT_FORMAT.format(marker=marker)
        return DEFAULT_FORMAT_WITH_URL.format(marker=marker, width=width)

    def placeholders_for(self, check: CheckResult) -> Dict[str, str]:
        _, color = marker_for(check.state)
        return {
            "S": check.state,
            "sC": color if self.spec.colorize else "",
            "t": check.name,
            "U": check.target_url,
        }


def context_width(checks: Sequence[CheckResult]) -> int:
    """Display width of the longest check name, 0 for no checks."""
    return max((cell_len(check.name) for check in checks), default=0)


def sort_for_display(checks: Sequence[CheckResult]) -> List[CheckResult]:
    """Stable copy of ``checks`` ordered by display rank."""
    return sorted(checks, key=lambda check: display_rank(check.state))
