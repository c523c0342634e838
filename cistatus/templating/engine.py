"""
Format string expansion engine.

Expands git-log style "pretty format" strings: ``%<key>`` placeholders,
``%C...`` color directives, ``%n``/``%%`` escapes and the ``%<(N)``
family of column directives.
"""

import re
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Protocol

from rich.cells import cell_len, set_cell_size


COLOR_CODES: Dict[str, int] = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "white": 37,
}

ATTRIBUTE_CODES: Dict[str, int] = {
    "bold": 1,
    "dim": 2,
    "ul": 4,
    "blink": 5,
    "reverse": 7,
}

RESET = "\033[m"

ELLIPSIS = ".."


class Expander(Protocol):
    """Anything that can expand a format string against placeholder values."""

    def expand(self, template: str, placeholders: Mapping[str, str], colorize: bool) -> str:
        ...


@dataclass(frozen=True)
class Column:
    """A pending column directive, applied to the next placeholder."""
    align: str
    width: int
    truncate: Optional[str] = None

    def apply(self, value: str) -> str:
        length = cell_len(value)
        if length > self.width:
            return self._truncate(value) if self.truncate else value

        padding = self.width - length
        if self.align == "<":
            return value + " " * padding
        if self.align == ">":
            return " " * padding + value
        left = padding // 2
        return " " * left + value + " " * (padding - left)

    def _truncate(self, value: str) -> str:
        if self.width <= len(ELLIPSIS):
            return set_cell_size(value, self.width)

        keep = self.width - len(ELLIPSIS)
        if self.truncate == "trunc":
            return set_cell_size(value, keep) + ELLIPSIS
        if self.truncate == "ltrunc":
            return ELLIPSIS + set_cell_size(value[::-1], keep)[::-1]
        head = keep // 2
        tail = keep - head
        return (
            set_cell_size(value, head)
            + ELLIPSIS
            + set_cell_size(value[::-1], tail)[::-1]
        )


class FormatExpander:
    """
    Expands pretty-format strings.

    Placeholder keys are matched longest-first, so ``%sC`` is never read
    as ``%s`` followed by a literal ``C``. Unknown ``%`` sequences are
    left untouched. With ``colorize`` off every color directive expands
    to an empty string.
    """

    DIRECTIVE_PATTERN = (
        r"%(?:"
        r"(?P<percent>%)"
        r"|(?P<newline>n)"
        r"|C\((?P<color_spec>[^)]*)\)"
        r"|C(?P<color_name>reset|red|green|yellow|blue|magenta|cyan|white|black)"
        r"|(?P<align><|>|><)\((?P<width>\d+)(?:,\s*(?P<truncate>trunc|ltrunc|mtrunc))?\)"
        r"{placeholders}"
        r")"
    )

    def __init__(self):
        self._pattern_cache: Dict[tuple, "re.Pattern[str]"] = {}

    def expand(self, template: str, placeholders: Mapping[str, str], colorize: bool) -> str:
        """
        Expand a format string.

        Args:
            template: Format string
            placeholders: Values keyed by placeholder name (without ``%``)
            colorize: Whether color directives produce escape sequences

        Returns:
            Expanded text
        """
        pattern = self._compile(placeholders.keys())
        pending: Dict[str, Column] = {}

        def replace_match(match):
            if match.group("percent"):
                return "%"
            if match.group("newline"):
                return "\n"
            if match.group("color_spec") is not None:
                return self._color(match.group("color_spec"), colorize)
            if match.group("color_name"):
                return self._color(match.group("color_name"), colorize)
            if match.group("align"):
                pending["column"] = Column(
                    align=match.group("align"),
                    width=int(match.group("width")),
                    truncate=match.group("truncate"),
                )
                return ""

            value = placeholders[match.group("key")]
            column = pending.pop("column", None)
            if column is not None:
                value = column.apply(value)
            return value

        return pattern.sub(replace_match, template)

    def _compile(self, keys) -> "re.Pattern[str]":
        cache_key = tuple(sorted(keys, key=lambda k: (-len(k), k)))
        if cache_key not in self._pattern_cache:
            placeholders = ""
            if cache_key:
                alternatives = "|".join(re.escape(k) for k in cache_key)
                placeholders = f"|(?P<key>{alternatives})"
            else:
                placeholders = "|(?P<key>(?!))"
            self._pattern_cache[cache_key] = re.compile(
                self.DIRECTIVE_PATTERN.format(placeholders=placeholders)
            )
        return self._pattern_cache[cache_key]

    def _color(self, spec: str, colorize: bool) -> str:
        """Translate a color spec such as ``red``, ``bold blue`` or ``reset``."""
        if not colorize:
            return ""

        codes = []
        foreground_set = False
        for word in spec.split():
            word = word.lower()
            if word == "reset":
                return RESET
            if word in ATTRIBUTE_CODES:
                codes.append(str(ATTRIBUTE_CODES[word]))
            elif word in COLOR_CODES:
                # First color is the foreground, the second the background.
                code = COLOR_CODES[word] if not foreground_set else COLOR_CODES[word] + 10
                foreground_set = True
                codes.append(str(code))

        if not codes:
            return ""
        return f"\033[{';'.join(codes)}m"
