"""Format string expansion for check reports."""

from .engine import Expander, FormatExpander

__all__ = ["Expander", "FormatExpander"]
