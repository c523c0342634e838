"""Configuration handling for ci-status."""

from .models import ColorMode, Settings
from .loader import ConfigLoader

__all__ = [
    "ColorMode",
    "Settings",
    "ConfigLoader",
]
