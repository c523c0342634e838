"""
Configuration loader for YAML files.

Handles loading settings from a YAML file and layering environment
variable overrides on top.
"""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from ..errors import ConfigError
from .models import Settings


CONFIG_ENV = "CI_STATUS_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "ci-status" / "config.yaml"

# Environment variable -> settings field; later entries win.
ENV_OVERRIDES = (
    ("CI_STATUS_HOST", "host"),
    ("CI_STATUS_API_URL", "api_url"),
    ("GITHUB_TOKEN", "token"),
    ("CI_STATUS_TOKEN", "token"),
    ("CI_STATUS_TIMEOUT", "timeout"),
)


class ConfigLoader:
    """
    Loads and validates ci-status settings.

    Values come from, in increasing priority: the YAML file, environment
    variables, and explicit overrides passed to ``load``.
    """

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize the config loader.

        Args:
            config_path: Explicit settings file; must exist when given
            environ: Environment mapping, defaults to ``os.environ``
        """
        self.config_path = Path(config_path) if config_path else None
        self.environ = os.environ if environ is None else environ

    def load(self, **overrides: Any) -> Settings:
        """
        Load settings.

        Args:
            **overrides: Field values that take precedence; ``None`` is ignored

        Returns:
            Validated Settings

        Raises:
            ConfigError: If the file cannot be read or values are invalid
        """
        data: Dict[str, Any] = {}

        path = self.resolve_path()
        if path is not None:
            data.update(self._read_yaml(path))

        for env_name, field_name in ENV_OVERRIDES:
            value = self.environ.get(env_name)
            if value:
                data[field_name] = value

        data.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return Settings(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}")

    def resolve_path(self) -> Optional[Path]:
        """Find the settings file to read, if any."""
        if self.config_path is not None:
            if not self.config_path.is_file():
                raise ConfigError(f"Configuration file does not exist: {self.config_path}")
            return self.config_path

        env_path = self.environ.get(CONFIG_ENV)
        if env_path:
            path = Path(env_path)
            if not path.is_file():
                raise ConfigError(f"{CONFIG_ENV} points to a missing file: {path}")
            return path

        if DEFAULT_CONFIG_PATH.is_file():
            return DEFAULT_CONFIG_PATH
        return None

    def _read_yaml(self, file_path: Path) -> Dict[str, Any]:
        """Read and parse a YAML file."""
        try:
            with open(file_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {file_path}: {e}")
        except IOError as e:
            raise ConfigError(f"Cannot read {file_path}: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping in {file_path}")
        return data
