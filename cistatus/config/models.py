"""
Pydantic models for configuration validation.

Defines the schema for the ci-status settings file.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ColorMode(str, Enum):
    """When to emit ANSI colors."""
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


DEFAULT_HOST = "github.com"


class Settings(BaseModel):
    """Settings for talking to the hosting service and rendering reports."""

    host: str = Field(default=DEFAULT_HOST, description="Hosting service hostname")
    api_url: Optional[str] = Field(None, description="API base URL override")
    token: Optional[str] = Field(None, description="API token sent with requests")
    remote: Optional[str] = Field(None, description="Preferred git remote name")
    timeout: float = Field(default=10.0, gt=0, description="HTTP timeout in seconds")
    color: ColorMode = Field(default=ColorMode.AUTO, description="Color output mode")
    format: Optional[str] = Field(None, description="Default verbose format string")

    @field_validator("host")
    @classmethod
    def normalize_host(cls, v: str) -> str:
        """Lowercase the host and drop any scheme or trailing slash."""
        v = v.strip().lower()
        for scheme in ("https://", "http://"):
            if v.startswith(scheme):
                v = v[len(scheme):]
        v = v.rstrip("/")
        if not v:
            raise ValueError("host must not be empty")
        return v

    @field_validator("api_url")
    @classmethod
    def strip_api_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return v.rstrip("/") or None

    def api_base(self, host: Optional[str] = None) -> str:
        """
        Get the REST API base URL for a host.

        Args:
            host: Project host, defaults to the configured host

        Returns:
            ``https://api.github.com`` for github.com, otherwise the
            Enterprise ``/api/v3`` endpoint, unless ``api_url`` is set
        """
        if self.api_url:
            return self.api_url
        host = (host or self.host).lower()
        if host == DEFAULT_HOST:
            return "https://api.github.com"
        return f"https://{host}/api/v3"
