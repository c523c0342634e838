"""Local git repository access."""

from .repository import LocalRepo, parse_remote_url

__all__ = ["LocalRepo", "parse_remote_url"]
