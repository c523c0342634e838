"""
Hosting service data types and reference parsing.
"""

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from ..errors import ResolutionError


PULL_REQUEST_ID = re.compile(r"^PR(\d+)$")
PULL_REQUEST_PATH = re.compile(r"^pull/(\d+)")


@dataclass(frozen=True)
class Project:
    """A repository on a hosting service."""
    owner: str
    name: str
    host: str = "github.com"

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class ProjectURL:
    """A web URL pointing somewhere inside a project."""
    project: Project
    project_path: str

    def pull_request_id(self) -> str:
        """
        Get the pull request number this URL points at.

        Raises:
            ResolutionError: If the URL is not a pull request URL
        """
        match = PULL_REQUEST_PATH.match(self.project_path)
        if not match:
            raise ResolutionError("The URL does not contain a PR")
        return match.group(1)


def pull_request_id(arg: str) -> Optional[str]:
    """Return the id from a ``PR<digits>`` argument, or None."""
    match = PULL_REQUEST_ID.match(arg)
    return match.group(1) if match else None


def parse_project_url(arg: str, host: Optional[str] = None) -> Optional[ProjectURL]:
    """
    Parse a web URL of the form ``https://host/owner/repo[/path]``.

    Args:
        arg: Command-line argument
        host: Only accept URLs on this host (a ``www.`` prefix is allowed)

    Returns:
        ProjectURL, or None if ``arg`` is not such a URL
    """
    parsed = urlparse(arg)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        return None

    url_host = parsed.hostname.lower()
    if url_host.startswith("www."):
        url_host = url_host[len("www."):]
    if host and url_host != host.lower():
        return None

    parts = parsed.path.strip("/").split("/")
    if len(parts) < 2 or not parts[0] or not parts[1]:
        return None

    owner, name = parts[0], parts[1]
    if name.endswith(".git"):
        name = name[:-len(".git")]

    return ProjectURL(
        project=Project(owner=owner, name=name, host=url_host),
        project_path="/".join(parts[2:]),
    )
