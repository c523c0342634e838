"""
Local Git Repository Access

Resolves revisions and finds the hosting project from git remotes.
"""

import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from ..errors import ResolutionError
from ..github.models import Project


# git@host:owner/repo.git, ssh://git@host[:port]/owner/repo.git, https://host/owner/repo.git
SCP_REMOTE = re.compile(r"^(?:[^@/]+@)?(?P<host>[^:/]+):(?P<path>[^/].*)$")
URL_REMOTE = re.compile(r"^(?:https?|ssh|git)://(?:[^@/]+@)?(?P<host>[^:/]+)(?::\d+)?/(?P<path>.+)$")

PREFERRED_REMOTES = ("origin", "upstream")

RunCommand = Callable[..., subprocess.CompletedProcess]


def parse_remote_url(url: str) -> Optional[Project]:
    """
    Parse a git remote URL into a Project.

    Returns:
        Project, or None if the URL is not in a recognized form
    """
    url = url.strip()
    match = URL_REMOTE.match(url) or SCP_REMOTE.match(url)
    if not match:
        return None

    parts = match.group("path").strip("/").split("/")
    if len(parts) != 2:
        return None

    owner, name = parts
    if name.endswith(".git"):
        name = name[:-len(".git")]
    if not owner or not name:
        return None

    return Project(owner=owner, name=name, host=match.group("host").lower())


@dataclass
class LocalRepo:
    """
    A git working tree.

    All git calls go through ``run`` so tests can substitute it.
    """
    path: Optional[Path] = None
    run: RunCommand = subprocess.run

    def git(self, *args: str) -> subprocess.CompletedProcess:
        """Run a git command and capture its output."""
        cmd = ["git"]
        if self.path is not None:
            cmd += ["-C", str(self.path)]
        cmd += list(args)
        try:
            return self.run(cmd, capture_output=True, text=True, timeout=30)
        except FileNotFoundError:
            raise ResolutionError("git executable not found")
        except subprocess.TimeoutExpired:
            raise ResolutionError(f"Timed out running: {' '.join(cmd)}")

    def resolve_ref(self, ref: str) -> str:
        """
        Resolve a revision to a full commit SHA.

        Raises:
            ResolutionError: If the revision does not name a commit
        """
        result = self.git("rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}")
        sha = result.stdout.strip()
        if result.returncode != 0 or not sha:
            raise ResolutionError(f"Aborted: no revision could be determined from '{ref}'")
        return sha

    def remotes(self) -> List[Tuple[str, str]]:
        """List ``(name, fetch_url)`` pairs, in git's order."""
        result = self.git("remote", "-v")
        if result.returncode != 0:
            raise ResolutionError("Not a git repository (or no remotes configured)")

        remotes: List[Tuple[str, str]] = []
        for line in result.stdout.splitlines():
            fields = line.split()
            if len(fields) >= 2 and (len(fields) < 3 or fields[2] == "(fetch)"):
                if (fields[0], fields[1]) not in remotes:
                    remotes.append((fields[0], fields[1]))
        return remotes

    def main_project(self, preferred_remote: Optional[str] = None, host: Optional[str] = None) -> Project:
        """
        Find the hosting project for this repository.

        Args:
            preferred_remote: Remote to try first
            host: Only consider remotes on this host

        Raises:
            ResolutionError: If no remote points at a known project
        """
        projects = {}
        order = []
        for name, url in self.remotes():
            project = parse_remote_url(url)
            if project is None or (host and project.host != host.lower()):
                continue
            projects[name] = project
            order.append(name)

        candidates = [preferred_remote] if preferred_remote else []
        candidates += list(PREFERRED_REMOTES) + order
        for name in candidates:
            if name in projects:
                return projects[name]

        raise ResolutionError("Aborted: could not find any git remote pointing to a GitHub repository")
