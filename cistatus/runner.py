"""
CI Status Runner

Resolves a reference to a commit, fetches its checks, and reports the
overall state and exit code.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

import click
from rich.console import Console

from .config.models import Settings
from .git import LocalRepo
from .github import GitHubClient, Project, parse_project_url, pull_request_id
from .report import ReportRenderer
from .status import CheckResult, ReportSpec, NO_STATUS, aggregate, exit_code


DEFAULT_REF = "HEAD"

ClientFactory = Callable[[Settings, str], GitHubClient]


@dataclass
class Resolution:
    """A reference resolved to a commit in a project."""
    project: Project
    sha: str


def report(
    checks: Sequence[CheckResult],
    spec: ReportSpec,
    echo: Callable[[str], None] = click.echo,
    renderer: Optional[ReportRenderer] = None,
) -> int:
    """
    Print the overall state (or a verbose report) and compute the exit code.

    Args:
        checks: Fetched check results
        spec: Report options
        echo: Line writer
        renderer: Renderer for verbose output, built from ``spec`` if omitted

    Returns:
        Process exit code
    """
    if not checks:
        echo(NO_STATUS)
        return exit_code("")

    overall = aggregate(checks)

    if spec.is_verbose:
        renderer = renderer or ReportRenderer(spec)
        for line in renderer.render(checks):
            echo(line)
    else:
        echo(overall or NO_STATUS)

    return exit_code(overall)


class CIStatusRunner:
    """
    Orchestrates one ci-status invocation.

    Collaborators are injectable so the flow can run without git or network.
    """

    def __init__(
        self,
        settings: Settings,
        repo: Optional[LocalRepo] = None,
        client_factory: Optional[ClientFactory] = None,
        console: Optional[Console] = None,
        debug: bool = False,
    ):
        self.settings = settings
        self.repo = repo or LocalRepo()
        self.client_factory = client_factory or (lambda s, host: GitHubClient(s, host=host))
        self.console = console or Console(stderr=True)
        self.debug = debug

    def log(self, message: str) -> None:
        if self.debug:
            self.console.log(message)

    def resolve(self, arg: Optional[str] = None) -> Resolution:
        """
        Resolve a command-line reference to a project and commit SHA.

        Args:
            arg: Commit-ish, ``PR<id>``, or pull request URL; HEAD if None

        Raises:
            ResolutionError: If no project or commit can be determined
            FetchError: If a pull request lookup fails
        """
        ref = DEFAULT_REF
        project: Optional[Project] = None
        sha: Optional[str] = None

        if arg:
            pr_id = pull_request_id(arg)
            project_url = parse_project_url(arg, host=self.settings.host) if pr_id is None else None
            if pr_id is not None:
                current = self._local_project()
                sha = self._client(current.host).pull_request_head(current, pr_id)
                project = current
                self.log(f"Pull request {current}#{pr_id} head is {sha}")
            elif project_url is not None:
                pr_id = project_url.pull_request_id()
                project = project_url.project
                sha = self._client(project.host).pull_request_head(project, pr_id)
                self.log(f"Pull request {project}#{pr_id} head is {sha}")
            else:
                ref = arg

        if project is None:
            project = self._local_project()

        if sha is None:
            sha = self.repo.resolve_ref(ref)
            self.log(f"Resolved '{ref}' to {sha} in {project.host}/{project}")
        return Resolution(project=project, sha=sha)

    def fetch(self, resolution: Resolution) -> Tuple[CheckResult, ...]:
        client = self._client(resolution.project.host)
        self.log(f"Fetching checks from {client.base_url}")
        response = client.fetch_ci_status(resolution.project, resolution.sha)
        self.log(f"Found {len(response.statuses)} checks")
        return tuple(response.statuses)

    def run(
        self,
        arg: Optional[str],
        spec: ReportSpec,
        noop: bool = False,
        echo: Callable[[str], None] = click.echo,
    ) -> int:
        """
        Run a full invocation.

        Returns:
            Process exit code
        """
        resolution = self.resolve(arg)
        if noop:
            echo(f"Would request CI status for {resolution.sha}")
            return 0
        return report(self.fetch(resolution), spec, echo=echo)

    def _local_project(self) -> Project:
        return self.repo.main_project(
            preferred_remote=self.settings.remote,
            host=self.settings.host,
        )

    def _client(self, host: str) -> GitHubClient:
        return self.client_factory(self.settings, host)
