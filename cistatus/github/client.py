"""
GitHub API Client

Fetches commit statuses, check runs, and pull requests over the REST API.
"""

import json
import urllib.error
import urllib.request
from typing import Any, Callable, Dict, List, Optional

from ..config.models import Settings
from ..errors import FetchError
from ..status.models import CheckResult, CIStatusResponse
from ..status.states import State
from .models import Project


CHECKS_ACCEPT = "application/vnd.github.antiope-preview+json;charset=utf-8"
JSON_ACCEPT = "application/vnd.github.v3+json;charset=utf-8"

# Check runs are optional; these mean "not available here".
CHECKS_UNAVAILABLE = (403, 404, 422)

USER_AGENT = "ci-status"


class GitHubClient:
    """
    Minimal REST client for one hosting service.

    Requests go through ``opener`` (``urllib.request.urlopen`` by default)
    so tests can substitute it.
    """

    def __init__(
        self,
        settings: Settings,
        host: Optional[str] = None,
        opener: Optional[Callable[..., Any]] = None,
    ):
        """
        Initialize the client.

        Args:
            settings: Loaded settings (API URL, token, timeout)
            host: Host of the project being queried
            opener: Replacement for urllib.request.urlopen
        """
        self.settings = settings
        self.host = host or settings.host
        self.base_url = settings.api_base(self.host)
        self._open = opener or urllib.request.urlopen

    def fetch_ci_status(self, project: Project, sha: str) -> CIStatusResponse:
        """
        Fetch commit statuses and check runs for a commit.

        Args:
            project: Repository the commit belongs to
            sha: Full commit SHA

        Returns:
            CIStatusResponse with statuses sorted by name

        Raises:
            FetchError: If the statuses cannot be retrieved
        """
        repo_path = f"repos/{project.owner}/{project.name}/commits/{sha}"

        payload = self._get_json(f"{repo_path}/status")
        response = CIStatusResponse(sha=payload.get("sha") or sha)
        for status in payload.get("statuses") or []:
            response.statuses.append(CheckResult(
                name=status.get("context") or "",
                state=status.get("state") or "",
                target_url=status.get("target_url") or "",
            ))

        checks = self._get_json(
            f"{repo_path}/check-runs",
            accept=CHECKS_ACCEPT,
            allow_status=CHECKS_UNAVAILABLE,
        )
        for run in (checks or {}).get("check_runs") or []:
            response.statuses.append(check_run_result(run))

        response.sort()
        return response

    def pull_request_head(self, project: Project, pull_request_id: str) -> str:
        """
        Get the head commit SHA of a pull request.

        Raises:
            FetchError: If the pull request cannot be retrieved
        """
        payload = self._get_json(f"repos/{project.owner}/{project.name}/pulls/{pull_request_id}")
        sha = (payload.get("head") or {}).get("sha")
        if not sha:
            raise FetchError(f"Pull request {project}#{pull_request_id} has no head commit")
        return sha

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path}"

    def _get_json(
        self,
        path: str,
        accept: str = JSON_ACCEPT,
        allow_status: tuple = (),
    ) -> Optional[Dict[str, Any]]:
        """
        GET an API path and decode the JSON body.

        Returns:
            Decoded payload, or None for a status listed in ``allow_status``
        """
        url = self.url_for(path)
        req = urllib.request.Request(url, method="GET")
        req.add_header("Accept", accept)
        req.add_header("User-Agent", USER_AGENT)
        if self.settings.token:
            req.add_header("Authorization", f"token {self.settings.token}")

        try:
            with self._open(req, timeout=self.settings.timeout) as resp:
                body = resp.read().decode("utf-8")
        except urllib.error.HTTPError as e:
            if e.code in allow_status:
                return None
            raise FetchError(f"Error fetching {url}: HTTP {e.code} {e.reason}")
        except urllib.error.URLError as e:
            raise FetchError(f"Error fetching {url}: {e.reason}")
        except OSError as e:
            raise FetchError(f"Error fetching {url}: {e}")

        try:
            payload = json.loads(body) if body else {}
        except json.JSONDecodeError as e:
            raise FetchError(f"Invalid JSON from {url}: {e}")

        if not isinstance(payload, dict):
            raise FetchError(f"Unexpected response from {url}")
        return payload


def check_run_result(run: Dict[str, Any]) -> CheckResult:
    """Convert a check run payload; unfinished runs are pending."""
    state = State.PENDING.value
    if run.get("status") == "completed":
        state = run.get("conclusion") or ""
    return CheckResult(
        name=run.get("name") or "",
        state=state,
        target_url=run.get("html_url") or "",
    )
