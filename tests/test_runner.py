from __future__ import annotations

import subprocess

import pytest
from rich.console import Console

from cistatus.config import Settings
from cistatus.errors import FetchError, ResolutionError
from cistatus.git import LocalRepo
from cistatus.github import Project
from cistatus.runner import CIStatusRunner, report
from cistatus.status import CIStatusResponse, CheckResult, ReportSpec

SHA = "c" * 40
PR_SHA = "d" * 40


class FakeRepo:
    def __init__(self, project: Project = Project("octo", "repo")) -> None:
        self.project = project
        self.resolved: list[str] = []

    def main_project(self, preferred_remote=None, host=None) -> Project:
        return self.project

    def resolve_ref(self, ref: str) -> str:
        self.resolved.append(ref)
        if ref == "missing":
            raise ResolutionError(f"Aborted: no revision could be determined from '{ref}'")
        return SHA


class FakeClient:
    def __init__(self, host: str, statuses: list[CheckResult]) -> None:
        self.host = host
        self.base_url = f"https://{host}"
        self.statuses = statuses
        self.fetched: list[tuple[Project, str]] = []
        self.pull_requests: list[tuple[Project, str]] = []

    def fetch_ci_status(self, project: Project, sha: str) -> CIStatusResponse:
        self.fetched.append((project, sha))
        return CIStatusResponse(sha=sha, statuses=list(self.statuses))

    def pull_request_head(self, project: Project, pull_request_id: str) -> str:
        self.pull_requests.append((project, pull_request_id))
        return PR_SHA


def _runner(
    statuses: list[CheckResult] | None = None,
    repo=None,
    settings: Settings | None = None,
):
    clients: list[FakeClient] = []

    def _factory(settings: Settings, host: str) -> FakeClient:
        client = FakeClient(host, statuses or [])
        clients.append(client)
        return client

    runner = CIStatusRunner(
        settings or Settings(),
        repo=repo or FakeRepo(),
        client_factory=_factory,
        console=Console(stderr=True, quiet=True),
    )
    return runner, clients


def test_report_no_status() -> None:
    lines: list[str] = []
    assert report([], ReportSpec(verbose=True), echo=lines.append) == 0
    assert lines == ["no status"]


def test_report_terse(make_checks) -> None:
    lines: list[str] = []
    code = report(make_checks(("build", "success", ""), ("lint", "pending", "")), ReportSpec(), echo=lines.append)
    assert (lines, code) == (["pending"], 2)


def test_report_verbose_skips_summary(make_checks) -> None:
    lines: list[str] = []
    checks = make_checks(("b", "success", "http://y"), ("a", "failure", "http://x"))
    code = report(checks, ReportSpec(verbose=True), echo=lines.append)
    assert code == 1
    assert lines == ["✖︎\ta\thttp://x", "✔︎\tb\thttp://y"]


def test_report_format_implies_verbose(make_checks) -> None:
    lines: list[str] = []
    code = report(make_checks(("a", "neutral", "")), ReportSpec(format="%t=%S"), echo=lines.append)
    assert (lines, code) == (["a=neutral"], 0)


def test_report_unrecognized_state(make_checks) -> None:
    lines: list[str] = []
    code = report(make_checks(("a", "unknown_state", "")), ReportSpec(), echo=lines.append)
    assert (lines, code) == (["unknown_state"], 3)


def test_resolve_defaults_to_head() -> None:
    repo = FakeRepo()
    runner, _ = _runner(repo=repo)
    resolution = runner.resolve(None)
    assert resolution.sha == SHA
    assert resolution.project == Project("octo", "repo")
    assert repo.resolved == ["HEAD"]


def test_resolve_branch() -> None:
    repo = FakeRepo()
    runner, _ = _runner(repo=repo)
    runner.resolve("feature")
    assert repo.resolved == ["feature"]


def test_resolve_pull_request_id() -> None:
    repo = FakeRepo()
    runner, clients = _runner(repo=repo)
    resolution = runner.resolve("PR42")
    assert resolution.sha == PR_SHA
    assert clients[0].pull_requests == [(Project("octo", "repo"), "42")]
    assert repo.resolved == []


def test_resolve_pull_request_url_uses_its_project() -> None:
    runner, clients = _runner(settings=Settings(host="ghe.example.com"))
    resolution = runner.resolve("https://ghe.example.com/other/proj/pull/9")
    assert resolution.project == Project("other", "proj", "ghe.example.com")
    assert resolution.sha == PR_SHA
    assert clients[0].host == "ghe.example.com"


def test_resolve_url_without_pull_request() -> None:
    runner, _ = _runner()
    with pytest.raises(ResolutionError, match="does not contain a PR"):
        runner.resolve("https://github.com/other/proj/tree/main")


def test_resolve_unknown_revision() -> None:
    runner, _ = _runner()
    with pytest.raises(ResolutionError):
        runner.resolve("missing")


def test_run_noop_does_not_fetch() -> None:
    lines: list[str] = []
    runner, clients = _runner([CheckResult("a", "failure")])
    assert runner.run(None, ReportSpec(), noop=True, echo=lines.append) == 0
    assert lines == [f"Would request CI status for {SHA}"]
    assert clients == []


def test_run_fetches_and_reports() -> None:
    lines: list[str] = []
    runner, clients = _runner([CheckResult("a", "failure"), CheckResult("b", "success")])
    assert runner.run("main", ReportSpec(), echo=lines.append) == 1
    assert lines == ["failure"]
    assert clients[0].fetched == [(Project("octo", "repo"), SHA)]


def test_run_propagates_fetch_errors() -> None:
    def _factory(settings, host):
        raise FetchError("boom")

    runner = CIStatusRunner(Settings(), repo=FakeRepo(), client_factory=_factory)
    with pytest.raises(FetchError):
        runner.run(None, ReportSpec(), echo=lambda line: None)


def test_resolve_url_on_other_host_is_treated_as_a_revision() -> None:
    repo = FakeRepo()
    runner, clients = _runner(repo=repo)
    url = "https://ghe.example.com/other/proj/pull/9"
    resolution = runner.resolve(url)
    assert resolution.project == Project("octo", "repo")
    assert repo.resolved == [url]
    assert clients == []


REMOTES = (
    "origin\thttps://github.com/octo/repo.git (fetch)\n"
    "ghe\tgit@ghe.example.com:corp/tool.git (fetch)\n"
)


def _git(cmd, capture_output=False, text=False, timeout=None):
    if cmd[1:] == ["remote", "-v"]:
        return subprocess.CompletedProcess(cmd, 0, stdout=REMOTES, stderr="")
    return subprocess.CompletedProcess(cmd, 0, stdout=SHA + "\n", stderr="")


def test_configured_host_selects_the_remote() -> None:
    runner, _ = _runner(repo=LocalRepo(run=_git), settings=Settings(host="ghe.example.com"))
    resolution = runner.resolve(None)
    assert resolution.project == Project("corp", "tool", "ghe.example.com")


def test_default_host_selects_github_remote() -> None:
    runner, _ = _runner(repo=LocalRepo(run=_git))
    assert runner.resolve(None).project == Project("octo", "repo", "github.com")


def test_pull_request_id_uses_configured_host() -> None:
    runner, clients = _runner(repo=LocalRepo(run=_git), settings=Settings(host="ghe.example.com"))
    resolution = runner.resolve("PR3")
    assert resolution.sha == PR_SHA
    assert clients[0].host == "ghe.example.com"
    assert clients[0].pull_requests == [(Project("corp", "tool", "ghe.example.com"), "3")]
