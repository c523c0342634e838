from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


import pytest

from cistatus.status import CheckResult


@pytest.fixture
def make_checks():
    def _make(*rows: tuple[str, str, str]) -> list[CheckResult]:
        return [CheckResult(name=name, state=state, target_url=url) for name, state, url in rows]

    return _make


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path: Path):
    from cistatus.config import loader

    monkeypatch.setattr(loader, "DEFAULT_CONFIG_PATH", tmp_path / "missing" / "config.yaml")
    for name in (
        "CI_STATUS_CONFIG",
        "CI_STATUS_HOST",
        "CI_STATUS_API_URL",
        "CI_STATUS_TOKEN",
        "CI_STATUS_TIMEOUT",
        "GITHUB_TOKEN",
    ):
        monkeypatch.delenv(name, raising=False)
