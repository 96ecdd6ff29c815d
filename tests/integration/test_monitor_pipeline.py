"""End-to-end tests for the monitor pipeline against a mocked GitHub API."""

import json
import re
from pathlib import Path

import pytest
from aioresponses import aioresponses as aioresponses_cls

from workflow_monitor.cli import run
from workflow_monitor.testing.github.payloads import (
    error_response,
    workflow_run,
    workflow_runs_response,
)

API_BASE_URL = "http://github.test"


def _runs_url(owner: str, repo: str, workflow: str) -> re.Pattern[str]:
    return re.compile(
        rf"^{re.escape(API_BASE_URL)}/repos/{owner}/{repo}"
        rf"/actions/workflows/{re.escape(workflow)}/runs\?.*$"
    )


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Two repositories with one workflow each."""
    path = tmp_path / "monitor-config.yml"
    path.write_text(
        """
repositories:
  - owner: org-a
    repo: api
    workflows:
      - name: nightly.yml
  - owner: org-b
    repo: web
    workflows:
      - name: ci.yml
        branch: develop
        event: push
"""
    )
    return path


async def test_all_successful(
    config_path: Path,
    tmp_path: Path,
    aioresponses: aioresponses_cls,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Two successful workflows produce exit code 0 and both outputs."""
    aioresponses.get(
        _runs_url("org-a", "api", "nightly.yml"),
        payload=workflow_runs_response(workflow_runs=[workflow_run(run_id=1)]),
    )
    aioresponses.get(
        _runs_url("org-b", "web", "ci.yml"),
        payload=workflow_runs_response(workflow_runs=[workflow_run(run_id=2)]),
    )
    output_path = tmp_path / "site" / "workflow-results.json"

    exit_code = await run(
        config_path=config_path,
        output_path=output_path,
        token="test-token",
        api_base_url=API_BASE_URL,
        delay=0,
    )

    assert exit_code == 0
    results = json.loads(output_path.read_text(encoding="utf-8"))
    assert [(r["owner"], r["repo"], r["run_id"]) for r in results] == [
        ("org-a", "api", "1"),
        ("org-b", "web", "2"),
    ]
    assert results[1]["branch"] == "develop"
    assert results[1]["event"] == "push"

    dashboard = (tmp_path / "site" / "dashboard.html").read_text(encoding="utf-8")
    assert "DATA_PLACEHOLDER" not in dashboard
    assert '"run_id":"1"' in dashboard

    captured = capsys.readouterr()
    assert "✅ Successful: 2" in captured.out
    assert "❌ Failed: 0" in captured.out


async def test_failure_sets_exit_code(
    config_path: Path,
    tmp_path: Path,
    aioresponses: aioresponses_cls,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """A failed workflow yields exit code 1 and is listed as failed."""
    aioresponses.get(
        _runs_url("org-a", "api", "nightly.yml"),
        payload=workflow_runs_response(workflow_runs=[workflow_run()]),
    )
    aioresponses.get(
        _runs_url("org-b", "web", "ci.yml"),
        payload=workflow_runs_response(
            workflow_runs=[
                workflow_run(
                    conclusion="failure",
                    html_url="https://github.com/org-b/web/actions/runs/9",
                )
            ]
        ),
    )

    exit_code = await run(
        config_path=config_path,
        output_path=tmp_path / "results.json",
        api_base_url=API_BASE_URL,
        delay=0,
    )

    assert exit_code == 1
    assert (tmp_path / "results.json").exists()
    out = capsys.readouterr().out
    failed = out.split("Failed Workflows:")[1].split("Successful Workflows:")[0]
    assert "org-b/web (ci.yml)" in failed
    assert "org-a/api" not in failed
    assert "View: https://github.com/org-b/web/actions/runs/9" in failed


async def test_api_errors_are_recorded(
    config_path: Path, tmp_path: Path, aioresponses: aioresponses_cls
) -> None:
    """HTTP errors become error records and processing continues."""
    aioresponses.get(
        _runs_url("org-a", "api", "nightly.yml"),
        status=404,
        reason="Not Found",
        payload=error_response(),
    )
    aioresponses.get(
        _runs_url("org-b", "web", "ci.yml"), payload=workflow_runs_response()
    )
    output_path = tmp_path / "results.json"

    exit_code = await run(
        config_path=config_path,
        output_path=output_path,
        api_base_url=API_BASE_URL,
        delay=0,
    )

    assert exit_code == 0
    first, second = json.loads(output_path.read_text(encoding="utf-8"))
    assert first["status"] == "error"
    assert first["error"] == "HTTP 404: Not Found"
    assert second["status"] == "no_runs_found"
    assert "conclusion" not in second
    assert "error" not in second
