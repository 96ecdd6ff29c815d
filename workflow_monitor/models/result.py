"""Models for workflow monitoring results."""

from datetime import datetime, timezone
from typing import Any

from workflow_monitor.models.base import Model

STATUS_IN_PROGRESS = "in_progress"
STATUS_NO_RUNS_FOUND = "no_runs_found"
STATUS_ERROR = "error"

CONCLUSION_SUCCESS = "success"
CONCLUSION_FAILURE = "failure"
NO_CONCLUSION = "n/a"


def utc_timestamp(moment: datetime | None = None) -> str:
    """Render an instant as ISO-8601 UTC with millisecond precision."""
    moment = moment or datetime.now(timezone.utc)
    stamp = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


class WorkflowRunResult(Model):
    """Latest-run outcome for one (repository, workflow) pair.

    Identity fields are always set. The remaining fields depend on the case:
    a run was found, no run exists (``status="no_runs_found"``), or the fetch
    failed (``status="error"`` with ``error`` set).
    """

    owner: str
    repo: str
    workflow: str
    branch: str
    event: str
    timestamp: str
    run_id: str | None = None
    run_number: str | None = None
    status: str
    conclusion: str | None = None
    run_started_at: str | None = None
    html_url: str | None = None
    head_sha: str | None = None
    error: str | None = None

    @property
    def full_name(self) -> str:
        """Return the repository in owner/repo form."""
        return f"{self.owner}/{self.repo}"

    def to_json(self) -> dict[str, Any]:
        """Serialize the result, omitting fields that do not apply."""
        return self.model_dump(exclude_none=True)
