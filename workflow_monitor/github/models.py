"""Pydantic models for GitHub Actions API responses."""

from collections.abc import Sequence

from pydantic import BaseModel


class WorkflowRun(BaseModel):
    """A workflow run from the GitHub Actions API.

    Timestamps are kept as the API sends them so they can be reported verbatim.
    """

    id: int | None = None
    run_number: int | None = None
    status: str
    conclusion: str | None = None
    run_started_at: str | None = None
    created_at: str | None = None
    html_url: str | None = None
    head_sha: str | None = None


class WorkflowRunsResponse(BaseModel):
    """Response from the list workflow runs API.

    The API reports problems such as unknown workflows through a top-level
    ``message`` instead of a run list.
    """

    message: str | None = None
    total_count: int | None = None
    workflow_runs: Sequence[WorkflowRun] | None = None
