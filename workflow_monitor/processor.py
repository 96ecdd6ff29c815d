"""Turn a GitHub API response into a workflow run result."""

import logging

from workflow_monitor.github.client import GitHubActionsClient
from workflow_monitor.github.models import WorkflowRunsResponse
from workflow_monitor.models.config import WorkflowSpec
from workflow_monitor.models.result import (
    NO_CONCLUSION,
    STATUS_ERROR,
    STATUS_NO_RUNS_FOUND,
    WorkflowRunResult,
    utc_timestamp,
)

log = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown error"


async def process_workflow(
    client: GitHubActionsClient,
    owner: str,
    repo: str,
    workflow: WorkflowSpec,
) -> WorkflowRunResult:
    """Fetch the latest run of a workflow and summarize it.

    Never raises: transport, API and decoding failures are reported as a
    result with ``status="error"``.
    """
    identity = {
        "owner": owner,
        "repo": repo,
        "workflow": workflow.name,
        "branch": workflow.branch,
        "event": workflow.event,
        "timestamp": utc_timestamp(),
    }

    try:
        data = await client.fetch_workflow_runs(
            owner, repo, workflow.name, branch=workflow.branch, event=workflow.event
        )
        return build_result(identity, WorkflowRunsResponse.model_validate(data))
    except Exception as e:
        log.warning(
            "Failed to fetch %s/%s (%s): %s", owner, repo, workflow.name, e
        )
        return WorkflowRunResult(
            **identity, status=STATUS_ERROR, error=str(e) or UNKNOWN_ERROR
        )


def build_result(
    identity: dict[str, str], response: WorkflowRunsResponse
) -> WorkflowRunResult:
    """Build the result for a decoded list workflow runs response."""
    if response.message:
        return WorkflowRunResult(
            **identity, status=STATUS_ERROR, error=response.message
        )

    if not response.workflow_runs:
        return WorkflowRunResult(**identity, status=STATUS_NO_RUNS_FOUND)

    run = response.workflow_runs[0]
    return WorkflowRunResult(
        **identity,
        run_id=None if run.id is None else str(run.id),
        run_number=None if run.run_number is None else str(run.run_number),
        status=run.status,
        conclusion=run.conclusion or NO_CONCLUSION,
        run_started_at=run.run_started_at or run.created_at,
        html_url=run.html_url,
        head_sha=run.head_sha,
    )
