"""GitHub Actions API client module."""

from workflow_monitor.github.client import GitHubActionsClient, GitHubApiError
from workflow_monitor.github.config import GitHubClientConfig
from workflow_monitor.github.models import WorkflowRun, WorkflowRunsResponse

__all__ = [
    "GitHubActionsClient",
    "GitHubApiError",
    "GitHubClientConfig",
    "WorkflowRun",
    "WorkflowRunsResponse",
]
