"""Models for the monitor configuration file."""

from collections.abc import Sequence

from pydantic import Field, field_validator

from workflow_monitor.models.base import Model

DEFAULT_BRANCH = "main"
DEFAULT_EVENT = "schedule"


class WorkflowSpec(Model):
    """A single workflow to monitor within a repository."""

    name: str = Field(..., description="Workflow file name (e.g., 'ci.yml')")
    branch: str = Field(default=DEFAULT_BRANCH, description="Branch filter")
    event: str = Field(default=DEFAULT_EVENT, description="Trigger event filter")

    @field_validator("branch", mode="before")
    @classmethod
    def _default_branch(cls, value: str | None) -> str:
        return value or DEFAULT_BRANCH

    @field_validator("event", mode="before")
    @classmethod
    def _default_event(cls, value: str | None) -> str:
        return value or DEFAULT_EVENT


class RepositorySpec(Model):
    """A repository and the workflows monitored in it."""

    owner: str = Field(..., description="Repository owner (user or organization)")
    repo: str = Field(..., description="Repository name")
    workflows: Sequence[WorkflowSpec] = Field(
        ..., description="Workflows in config order"
    )

    @property
    def full_name(self) -> str:
        """Return the repository in owner/repo form."""
        return f"{self.owner}/{self.repo}"


class MonitorConfig(Model):
    """Complete monitor configuration."""

    repositories: Sequence[RepositorySpec] = Field(
        ..., description="Repositories in config order"
    )
