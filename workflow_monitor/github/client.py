"""GitHub Actions API client for reading workflow runs."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

import aiohttp

from workflow_monitor.github.config import GitHubClientConfig

log = logging.getLogger(__name__)


class GitHubApiError(RuntimeError):
    """Raised when the GitHub API answers with a non-2xx status."""

    def __init__(self, status: int, reason: str | None) -> None:
        self.status = status
        self.reason = reason or ""
        super().__init__(f"HTTP {status}: {self.reason}")


@dataclass(frozen=True, kw_only=True)
class GitHubActionsClient:
    """Read-only client for the GitHub Actions workflow runs API."""

    config: GitHubClientConfig
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: GitHubClientConfig
    ) -> AsyncGenerator["GitHubActionsClient", None]:
        """Create client with managed session lifecycle."""
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": config.user_agent,
        }
        if config.token is not None:
            headers["Authorization"] = f"Bearer {config.token.get_secret_value()}"

        async with aiohttp.ClientSession(
            base_url=config.api_base_url,
            headers=headers,
        ) as session:
            yield cls(config=config, session=session)

    async def fetch_workflow_runs(
        self,
        owner: str,
        repo: str,
        workflow: str,
        branch: str | None = None,
        event: str | None = None,
    ) -> Any:
        """Fetch the most recent run of a workflow.

        Args:
            owner: Repository owner
            repo: Repository name
            workflow: Workflow file name or ID
            branch: Only consider runs on this branch
            event: Only consider runs triggered by this event

        Returns:
            The decoded JSON body of the list workflow runs API

        Raises:
            GitHubApiError: If the API responds with a non-2xx status

        """
        url = f"repos/{owner}/{repo}/actions/workflows/{workflow}/runs"
        params = {"per_page": "1"}
        if event:
            params["event"] = event
        if branch:
            params["branch"] = branch

        log.info("  Fetching %s...", workflow)

        async with self.session.get(url, params=params) as response:
            if response.status // 100 != 2:
                raise GitHubApiError(response.status, response.reason)
            return await response.json()
