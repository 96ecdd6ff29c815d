"""Monitor orchestrator for fetching the latest run of every configured workflow."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from workflow_monitor.config_loader import load_config
from workflow_monitor.github.client import GitHubActionsClient
from workflow_monitor.github.config import GitHubClientConfig
from workflow_monitor.models.config import MonitorConfig
from workflow_monitor.models.result import WorkflowRunResult
from workflow_monitor.processor import process_workflow

log = logging.getLogger(__name__)

DEFAULT_DELAY = 1.0


@dataclass(frozen=True, kw_only=True)
class WorkflowMonitor:
    """Fetches workflow statuses one at a time with a fixed throttle delay."""

    client: GitHubActionsClient
    delay: float = DEFAULT_DELAY

    async def run(self, config: MonitorConfig) -> Sequence[WorkflowRunResult]:
        """Process every configured workflow sequentially.

        Args:
            config: Repositories and workflows to monitor

        Returns:
            One result per (repository, workflow) pair, in config order

        """
        results: list[WorkflowRunResult] = []

        log.info("Monitoring %d repositories...", len(config.repositories))

        for repository in config.repositories:
            log.info("Processing %s...", repository.full_name)

            for workflow in repository.workflows:
                result = await process_workflow(
                    self.client, repository.owner, repository.repo, workflow
                )
                results.append(result)

                # Client-side throttle against API rate limits
                await asyncio.sleep(self.delay)

        return results


async def monitor_workflows(
    config_path: Path,
    client_config: GitHubClientConfig,
    delay: float = DEFAULT_DELAY,
) -> Sequence[WorkflowRunResult]:
    """Load the config file and fetch the latest run of every workflow in it."""
    config = load_config(config_path)

    async with GitHubActionsClient.from_config(client_config) as client:
        monitor = WorkflowMonitor(client=client, delay=delay)
        return await monitor.run(config)
