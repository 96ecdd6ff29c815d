"""Load the monitor configuration from YAML or JSON files."""

import json
import logging
import re
from dataclasses import dataclass, replace
from enum import Enum, auto
from pathlib import Path

from workflow_monitor.models.config import (
    DEFAULT_BRANCH,
    DEFAULT_EVENT,
    MonitorConfig,
    RepositorySpec,
    WorkflowSpec,
)

log = logging.getLogger(__name__)

YAML_SUFFIXES = (".yml", ".yaml")


class ParserState(Enum):
    """Where the line scanner currently is in the config structure."""

    IDLE = auto()
    IN_REPO = auto()
    IN_WORKFLOWS = auto()


@dataclass(frozen=True, kw_only=True)
class ParseAccumulator:
    """Immutable scan state threaded through each parsed line.

    ``owner`` is None until the first ``owner:`` line opens a repository.
    Workflows collected while no repository is open are never emitted.
    """

    state: ParserState = ParserState.IDLE
    repositories: tuple[RepositorySpec, ...] = ()
    owner: str | None = None
    repo: str = ""
    workflows: tuple[WorkflowSpec, ...] = ()

    def flushed(self) -> tuple[RepositorySpec, ...]:
        """Return the repositories with the open one appended, if it has workflows."""
        if self.owner is None or not self.workflows:
            return self.repositories
        repository = RepositorySpec(
            owner=self.owner, repo=self.repo, workflows=list(self.workflows)
        )
        return (*self.repositories, repository)


def load_config(config_path: Path) -> MonitorConfig:
    """Load a monitor configuration file.

    Files with a YAML suffix are read with the line-oriented subset parser,
    anything else is parsed as JSON.

    Raises:
        json.JSONDecodeError: If a JSON config is malformed
        pydantic.ValidationError: If a JSON config does not match the schema

    """
    content = config_path.read_text(encoding="utf-8")

    if config_path.name.endswith(YAML_SUFFIXES):
        config = parse_simple_yaml(content)
        log.debug("Parsed YAML config %s", config_path)
    else:
        config = MonitorConfig.model_validate(json.loads(content))
        log.debug("Parsed JSON config %s", config_path)

    log.debug("Loaded %d repositories from config", len(config.repositories))
    return config


def parse_simple_yaml(content: str) -> MonitorConfig:
    """Parse the restricted YAML subset used by monitor config files.

    Only ``owner``, ``repo``, ``workflows``, ``name``, ``branch`` and ``event``
    lines are recognized. Indentation is not interpreted and unrecognized
    lines are ignored.
    """
    acc = ParseAccumulator()
    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        acc = parse_line(acc, trimmed)

    return MonitorConfig(repositories=list(acc.flushed()))


def parse_line(acc: ParseAccumulator, trimmed: str) -> ParseAccumulator:
    """Advance the scan state by one non-blank, non-comment line."""
    if trimmed.startswith(("- owner:", "owner:")):
        return ParseAccumulator(
            state=ParserState.IN_REPO,
            repositories=acc.flushed(),
            owner=_value(trimmed, "owner"),
        )

    if trimmed.startswith("repo:"):
        if acc.owner is None:
            return acc
        return replace(acc, repo=_value(trimmed, "repo"))

    if trimmed == "workflows:":
        return replace(acc, state=ParserState.IN_WORKFLOWS)

    if acc.state is not ParserState.IN_WORKFLOWS:
        return acc

    if trimmed.startswith(("- name:", "name:")):
        workflow = WorkflowSpec(name=_value(trimmed, "name"))
        return replace(acc, workflows=(*acc.workflows, workflow))

    if acc.workflows and trimmed.startswith("branch:"):
        branch = _value(trimmed, "branch") or DEFAULT_BRANCH
        return _update_last_workflow(acc, branch=branch)

    if acc.workflows and trimmed.startswith("event:"):
        event = _value(trimmed, "event") or DEFAULT_EVENT
        return _update_last_workflow(acc, event=event)

    return acc


def _update_last_workflow(acc: ParseAccumulator, **fields: str) -> ParseAccumulator:
    last = acc.workflows[-1].model_copy(update=fields)
    return replace(acc, workflows=(*acc.workflows[:-1], last))


def _value(trimmed: str, key: str) -> str:
    if match := re.search(rf"{key}:\s*(.+)", trimmed):
        return match.group(1).strip()
    return ""
