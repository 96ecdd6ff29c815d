"""Summaries, JSON reports and the HTML dashboard for monitoring results."""

import json
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from workflow_monitor.models.result import (
    CONCLUSION_FAILURE,
    CONCLUSION_SUCCESS,
    STATUS_ERROR,
    STATUS_IN_PROGRESS,
    WorkflowRunResult,
)

log = logging.getLogger(__name__)

DATA_PLACEHOLDER = "DATA_PLACEHOLDER"
DASHBOARD_FILENAME = "dashboard.html"
DEFAULT_TEMPLATE_PATH = Path(__file__).parent / "templates" / "dashboard-template.html"

BANNER_WIDTH = 80


def is_success(result: WorkflowRunResult) -> bool:
    """Check whether the run concluded successfully."""
    return result.conclusion == CONCLUSION_SUCCESS


def is_failure(result: WorkflowRunResult) -> bool:
    """Check whether the run concluded with a failure."""
    return result.conclusion == CONCLUSION_FAILURE


def is_in_progress(result: WorkflowRunResult) -> bool:
    """Check whether the run is still in progress."""
    return result.status == STATUS_IN_PROGRESS


def is_error(result: WorkflowRunResult) -> bool:
    """Check whether fetching the run failed."""
    return result.status == STATUS_ERROR


@dataclass(frozen=True, kw_only=True)
class SummaryStats:
    """Aggregate counts over a set of results.

    The categories do not partition ``total``: a queued run, for example,
    counts toward none of them.
    """

    total: int
    success: int
    failure: int
    in_progress: int
    errors: int

    @classmethod
    def from_results(cls, results: Sequence[WorkflowRunResult]) -> "SummaryStats":
        """Count results by outcome."""
        return cls(
            total=len(results),
            success=sum(1 for r in results if is_success(r)),
            failure=sum(1 for r in results if is_failure(r)),
            in_progress=sum(1 for r in results if is_in_progress(r)),
            errors=sum(1 for r in results if is_error(r)),
        )


@dataclass(frozen=True, kw_only=True)
class SummarySection:
    """A titled group of results in the text summary."""

    title: str
    predicate: Callable[[WorkflowRunResult], bool]


SUMMARY_SECTIONS: Sequence[SummarySection] = (
    SummarySection(title="❌ Failed Workflows", predicate=is_failure),
    SummarySection(title="🔄 In Progress", predicate=is_in_progress),
    SummarySection(title="✅ Successful Workflows", predicate=is_success),
    SummarySection(title="⚠️  Errors Encountered", predicate=is_error),
)


def has_failures(results: Sequence[WorkflowRunResult]) -> bool:
    """Check whether any monitored workflow concluded with a failure."""
    return any(is_failure(r) for r in results)


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an API timestamp, treating naive values as UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        log.debug("Unparseable timestamp: %s", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_utc(moment: datetime) -> str:
    """Render an instant as an absolute UTC time."""
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def format_relative_time(started_at: str | None, now: datetime) -> str:
    """Describe how long ago a run started, in whole days, hours or minutes."""
    started = parse_timestamp(started_at)
    if started is None:
        return "unknown"

    minutes = int((now - started).total_seconds() // 60)
    hours = minutes // 60
    days = hours // 24

    if days > 0:
        return _plural(days, "day")
    if hours > 0:
        return _plural(hours, "hour")
    if minutes > 0:
        return _plural(minutes, "minute")
    return "just now"


def format_entry(result: WorkflowRunResult, now: datetime) -> list[str]:
    """Render the lines describing a single result."""
    lines = [
        f"  • {result.full_name} ({result.workflow})",
        f"    Branch: {result.branch} | Event: {result.event}",
    ]

    if started := parse_timestamp(result.run_started_at):
        relative = format_relative_time(result.run_started_at, now)
        lines.append(f"    Started: {relative} ({format_utc(started)})")
    if result.run_number:
        lines.append(f"    Run: #{result.run_number}")
    if result.error:
        lines.append(f"    Error: {result.error}")
    if result.html_url:
        lines.append(f"    View: {result.html_url}")

    return lines


def format_summary(
    results: Sequence[WorkflowRunResult], now: datetime | None = None
) -> str:
    """Render a human-readable summary of monitoring results."""
    now = now or datetime.now(timezone.utc)
    stats = SummaryStats.from_results(results)

    lines = [
        "=" * BANNER_WIDTH,
        "GitHub Workflow Monitor Summary",
        f"Generated: {format_utc(now)}",
        "=" * BANNER_WIDTH,
        "",
        "📊 Summary Statistics:",
        f"  Total Workflows Monitored: {stats.total}",
        f"  ✅ Successful: {stats.success}",
        f"  ❌ Failed: {stats.failure}",
        f"  🔄 In Progress: {stats.in_progress}",
        f"  ⚠️  Errors: {stats.errors}",
    ]

    for section in SUMMARY_SECTIONS:
        grouped = [r for r in results if section.predicate(r)]
        if not grouped:
            continue

        lines.extend(["", f"{section.title}:", "-" * BANNER_WIDTH])
        for result in grouped:
            lines.extend(format_entry(result, now))

    return "\n".join(lines)


def results_payload(results: Sequence[WorkflowRunResult]) -> list[dict[str, Any]]:
    """Convert results into their JSON-ready form."""
    return [result.to_json() for result in results]


def render_dashboard(
    results: Sequence[WorkflowRunResult],
    template_path: Path = DEFAULT_TEMPLATE_PATH,
) -> str:
    """Embed the results into the dashboard template.

    The payload is compact JSON with every ``</`` written as ``<\\/`` so it
    cannot close the surrounding ``<script>`` element. It parses to the same
    values as the plain JSON but is not byte-identical to it.

    Raises:
        FileNotFoundError: If the template does not exist

    """
    template = template_path.read_text(encoding="utf-8")
    data = json.dumps(
        results_payload(results), separators=(",", ":"), ensure_ascii=False
    )
    # Keep the payload from terminating the surrounding <script> element
    data = data.replace("</", "<\\/")
    return template.replace(DATA_PLACEHOLDER, data, 1)


def write_results(results: Sequence[WorkflowRunResult], output_path: Path) -> Path:
    """Write the results as a pretty-printed JSON array."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(results_payload(results), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    return output_path


def write_dashboard(
    results: Sequence[WorkflowRunResult],
    output_path: Path,
    template_path: Path = DEFAULT_TEMPLATE_PATH,
) -> Path:
    """Write the HTML dashboard next to the JSON output file."""
    html = render_dashboard(results, template_path)
    dashboard_path = output_path.parent / DASHBOARD_FILENAME
    dashboard_path.parent.mkdir(parents=True, exist_ok=True)
    dashboard_path.write_text(html, encoding="utf-8")
    return dashboard_path
