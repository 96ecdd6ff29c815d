"""CLI entry point for the GitHub workflow monitor."""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

from pydantic import SecretStr

from workflow_monitor.github.config import DEFAULT_API_BASE_URL, GitHubClientConfig
from workflow_monitor.orchestrator import DEFAULT_DELAY, monitor_workflows
from workflow_monitor.report import (
    format_summary,
    has_failures,
    write_dashboard,
    write_results,
)

TOKEN_ENV_VAR = "GITHUB_TOKEN"
DEFAULT_CONFIG_PATH = Path("monitor-config.yml")
DEFAULT_OUTPUT_PATH = Path("results.json")


async def run(
    config_path: Path,
    output_path: Path,
    token: str | None = None,
    api_base_url: str = DEFAULT_API_BASE_URL,
    delay: float = DEFAULT_DELAY,
) -> int:
    """Monitor workflows, write reports and return exit code."""
    log = logging.getLogger("workflow_monitor")

    if not config_path.exists():
        log.error("Configuration file not found: %s", config_path)
        return 1

    if not token:
        log.warning("No GitHub token provided. Rate limits will be restricted.")
        log.warning("Set %s environment variable or use --token flag.", TOKEN_ENV_VAR)

    client_config = GitHubClientConfig(
        token=SecretStr(token) if token else None,
        api_base_url=api_base_url,
    )

    try:
        results = await monitor_workflows(config_path, client_config, delay=delay)

        write_results(results, output_path)
        log.info("Results saved to: %s", output_path)

        dashboard_path = write_dashboard(results, output_path)
        log.info("Dashboard saved to: %s", dashboard_path)
    except Exception:
        log.exception("Workflow monitoring failed")
        return 1

    print(format_summary(results))

    return 1 if has_failures(results) else 0


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Report the latest GitHub Actions run of configured workflows",
        epilog=f"Environment variables:\n  {TOKEN_ENV_VAR}  GitHub API token",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Path to configuration file, YAML or JSON (default: %(default)s)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT_PATH,
        help="Path to output JSON file (default: %(default)s)",
    )
    parser.add_argument(
        "--token",
        default=os.environ.get(TOKEN_ENV_VAR),
        help=f"GitHub API token (default: {TOKEN_ENV_VAR} env var)",
    )
    parser.add_argument(
        "--api-base-url",
        default=DEFAULT_API_BASE_URL,
        help="GitHub API base URL (default: %(default)s)",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=DEFAULT_DELAY,
        help="Seconds to wait between API calls (default: %(default)s)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(
        run(
            config_path=args.config.resolve(),
            output_path=args.output.resolve(),
            token=args.token,
            api_base_url=args.api_base_url,
            delay=args.delay,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
