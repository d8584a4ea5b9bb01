"""Command-line front end for the dashboard.

Usage:
    python -m renovate_dashboard --org acme report
    python -m renovate_dashboard --org acme merge-group "Update dependency x to v2"
"""

import argparse
import asyncio
import logging
import os
import sys
from collections.abc import Sequence

from renovate_dashboard.config import (
    ConfigurationError,
    ConfigurationValidationError,
    DashboardConfig,
    LogLevel,
    load_config,
)
from renovate_dashboard.dashboard import DashboardController

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="renovate-dashboard",
        description="Review and bulk-merge Renovate PRs across an organization",
    )
    parser.add_argument("--config", help="Configuration file path")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=[level.value for level in LogLevel],
        help="Log level (overrides configuration)",
    )
    parser.add_argument("--org", help="GitHub organization to search")
    parser.add_argument(
        "--token", help="Personal Access Token (defaults to $GITHUB_TOKEN)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("report", help="List grouped PRs and workflow counts")

    close_group = subparsers.add_parser("close-group", help="Close every PR in a group")
    close_group.add_argument("title", help="Exact PR title of the group")

    merge_group = subparsers.add_parser(
        "merge-group", help="Approve and merge every passing PR in a group"
    )
    merge_group.add_argument("title", help="Exact PR title of the group")

    return parser


def configure_logging(config: DashboardConfig, level: str | None = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or config.logging.level.value).upper()),
        format=config.logging.format,
    )


def render_report(controller: DashboardController) -> str:
    """Plain-text view of the groups and the org-wide summary."""
    state = controller.state
    lines = []
    if not controller.groups:
        lines.append("No open Renovate pull requests found.")

    for group in controller.groups:
        counts = group.workflow_summary
        lines.append(
            f"[{group.aggregate_ci_status.value}] {group.title} "
            f"({len(group)} PRs: {counts.success} passing, {counts.pending} pending, "
            f"{counts.failed} failing)"
        )
        for pr in state.members(group):
            modified = " (modified)" if pr.is_modified else ""
            lines.append(
                f"    #{pr.number} {pr.ref.full_name} "
                f"ci={pr.ci_status.value} workflow={pr.workflow_status.value}"
                f"{modified} {pr.ref.html_url}"
            )

    summary = controller.workflow_summary
    lines.append(
        f"Organization workflows: {summary.success} passing, "
        f"{summary.pending} pending, {summary.failed} failing"
    )
    return "\n".join(lines)


async def run(args: argparse.Namespace, config: DashboardConfig) -> int:
    organization = args.org or config.organization or ""
    token = args.token or config.token or os.getenv("GITHUB_TOKEN", "")

    async with DashboardController(config) as controller:
        controller.set_credentials(organization, token)
        await controller.search()
        if controller.state.error:
            print(f"Error: {controller.state.error}", file=sys.stderr)
            return 1

        if args.command == "close-group":
            count = await controller.close_group(args.title)
            print(f"Closed {count} PRs")
        elif args.command == "merge-group":
            count = await controller.approve_and_merge_group(args.title)
            print(f"Merged {count} PRs")

        await controller.wait_for_summary()
        print(render_report(controller))

        if controller.state.error:
            print(f"Error: {controller.state.error}", file=sys.stderr)
            return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the dashboard CLI."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigurationValidationError as e:
        print("Invalid configuration:", file=sys.stderr)
        for line in e.field_messages() or [str(e)]:
            print(f"  {line}", file=sys.stderr)
        return 2
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    configure_logging(config, args.log_level)

    try:
        return asyncio.run(run(args, config))
    except KeyError as e:
        logger.error(f"No group titled {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
