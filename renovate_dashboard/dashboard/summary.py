"""Organization-wide workflow summary, recomputed independently of the groups.

The summary runs its own discovery query and its own per-PR lookups, so it
shares no PR objects with the dashboard state. It is advisory: failures only
ever degrade counts, they are never raised.
"""

import asyncio
import logging
from typing import Any

from renovate_dashboard.github.client import GitHubClient
from renovate_dashboard.models import CheckRun, CIStatus, WorkflowSummary

from .aggregation import calculate_workflow_summary
from .search import DEFAULT_BOT_AUTHOR, MAX_PAGE_SIZE, parse_repository_url
from .status import map_combined_status, status_from_check_runs

logger = logging.getLogger(__name__)


class WorkflowSummaryAggregator:
    """Counts success/pending/failed workflows across an organization's bot PRs."""

    def __init__(
        self,
        github_client: GitHubClient,
        bot_author: str = DEFAULT_BOT_AUTHOR,
        per_page: int = MAX_PAGE_SIZE,
    ):
        """Initialize aggregator.

        Args:
            github_client: GitHub API client
            bot_author: Search ``author:`` qualifier
            per_page: Size of the single result page that is read
        """
        self.github_client = github_client
        self.bot_author = bot_author
        self.per_page = min(per_page, MAX_PAGE_SIZE)
        self.summary = WorkflowSummary()
        self._task: asyncio.Task[WorkflowSummary] | None = None
        self._tasks: set[asyncio.Task[WorkflowSummary]] = set()
        self._in_flight = 0

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    def on_refresh_tick(
        self, organization: str, token: str, tick: int
    ) -> asyncio.Task[WorkflowSummary] | None:
        """Schedule a refresh when all inputs are present.

        A tick of zero means no search has completed yet, so nothing is
        fetched. An unfinished refresh from an earlier tick is cancelled so
        its counts never replace newer ones. Must be called from a running
        event loop.

        Returns:
            The scheduled task, or None when the inputs are incomplete
        """
        if not organization or not token or tick <= 0:
            return None
        if self._task is not None and not self._task.done():
            logger.debug(
                f"Cancelling superseded workflow summary refresh (tick {tick})"
            )
            self._task.cancel()

        task = asyncio.create_task(self.refresh(organization))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._task = task
        return task

    async def wait(self) -> None:
        """Wait until every scheduled refresh has finished or been cancelled."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def refresh(self, organization: str) -> WorkflowSummary:
        """Recompute and store the summary."""
        self._in_flight += 1
        try:
            self.summary = await self.get_summary(organization)
        finally:
            self._in_flight -= 1
        return self.summary

    async def get_summary(self, organization: str) -> WorkflowSummary:
        """Count workflow statuses for every bot PR in the organization.

        Returns:
            The counts, or an all-zero summary if the batch fails
        """
        if not organization:
            return WorkflowSummary()

        try:
            search_result = await self.github_client.search_pull_requests(
                self.bot_author, organization, per_page=self.per_page
            )
            items: list[dict[str, Any]] = search_result.get("items") or []
            if not items:
                return WorkflowSummary()

            statuses = await asyncio.gather(
                *(self._workflow_status(item) for item in items)
            )
            summary = calculate_workflow_summary(statuses)

        except Exception as e:
            logger.error(f"Failed to fetch workflow summary for {organization}: {e}")
            return WorkflowSummary()

        logger.debug(
            f"Workflow summary for {organization}: {summary.success} success, "
            f"{summary.pending} pending, {summary.failed} failed"
        )
        return summary

    async def _workflow_status(self, item: dict[str, Any]) -> CIStatus:
        """Workflow status of one search item; unknown on any failure."""
        parsed = parse_repository_url(item.get("repository_url", ""))
        if parsed is None:
            return CIStatus.UNKNOWN
        owner, repo = parsed
        number = item.get("number")

        try:
            pr_data = await self.github_client.get_pull(owner, repo, number)
            head_sha = pr_data["head"]["sha"]

            checks_data = await self.github_client.list_check_runs(
                owner, repo, head_sha
            )
            check_runs = [
                CheckRun.from_api(check)
                for check in checks_data.get("check_runs") or []
            ]

            if not check_runs:
                status_data = await self.github_client.get_combined_status(
                    owner, repo, head_sha
                )
                return map_combined_status(status_data.get("state"))

            return status_from_check_runs(check_runs) or CIStatus.UNKNOWN

        except Exception as e:
            logger.warning(f"Error fetching workflow status for PR {number}: {e}")
            return CIStatus.UNKNOWN
