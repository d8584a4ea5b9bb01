"""Single and group close / approve-and-merge actions.

Group actions work on a snapshot of the member list and process members one
at a time; a failure on one member is recorded and the next member is still
attempted.
"""

import logging

from renovate_dashboard.github.client import GitHubClient
from renovate_dashboard.models import (
    CIStatus,
    EnrichedPullRequest,
    PrGroup,
    ProcessingState,
)

from .exceptions import FailingWorkflowError, NoEligiblePullRequestsError
from .merge import resolve_merge_method
from .state import DashboardState

logger = logging.getLogger(__name__)


class BulkActionOrchestrator:
    """Mutating PR actions against GitHub and the shared dashboard state."""

    def __init__(self, github_client: GitHubClient, state: DashboardState):
        """Initialize orchestrator.

        Args:
            github_client: GitHub API client
            state: Shared dashboard state
        """
        self.github_client = github_client
        self.state = state

    async def close_pull_request(
        self, pr: EnrichedPullRequest, refresh_summary: bool = True
    ) -> bool:
        """Close a PR without merging.

        Args:
            pr: Pull request to close
            refresh_summary: Bump the refresh tick on success

        Returns:
            True if the PR was closed and removed from the dashboard
        """
        self._begin(pr)
        try:
            await self.github_client.close_pull(pr.repo_owner, pr.repo_name, pr.number)
        except Exception as e:
            self._fail(pr, f"Failed to close PR #{pr.number}: {e}")
            return False

        logger.info(f"Closed {pr.ref.full_name}#{pr.number}")
        self._complete(pr, refresh_summary)
        return True

    async def approve_and_merge_pull_request(
        self, pr: EnrichedPullRequest, refresh_summary: bool = True
    ) -> bool:
        """Approve a PR, then merge it with the repository's preferred method.

        A PR whose workflow status is failure is refused before any request
        is sent.

        Args:
            pr: Pull request to merge
            refresh_summary: Bump the refresh tick on success

        Returns:
            True if the PR was merged and removed from the dashboard
        """
        self._begin(pr)
        try:
            if pr.workflow_status == CIStatus.FAILURE:
                raise FailingWorkflowError(pr.number)

            await self.github_client.approve_pull(
                pr.repo_owner, pr.repo_name, pr.number
            )

            merge_method = resolve_merge_method(
                pr.commits,
                allow_rebase=pr.allow_rebase_merge,
                allow_squash=pr.allow_squash_merge,
                allow_merge=pr.allow_merge_commit,
                pr_number=pr.number,
            )

            await self.github_client.merge_pull(
                pr.repo_owner, pr.repo_name, pr.number, merge_method.value
            )
        except Exception as e:
            self._fail(pr, f"Failed to merge PR #{pr.number}: {e}")
            return False

        logger.info(f"Merged {pr.ref.full_name}#{pr.number}")
        self._complete(pr, refresh_summary)
        return True

    async def close_group(self, group: PrGroup) -> int:
        """Close every member of a group, one after another.

        Returns:
            Number of PRs closed
        """
        snapshot = self.state.members(group)
        if not snapshot:
            return 0

        logger.info(f"Closing {len(snapshot)} PRs in group '{group.title}'")
        closed = 0
        for pr in snapshot:
            if not self._is_idle(pr):
                continue
            if await self.close_pull_request(pr, refresh_summary=False):
                closed += 1

        self.state.bump_refresh_tick()
        return closed

    async def approve_and_merge_group(self, group: PrGroup) -> int:
        """Approve and merge every member without a failing workflow.

        Members are merged strictly one at a time. If every member has a
        failing workflow the error slot is set and nothing is sent.

        Returns:
            Number of PRs merged
        """
        snapshot = self.state.members(group)
        if not snapshot:
            return 0

        eligible = [pr for pr in snapshot if pr.workflow_status != CIStatus.FAILURE]
        if not eligible:
            error = NoEligiblePullRequestsError(group.title)
            logger.warning(f"Group '{group.title}': {error}")
            self.state.set_error(str(error))
            return 0

        logger.info(
            f"Merging {len(eligible)} of {len(snapshot)} PRs in group '{group.title}'"
        )
        merged = 0
        for pr in eligible:
            if not self._is_idle(pr):
                continue
            if await self.approve_and_merge_pull_request(pr, refresh_summary=False):
                merged += 1

        self.state.bump_refresh_tick()
        return merged

    def _begin(self, pr: EnrichedPullRequest) -> None:
        pr.transition_to(ProcessingState.PROCESSING)
        pr.last_error = None
        self.state.notify()

    def _fail(self, pr: EnrichedPullRequest, message: str) -> None:
        logger.warning(message)
        pr.transition_to(ProcessingState.IDLE)
        pr.last_error = message
        self.state.set_error(message)

    def _complete(self, pr: EnrichedPullRequest, refresh_summary: bool) -> None:
        pr.transition_to(ProcessingState.REMOVED)
        self.state.remove_pull_request(pr.id)
        if refresh_summary:
            self.state.bump_refresh_tick()

    @staticmethod
    def _is_idle(pr: EnrichedPullRequest) -> bool:
        if pr.processing_state == ProcessingState.IDLE:
            return True
        logger.debug(f"Skipping PR #{pr.number}: {pr.processing_state.value}")
        return False
