"""Per-PR enrichment with CI status reconciliation.

Each pull request needs four independent reads: the PR detail (commit count
and head SHA), the repository (allowed merge methods), the combined commit
status and the check runs for the head commit. Check runs, when present, are
authoritative; the combined status is the fallback.
"""

import logging

from renovate_dashboard.github.client import GitHubClient
from renovate_dashboard.models import CheckRun, CIStatus, EnrichedPullRequest

from .status import map_combined_status, status_from_check_runs

logger = logging.getLogger(__name__)


class PrEnricher:
    """Fills in the enrichment fields of an EnrichedPullRequest in place."""

    def __init__(self, github_client: GitHubClient):
        """Initialize enricher.

        Args:
            github_client: GitHub API client
        """
        self.github_client = github_client

    async def enrich(self, pr: EnrichedPullRequest) -> None:
        """Fetch and reconcile CI data for one PR.

        Never raises: any failure is logged and the PR's statuses fall back
        to unknown with no check runs, leaving other PRs unaffected.

        Args:
            pr: Pull request to update in place
        """
        owner, repo = pr.repo_owner, pr.repo_name
        try:
            pr_data = await self.github_client.get_pull(owner, repo, pr.number)
            pr.commits = int(pr_data["commits"])
            pr.head_sha = pr_data["head"]["sha"]

            repo_data = await self.github_client.get_repo(owner, repo)
            pr.allow_squash_merge = bool(repo_data.get("allow_squash_merge"))
            pr.allow_merge_commit = bool(repo_data.get("allow_merge_commit"))
            pr.allow_rebase_merge = bool(repo_data.get("allow_rebase_merge"))

            status_data = await self.github_client.get_combined_status(
                owner, repo, pr.head_sha
            )
            pr.ci_status = map_combined_status(status_data.get("state"))

            checks_data = await self.github_client.list_check_runs(
                owner, repo, pr.head_sha
            )
            pr.check_runs = [
                CheckRun.from_api(check)
                for check in checks_data.get("check_runs") or []
            ]
            self._reconcile(pr)

            logger.debug(
                f"Enriched {pr.ref.full_name}#{pr.number}: ci={pr.ci_status.value} "
                f"workflow={pr.workflow_status.value} checks={len(pr.check_runs)}"
            )

        except Exception as e:
            logger.error(f"Failed to fetch details for PR #{pr.number}: {e}")
            pr.reset_status()

    @staticmethod
    def _reconcile(pr: EnrichedPullRequest) -> None:
        """Let check runs override the combined status when there are any."""
        if not pr.check_runs:
            pr.workflow_status = pr.ci_status
            return

        derived = status_from_check_runs(pr.check_runs)
        if derived is None:
            pr.workflow_status = CIStatus.UNKNOWN
            return

        pr.ci_status = derived
        pr.workflow_status = derived
