"""Discovery of bot-authored pull requests and their grouping by title."""

import asyncio
import logging
import time
from typing import Any

from renovate_dashboard.github.client import GitHubClient
from renovate_dashboard.models import EnrichedPullRequest, PrGroup, PullRequestRef

from .enricher import PrEnricher
from .state import DashboardState

logger = logging.getLogger(__name__)

DEFAULT_BOT_AUTHOR = "app/renovate"
MAX_PAGE_SIZE = 100


def parse_repository_url(repository_url: str) -> tuple[str, str] | None:
    """Extract ``(owner, repo)`` from a search item's ``repository_url``.

    The last two path segments are used, e.g.
    ``https://api.github.com/repos/acme/widgets`` gives ``("acme", "widgets")``.

    Returns:
        Owner and name, or None when either segment is missing or empty
    """
    if not repository_url:
        return None
    parts = repository_url.split("/")
    if len(parts) < 2:
        return None
    owner, repo_name = parts[-2], parts[-1]
    if not owner or not repo_name:
        return None
    return owner, repo_name


def group_by_title(refs: list[PullRequestRef]) -> list[PrGroup]:
    """Bucket references by exact title, keeping first-seen order."""
    groups: dict[str, PrGroup] = {}
    for ref in refs:
        group = groups.get(ref.title)
        if group is None:
            group = groups[ref.title] = PrGroup(title=ref.title)
        group.pr_ids.append(ref.id)
    return list(groups.values())


class SearchAndGroupOrchestrator:
    """Runs one search cycle: discover, group, enrich, aggregate, publish."""

    def __init__(
        self,
        github_client: GitHubClient,
        state: DashboardState,
        enricher: PrEnricher | None = None,
        bot_author: str = DEFAULT_BOT_AUTHOR,
        per_page: int = MAX_PAGE_SIZE,
    ):
        """Initialize orchestrator.

        Args:
            github_client: GitHub API client carrying the user's credential
            state: Shared dashboard state the results are published into
            enricher: Per-PR enricher (built from the client when omitted)
            bot_author: Search ``author:`` qualifier
            per_page: Size of the single result page that is read
        """
        self.github_client = github_client
        self.state = state
        self.enricher = enricher or PrEnricher(github_client)
        self.bot_author = bot_author
        self.per_page = min(per_page, MAX_PAGE_SIZE)

    async def discover(self, organization: str) -> list[PullRequestRef]:
        """Run the discovery query and parse the result items.

        Raises:
            GitHubError: If the search request fails
        """
        search_result = await self.github_client.search_pull_requests(
            self.bot_author, organization, per_page=self.per_page
        )
        items: list[dict[str, Any]] = search_result.get("items") or []

        total_count = search_result.get("total_count", len(items))
        if isinstance(total_count, int) and total_count > len(items):
            logger.warning(
                f"Search for {organization} matched {total_count} PRs, "
                f"only the first {len(items)} are shown"
            )

        refs = []
        for item in items:
            parsed = parse_repository_url(item.get("repository_url", ""))
            if parsed is None:
                logger.debug(
                    f"Skipping PR #{item.get('number')}: unparseable repository "
                    f"URL {item.get('repository_url')!r}"
                )
                continue
            refs.append(PullRequestRef.from_search_item(item, *parsed))
        return refs

    async def search(self, organization: str) -> list[PrGroup]:
        """Discover, group and enrich the organization's bot PRs.

        On success the state's groups are replaced wholesale, the expanded
        selection is cleared and the refresh tick is bumped. If the discovery
        query fails the state is left untouched.

        Args:
            organization: Organization login

        Returns:
            The new list of groups

        Raises:
            GitHubError: If the discovery query fails
        """
        start_time = time.time()
        refs = await self.discover(organization)

        groups = group_by_title(refs)
        pull_requests = [EnrichedPullRequest(ref=ref) for ref in refs]

        # Launch every enrichment before awaiting any of them
        await asyncio.gather(*(self.enricher.enrich(pr) for pr in pull_requests))

        self.state.replace_groups(groups, pull_requests)
        self.state.bump_refresh_tick()

        logger.info(
            f"Search for {organization} found {len(pull_requests)} PRs in "
            f"{len(groups)} groups in {time.time() - start_time:.2f}s"
        )
        return self.state.groups
