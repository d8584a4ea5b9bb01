"""Observable state container shared by the orchestrators and the front end.

Pull requests live in a single arena keyed by PR id; groups keep ordered id
lists. Every mutation goes through this class so observers are notified once
per change and group aggregates stay derived from the current members.
"""

import logging
from collections.abc import Callable, Iterable

from renovate_dashboard.models import EnrichedPullRequest, PrGroup

from .aggregation import calculate_aggregate_status, calculate_workflow_summary

logger = logging.getLogger(__name__)

StateObserver = Callable[["DashboardState"], None]


class DashboardState:
    """Explicit state container with change notification."""

    def __init__(self) -> None:
        self.organization: str = ""
        self.token: str = ""
        self.groups: list[PrGroup] = []
        self.pull_requests: dict[int, EnrichedPullRequest] = {}
        self.expanded_pr_ids: set[int] = set()
        self.error: str | None = None
        self.is_loading: bool = False
        self.searched: bool = False
        self.workflow_refresh_tick: int = 0
        self._observers: list[StateObserver] = []

    # Observation

    def subscribe(self, observer: StateObserver) -> Callable[[], None]:
        """Register an observer; returns a callable that unregisters it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def notify(self) -> None:
        """Tell every observer the state changed."""
        for observer in list(self._observers):
            observer(self)

    # Queries

    @property
    def form_valid(self) -> bool:
        """Both organization and credential are filled in."""
        return self.organization.strip() != "" and self.token.strip() != ""

    def members(self, group: PrGroup) -> list[EnrichedPullRequest]:
        """Current member records of ``group`` in display order."""
        return [self.pull_requests[pr_id] for pr_id in group.pr_ids]

    def get_group(self, title: str) -> PrGroup:
        """Look up a group by exact title.

        Raises:
            KeyError: If no group has that title
        """
        for group in self.groups:
            if group.title == title:
                return group
        raise KeyError(title)

    def get_pull_request(self, pr_id: int) -> EnrichedPullRequest:
        """Look up a pull request by id.

        Raises:
            KeyError: If the PR is not (or no longer) on the dashboard
        """
        return self.pull_requests[pr_id]

    # Mutations

    def set_credentials(self, organization: str, token: str) -> None:
        self.organization = organization
        self.token = token
        self.notify()

    def set_error(self, message: str | None) -> None:
        """Overwrite the single error slot."""
        self.error = message
        self.notify()

    def set_loading(self, is_loading: bool) -> None:
        self.is_loading = is_loading
        self.notify()

    def begin_search(self) -> None:
        """Reset results before a new search runs."""
        self.is_loading = True
        self.error = None
        self.searched = True
        self.groups = []
        self.pull_requests = {}
        self.notify()

    def refresh_group(self, group: PrGroup) -> None:
        """Recompute a group's aggregate fields from its current members."""
        members = self.members(group)
        group.aggregate_ci_status = calculate_aggregate_status(
            pr.ci_status for pr in members
        )
        group.workflow_summary = calculate_workflow_summary(
            pr.workflow_status for pr in members
        )

    def replace_groups(
        self, groups: Iterable[PrGroup], pull_requests: Iterable[EnrichedPullRequest]
    ) -> None:
        """Swap in a fresh search result and clear the expanded-PR selection."""
        self.pull_requests = {pr.id: pr for pr in pull_requests}
        self.groups = list(groups)
        for group in self.groups:
            self.refresh_group(group)
        self.expanded_pr_ids = set()
        self.notify()

    def remove_pull_request(self, pr_id: int) -> None:
        """Drop a closed/merged PR, removing its group once it is empty."""
        self.pull_requests.pop(pr_id, None)

        remaining: list[PrGroup] = []
        for group in self.groups:
            if pr_id in group.pr_ids:
                group.pr_ids = [member for member in group.pr_ids if member != pr_id]
                if not group.pr_ids:
                    logger.debug(f"Group '{group.title}' is empty, removing it")
                    continue
                self.refresh_group(group)
            remaining.append(group)
        self.groups = remaining

        self.expanded_pr_ids.discard(pr_id)
        self.notify()

    def bump_refresh_tick(self) -> int:
        """Advance the workflow-summary refresh counter."""
        self.workflow_refresh_tick += 1
        self.notify()
        return self.workflow_refresh_tick

    def toggle_group(self, title: str) -> None:
        """Expand or collapse a group; collapsing also collapses its members."""
        group = self.get_group(title)
        group.is_expanded = not group.is_expanded
        if not group.is_expanded:
            self.expanded_pr_ids.difference_update(group.pr_ids)
        self.notify()

    def toggle_pull_request(self, pr_id: int) -> None:
        """Flip a PR's membership in the expanded selection."""
        if pr_id in self.expanded_pr_ids:
            self.expanded_pr_ids.remove(pr_id)
        else:
            self.expanded_pr_ids.add(pr_id)
        self.notify()
