"""The single owning controller behind the dashboard front end.

Views render from ``controller.state`` and call the controller's methods in
response to user input; nothing else mutates the state.
"""

import logging
from collections.abc import Callable

from renovate_dashboard.config.models import DashboardConfig
from renovate_dashboard.github.auth import PersonalAccessTokenAuth
from renovate_dashboard.github.client import GitHubClient
from renovate_dashboard.models import PrGroup, WorkflowSummary

from .actions import BulkActionOrchestrator
from .search import SearchAndGroupOrchestrator
from .state import DashboardState
from .summary import WorkflowSummaryAggregator

logger = logging.getLogger(__name__)

MISSING_INPUT_MESSAGE = "Organization and Personal Access Token are required."
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."

ClientFactory = Callable[[str], GitHubClient]


class DashboardController:
    """Wires the orchestrators to one shared DashboardState."""

    def __init__(
        self,
        config: DashboardConfig | None = None,
        client_factory: ClientFactory | None = None,
    ) -> None:
        """Initialize controller.

        Args:
            config: Dashboard configuration (defaults when omitted)
            client_factory: Builds a GitHub client for a credential
        """
        self.config = config or DashboardConfig()
        self.state = DashboardState()
        self._client_factory = client_factory or self._build_client

        self._client: GitHubClient | None = None
        self._client_token: str | None = None
        self._search: SearchAndGroupOrchestrator | None = None
        self._actions: BulkActionOrchestrator | None = None
        self._summary: WorkflowSummaryAggregator | None = None
        self._last_tick = 0

        self.state.subscribe(self._on_state_change)

        if self.config.organization or self.config.token:
            self.set_credentials(
                self.config.organization or "", self.config.token or ""
            )

    async def __aenter__(self) -> "DashboardController":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        await self.close()

    @property
    def source_repository_url(self) -> str:
        return self.config.source_repository_url

    @property
    def form_valid(self) -> bool:
        return self.state.form_valid

    @property
    def groups(self) -> list[PrGroup]:
        return self.state.groups

    @property
    def workflow_summary(self) -> WorkflowSummary:
        if self._summary is None:
            return WorkflowSummary()
        return self._summary.summary

    @property
    def workflow_summary_loading(self) -> bool:
        return self._summary is not None and self._summary.is_loading

    def set_credentials(self, organization: str, token: str) -> None:
        self.state.set_credentials(organization, token)

    def set_organization(self, organization: str) -> None:
        self.state.set_credentials(organization, self.state.token)

    def set_token(self, token: str) -> None:
        self.state.set_credentials(self.state.organization, token)

    async def search(self) -> list[PrGroup]:
        """Run a search for the current organization.

        Discovery failures end up in the error slot rather than being raised.

        Returns:
            The groups now on the dashboard (empty after a failure)
        """
        if not self.state.form_valid:
            self.state.set_error(MISSING_INPUT_MESSAGE)
            return []

        await self._ensure_client()
        assert self._search is not None
        organization = self.state.organization.strip()

        self.state.begin_search()
        try:
            return await self._search.search(organization)
        except Exception as e:
            logger.error(f"Search for {organization} failed: {e}")
            self.state.set_error(str(e) or UNKNOWN_ERROR_MESSAGE)
            return []
        finally:
            self.state.set_loading(False)

    async def close_pull_request(self, pr_id: int) -> bool:
        pr = self.state.get_pull_request(pr_id)
        actions = await self._get_actions()
        return await actions.close_pull_request(pr)

    async def approve_and_merge_pull_request(self, pr_id: int) -> bool:
        pr = self.state.get_pull_request(pr_id)
        actions = await self._get_actions()
        return await actions.approve_and_merge_pull_request(pr)

    async def close_group(self, title: str) -> int:
        group = self.state.get_group(title)
        actions = await self._get_actions()
        return await actions.close_group(group)

    async def approve_and_merge_group(self, title: str) -> int:
        group = self.state.get_group(title)
        actions = await self._get_actions()
        return await actions.approve_and_merge_group(group)

    def toggle_group(self, title: str) -> None:
        self.state.toggle_group(title)

    def toggle_pull_request(self, pr_id: int) -> None:
        self.state.toggle_pull_request(pr_id)

    async def wait_for_summary(self) -> None:
        """Wait for an in-flight workflow summary refresh to finish."""
        if self._summary is not None:
            await self._summary.wait()

    async def close(self) -> None:
        """Finish outstanding summary work and close the GitHub client."""
        await self.wait_for_summary()
        if self._client is not None:
            await self._client.close()
            self._client = None
            self._client_token = None

    def _build_client(self, token: str) -> GitHubClient:
        auth = PersonalAccessTokenAuth(token)
        logger.debug(f"Creating GitHub client with {auth!r}")
        return GitHubClient(auth, self.config.github.to_client_config())

    async def _ensure_client(self) -> None:
        """Create the client and orchestrators for the current credential."""
        token = self.state.token.strip()
        if self._client is not None and self._client_token == token:
            return

        if self._client is not None:
            await self.wait_for_summary()
            await self._client.close()

        client = self._client_factory(token)
        search_settings = self.config.search
        self._client = client
        self._client_token = token
        self._search = SearchAndGroupOrchestrator(
            client,
            self.state,
            bot_author=search_settings.bot_author,
            per_page=search_settings.per_page,
        )
        self._actions = BulkActionOrchestrator(client, self.state)
        self._summary = WorkflowSummaryAggregator(
            client,
            bot_author=search_settings.bot_author,
            per_page=search_settings.per_page,
        )

    async def _get_actions(self) -> BulkActionOrchestrator:
        await self._ensure_client()
        assert self._actions is not None
        return self._actions

    def _on_state_change(self, state: DashboardState) -> None:
        tick = state.workflow_refresh_tick
        if tick == self._last_tick:
            return
        self._last_tick = tick
        if self._summary is not None:
            self._summary.on_refresh_tick(
                state.organization.strip(), state.token.strip(), tick
            )
