"""
Test configuration and shared fixtures.

Provides a fake GitHub client, a fresh dashboard state and ready-made
orchestrators wired to both, so unit tests can exercise the engine without
any network access.
"""

import logging

import pytest

from renovate_dashboard.dashboard import (
    BulkActionOrchestrator,
    DashboardState,
    PrEnricher,
    SearchAndGroupOrchestrator,
    WorkflowSummaryAggregator,
)
from tests.fixtures.github import FakeGitHubClient


@pytest.fixture(autouse=True)
def _debug_logging(caplog: pytest.LogCaptureFixture) -> None:
    """Capture dashboard logs at DEBUG so assertions can inspect them."""
    caplog.set_level(logging.DEBUG, logger="renovate_dashboard")


@pytest.fixture
def fake_github() -> FakeGitHubClient:
    """
    Why: Orchestrators talk to GitHub only through the client object
    What: Provides an in-memory client with no registered PRs
    How: Tests register PRs and failures through its helpers
    """
    return FakeGitHubClient()


@pytest.fixture
def state() -> DashboardState:
    return DashboardState()


@pytest.fixture
def enricher(fake_github: FakeGitHubClient) -> PrEnricher:
    return PrEnricher(fake_github)  # type: ignore[arg-type]


@pytest.fixture
def search_orchestrator(
    fake_github: FakeGitHubClient, state: DashboardState
) -> SearchAndGroupOrchestrator:
    return SearchAndGroupOrchestrator(fake_github, state)  # type: ignore[arg-type]


@pytest.fixture
def actions(
    fake_github: FakeGitHubClient, state: DashboardState
) -> BulkActionOrchestrator:
    return BulkActionOrchestrator(fake_github, state)  # type: ignore[arg-type]


@pytest.fixture
def summary_aggregator(fake_github: FakeGitHubClient) -> WorkflowSummaryAggregator:
    return WorkflowSummaryAggregator(fake_github)  # type: ignore[arg-type]
