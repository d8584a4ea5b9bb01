"""
Unit tests for pull request records.

Why: Search items and check runs arrive as raw JSON; the records built from
     them are what every other component reads.

What: Tests PullRequestRef.from_search_item, CheckRun.from_api and the
      EnrichedPullRequest processing lifecycle.

How: Feeds factory payloads through the constructors and walks the
     processing state machine along allowed and forbidden edges.
"""

from datetime import UTC, datetime

import pytest

from renovate_dashboard.models import (
    CheckRun,
    CIStatus,
    InvalidStateTransitionError,
    ProcessingState,
    PullRequestRef,
    parse_timestamp,
)
from tests.fixtures.github import check_run_payload, search_item
from tests.fixtures.records import make_pr


class TestPullRequestRef:
    """Test PullRequestRef construction."""

    def test_from_search_item(self) -> None:
        item = search_item(title="Update A", owner="acme", repo="api", number=12)

        ref = PullRequestRef.from_search_item(item, "acme", "api")

        assert ref.id == item["id"]
        assert ref.number == 12
        assert ref.title == "Update A"
        assert ref.full_name == "acme/api"
        assert ref.author.login == "renovate[bot]"
        assert ref.created_at == datetime(2024, 5, 1, 8, 30, tzinfo=UTC)
        assert [label.name for label in ref.labels] == ["dependencies"]
        assert ref.html_url == "https://github.com/acme/api/pull/12"

    def test_missing_optional_fields(self) -> None:
        item = search_item(labels=None, created_at=None, user=None)

        ref = PullRequestRef.from_search_item(item, "acme", "widgets")

        assert ref.labels == ()
        assert ref.created_at is None
        assert ref.author.login == ""

    def test_parse_timestamp(self) -> None:
        assert parse_timestamp(None) is None
        assert parse_timestamp("2024-01-02T03:04:05Z") == datetime(
            2024, 1, 2, 3, 4, 5, tzinfo=UTC
        )


class TestCheckRun:
    """Test CheckRun.from_api."""

    def test_prefers_html_url(self) -> None:
        payload = check_run_payload(name="lint", conclusion="failure")

        run = CheckRun.from_api(payload)

        assert run.name == "lint"
        assert run.conclusion == "failure"
        assert run.html_url == payload["html_url"]

    def test_falls_back_to_details_url(self) -> None:
        payload = check_run_payload(html_url=None, status="queued", conclusion=None)

        run = CheckRun.from_api(payload)

        assert run.html_url == payload["details_url"]
        assert run.conclusion is None


class TestProcessingLifecycle:
    """Test the idle -> processing -> removed/idle state machine."""

    def test_processing_then_removed(self) -> None:
        pr = make_pr(1)

        pr.transition_to(ProcessingState.PROCESSING)
        assert pr.is_processing
        pr.transition_to(ProcessingState.REMOVED)
        assert pr.processing_state == ProcessingState.REMOVED

    def test_processing_back_to_idle(self) -> None:
        pr = make_pr(1)

        pr.transition_to(ProcessingState.PROCESSING)
        pr.transition_to(ProcessingState.IDLE)

        assert not pr.is_processing

    @pytest.mark.parametrize(
        ("path", "target"),
        [
            ([], ProcessingState.REMOVED),
            ([], ProcessingState.IDLE),
            ([ProcessingState.PROCESSING], ProcessingState.PROCESSING),
            (
                [ProcessingState.PROCESSING, ProcessingState.REMOVED],
                ProcessingState.PROCESSING,
            ),
        ],
    )
    def test_forbidden_transitions(
        self, path: list[ProcessingState], target: ProcessingState
    ) -> None:
        pr = make_pr(7)
        for step in path:
            pr.transition_to(step)

        with pytest.raises(InvalidStateTransitionError) as exc_info:
            pr.transition_to(target)

        assert exc_info.value.pr_number == 7

    def test_reset_status(self) -> None:
        pr = make_pr(1, ci_status=CIStatus.FAILURE)
        pr.check_runs = [CheckRun.from_api(check_run_payload())]

        pr.reset_status()

        assert pr.ci_status == CIStatus.UNKNOWN
        assert pr.workflow_status == CIStatus.UNKNOWN
        assert pr.check_runs == []

    def test_is_modified(self) -> None:
        assert make_pr(1, commits=2).is_modified
        assert not make_pr(2, commits=1).is_modified
        assert not make_pr(3, commits=None).is_modified
