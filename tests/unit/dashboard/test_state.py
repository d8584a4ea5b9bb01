"""
Unit tests for the dashboard state container.

Why: Every view renders from DashboardState, so removals, toggles and
     notifications must keep groups and their aggregates consistent.

What: Tests group replacement, PR removal, selection toggles, the validity
      predicate and observer notification.

How: Populates a fresh state with factory-built PRs and inspects it directly.
"""

import pytest

from renovate_dashboard.dashboard.state import DashboardState
from renovate_dashboard.models import AggregateStatus, CIStatus, WorkflowSummary
from tests.fixtures.records import make_pr, populate


class TestFormValid:
    """Test the organization/credential validity predicate."""

    @pytest.mark.parametrize(
        ("organization", "token", "expected"),
        [
            ("acme", "ghp_x", True),
            ("", "ghp_x", False),
            ("acme", "", False),
            ("  ", "ghp_x", False),
            ("acme", "   ", False),
        ],
    )
    def test_form_valid(
        self, state: DashboardState, organization: str, token: str, expected: bool
    ) -> None:
        state.set_credentials(organization, token)
        assert state.form_valid is expected


class TestReplaceGroups:
    """Test publishing a search result."""

    def test_computes_aggregates_and_clears_selection(
        self, state: DashboardState
    ) -> None:
        state.expanded_pr_ids = {99}
        populate(
            state,
            make_pr(1, "Update A", CIStatus.SUCCESS),
            make_pr(2, "Update A", CIStatus.FAILURE),
            make_pr(3, "Update B", CIStatus.PENDING),
        )

        group_a, group_b = state.groups
        assert group_a.pr_ids == [1, 2]
        assert group_a.aggregate_ci_status == AggregateStatus.FAILURE
        assert group_a.workflow_summary == WorkflowSummary(success=1, failed=1)
        assert group_b.aggregate_ci_status == AggregateStatus.PENDING
        assert state.expanded_pr_ids == set()

    def test_replaces_previous_groups_wholesale(self, state: DashboardState) -> None:
        populate(state, make_pr(1, "Old title"))
        populate(state, make_pr(2, "New title"))

        assert [g.title for g in state.groups] == ["New title"]
        assert list(state.pull_requests) == [2]


class TestRemovePullRequest:
    """Test removal of closed or merged PRs."""

    def test_removing_sole_member_removes_group(self, state: DashboardState) -> None:
        populate(state, make_pr(1, "Update A"), make_pr(2, "Update B"))

        state.remove_pull_request(1)

        assert [g.title for g in state.groups] == ["Update B"]
        assert 1 not in state.pull_requests

    def test_removing_one_of_two_keeps_group_and_refolds(
        self, state: DashboardState
    ) -> None:
        populate(
            state,
            make_pr(1, "Update A", CIStatus.FAILURE),
            make_pr(2, "Update A", CIStatus.SUCCESS),
        )

        state.remove_pull_request(1)

        (group,) = state.groups
        assert group.pr_ids == [2]
        assert group.aggregate_ci_status == AggregateStatus.SUCCESS
        assert group.workflow_summary == WorkflowSummary(success=1)

    def test_removal_drops_pr_from_selection(self, state: DashboardState) -> None:
        populate(state, make_pr(1), make_pr(2))
        state.toggle_pull_request(1)
        state.toggle_pull_request(2)

        state.remove_pull_request(1)

        assert state.expanded_pr_ids == {2}


class TestToggles:
    """Test group and PR expansion."""

    def test_toggle_pull_request_flips_membership(self, state: DashboardState) -> None:
        populate(state, make_pr(1))

        state.toggle_pull_request(1)
        assert state.expanded_pr_ids == {1}
        state.toggle_pull_request(1)
        assert state.expanded_pr_ids == set()

    def test_collapsing_group_collapses_its_members(
        self, state: DashboardState
    ) -> None:
        populate(state, make_pr(1, "Update A"), make_pr(2, "Update B"))
        state.toggle_group("Update A")
        state.toggle_pull_request(1)
        state.toggle_pull_request(2)

        state.toggle_group("Update A")

        assert state.get_group("Update A").is_expanded is False
        assert state.expanded_pr_ids == {2}

    def test_unknown_group_raises_key_error(self, state: DashboardState) -> None:
        with pytest.raises(KeyError):
            state.toggle_group("missing")


class TestObservers:
    """Test change notification."""

    def test_observers_are_notified_until_unsubscribed(
        self, state: DashboardState
    ) -> None:
        seen: list[int] = []
        unsubscribe = state.subscribe(lambda s: seen.append(s.workflow_refresh_tick))

        state.bump_refresh_tick()
        state.bump_refresh_tick()
        unsubscribe()
        state.bump_refresh_tick()

        assert seen == [1, 2]
        assert state.workflow_refresh_tick == 3

    def test_error_slot_keeps_latest_message(self, state: DashboardState) -> None:
        state.set_error("first")
        state.set_error("second")
        assert state.error == "second"

    def test_begin_search_resets_results(self, state: DashboardState) -> None:
        populate(state, make_pr(1))
        state.set_error("old")

        state.begin_search()

        assert state.groups == []
        assert state.pull_requests == {}
        assert state.error is None
        assert state.is_loading is True
        assert state.searched is True
