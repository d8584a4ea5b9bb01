"""
Unit tests for group aggregation folds.

Why: Group badges and counts are derived purely from member statuses; the
     precedence of failure over pending over success must hold.

What: Tests calculate_aggregate_status and calculate_workflow_summary.

How: Direct calls with member status lists, including empty groups.
"""

import pytest

from renovate_dashboard.dashboard.aggregation import (
    calculate_aggregate_status,
    calculate_workflow_summary,
)
from renovate_dashboard.models import AggregateStatus, CIStatus, WorkflowSummary

S, P, F, U = CIStatus.SUCCESS, CIStatus.PENDING, CIStatus.FAILURE, CIStatus.UNKNOWN


class TestAggregateStatus:
    """Test calculate_aggregate_status."""

    @pytest.mark.parametrize(
        ("statuses", "expected"),
        [
            ([S, S], AggregateStatus.SUCCESS),
            ([S, F], AggregateStatus.FAILURE),
            ([P, S], AggregateStatus.PENDING),
            ([P, F], AggregateStatus.FAILURE),
            ([S, U], AggregateStatus.MIXED),
            ([U, U], AggregateStatus.MIXED),
            ([], AggregateStatus.UNKNOWN),
        ],
    )
    def test_fold(self, statuses: list[CIStatus], expected: AggregateStatus) -> None:
        assert calculate_aggregate_status(statuses) == expected

    def test_fold_is_repeatable(self) -> None:
        statuses = [S, P, U]
        assert calculate_aggregate_status(statuses) == calculate_aggregate_status(
            statuses
        )


class TestWorkflowSummary:
    """Test calculate_workflow_summary."""

    def test_counts_each_status(self) -> None:
        summary = calculate_workflow_summary([S, S, P, F, F, F])
        assert summary == WorkflowSummary(success=2, pending=1, failed=3)
        assert summary.total == 6

    def test_unknown_is_not_counted(self) -> None:
        summary = calculate_workflow_summary([U, S, U])
        assert summary == WorkflowSummary(success=1, pending=0, failed=0)
        assert summary.total == 1

    def test_empty_is_zero(self) -> None:
        assert calculate_workflow_summary([]) == WorkflowSummary()

    def test_summary_is_repeatable(self) -> None:
        statuses = [S, F, P, U]
        assert calculate_workflow_summary(statuses) == calculate_workflow_summary(
            statuses
        )
