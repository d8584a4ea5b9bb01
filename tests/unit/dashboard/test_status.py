"""
Unit tests for CI status mapping.

Why: Every status shown on the dashboard funnels through these two functions,
     so their vocabulary handling must be exact.

What: Tests map_combined_status and status_from_check_runs.

How: Table-driven checks over the combined-status vocabulary and over
     representative mixes of check-run statuses and conclusions.
"""

import pytest

from renovate_dashboard.dashboard.status import (
    map_combined_status,
    status_from_check_runs,
)
from renovate_dashboard.models import CheckRun, CIStatus


def _run(status: str = "completed", conclusion: str | None = "success") -> CheckRun:
    return CheckRun(id=1, name="build", status=status, conclusion=conclusion)


class TestMapCombinedStatus:
    """Test map_combined_status."""

    @pytest.mark.parametrize(
        ("state", "expected"),
        [
            ("success", CIStatus.SUCCESS),
            ("pending", CIStatus.PENDING),
            ("failure", CIStatus.FAILURE),
            ("error", CIStatus.FAILURE),
            (None, CIStatus.UNKNOWN),
            ("", CIStatus.UNKNOWN),
            ("neutral", CIStatus.UNKNOWN),
            ("SUCCESS", CIStatus.UNKNOWN),
        ],
    )
    def test_maps_combined_state(self, state: str | None, expected: CIStatus) -> None:
        assert map_combined_status(state) == expected

    def test_non_string_state_is_unknown(self) -> None:
        assert map_combined_status(42) == CIStatus.UNKNOWN  # type: ignore[arg-type]


class TestStatusFromCheckRuns:
    """Test the check-run reconciliation rule."""

    def test_no_runs_gives_no_verdict(self) -> None:
        assert status_from_check_runs([]) is None

    def test_any_failure_wins(self) -> None:
        runs = [_run(conclusion="failure"), _run(conclusion="success")]
        assert status_from_check_runs(runs) == CIStatus.FAILURE

    def test_timed_out_counts_as_failure(self) -> None:
        runs = [
            _run(conclusion="timed_out"),
            _run(status="in_progress", conclusion=None),
        ]
        assert status_from_check_runs(runs) == CIStatus.FAILURE

    @pytest.mark.parametrize("status", ["queued", "in_progress"])
    def test_running_checks_are_pending(self, status: str) -> None:
        runs = [_run(conclusion="success"), _run(status=status, conclusion=None)]
        assert status_from_check_runs(runs) == CIStatus.PENDING

    def test_success_skipped_and_neutral_pass(self) -> None:
        runs = [
            _run(conclusion="success"),
            _run(conclusion="skipped"),
            _run(conclusion="neutral"),
        ]
        assert status_from_check_runs(runs) == CIStatus.SUCCESS

    @pytest.mark.parametrize("conclusion", ["cancelled", "action_required", "stale"])
    def test_other_conclusions_give_no_verdict(self, conclusion: str) -> None:
        runs = [_run(conclusion="success"), _run(conclusion=conclusion)]
        assert status_from_check_runs(runs) is None

    def test_accepts_generators(self) -> None:
        runs = (r for r in [_run(conclusion="success")])
        assert status_from_check_runs(runs) == CIStatus.SUCCESS
