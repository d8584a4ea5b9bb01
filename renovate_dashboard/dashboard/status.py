"""Mapping of GitHub status vocabularies onto the dashboard CI status."""

from collections.abc import Iterable

from renovate_dashboard.models import CheckConclusion, CheckRun, CheckStatus, CIStatus

_COMBINED_STATUS_MAP = {
    "success": CIStatus.SUCCESS,
    "pending": CIStatus.PENDING,
    "failure": CIStatus.FAILURE,
    "error": CIStatus.FAILURE,
}

_FAILED_CONCLUSIONS = frozenset({CheckConclusion.FAILURE, CheckConclusion.TIMED_OUT})
_RUNNING_STATUSES = frozenset({CheckStatus.IN_PROGRESS, CheckStatus.QUEUED})
_PASSING_CONCLUSIONS = frozenset(
    {CheckConclusion.SUCCESS, CheckConclusion.SKIPPED, CheckConclusion.NEUTRAL}
)


def map_combined_status(state: str | None) -> CIStatus:
    """Map a combined-status ``state`` to a CI status.

    ``error`` counts as failure; anything unrecognized, including ``None``,
    is unknown.
    """
    if not isinstance(state, str):
        return CIStatus.UNKNOWN
    return _COMBINED_STATUS_MAP.get(state, CIStatus.UNKNOWN)


def status_from_check_runs(check_runs: Iterable[CheckRun]) -> CIStatus | None:
    """Derive a CI status from check runs.

    Returns failure if any run failed or timed out, pending if any is still
    queued or running, success if every conclusion is success/skipped/neutral,
    and None when there are no runs or none of those rules applies (e.g. a
    cancelled run).
    """
    runs = list(check_runs)
    if not runs:
        return None

    if any(run.conclusion in _FAILED_CONCLUSIONS for run in runs):
        return CIStatus.FAILURE
    if any(run.status in _RUNNING_STATUSES for run in runs):
        return CIStatus.PENDING
    if all(run.conclusion in _PASSING_CONCLUSIONS for run in runs):
        return CIStatus.SUCCESS
    return None
