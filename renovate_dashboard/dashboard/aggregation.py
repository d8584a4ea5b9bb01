"""Group-level folds over member pull requests."""

from collections.abc import Iterable

from renovate_dashboard.models import AggregateStatus, CIStatus, WorkflowSummary


def calculate_aggregate_status(statuses: Iterable[CIStatus]) -> AggregateStatus:
    """Fold member CI statuses into a group status.

    Failure wins over pending, pending over success. A non-empty group that is
    neither (e.g. success mixed with unknown) is mixed; an empty one unknown.
    """
    statuses = list(statuses)
    if any(s == CIStatus.FAILURE for s in statuses):
        return AggregateStatus.FAILURE
    if any(s == CIStatus.PENDING for s in statuses):
        return AggregateStatus.PENDING
    if statuses and all(s == CIStatus.SUCCESS for s in statuses):
        return AggregateStatus.SUCCESS
    if statuses:
        return AggregateStatus.MIXED
    return AggregateStatus.UNKNOWN


def calculate_workflow_summary(statuses: Iterable[CIStatus]) -> WorkflowSummary:
    """Count success/pending/failure statuses; unknown is left out."""
    success = pending = failed = 0
    for status in statuses:
        if status == CIStatus.SUCCESS:
            success += 1
        elif status == CIStatus.PENDING:
            pending += 1
        elif status == CIStatus.FAILURE:
            failed += 1

    return WorkflowSummary(success=success, pending=pending, failed=failed)
