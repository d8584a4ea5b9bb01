"""Title-keyed groups of pull requests and their workflow counts."""

from dataclasses import dataclass, field

from .enums import AggregateStatus


@dataclass(frozen=True)
class WorkflowSummary:
    """Success/pending/failed counts; unknown statuses are not counted."""

    success: int = 0
    pending: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.success + self.pending + self.failed


@dataclass
class PrGroup:
    """Pull requests sharing the exact same title.

    Members are referenced by PR id, in first-seen order. The aggregate fields
    are derived from the members and only written by the state container.
    """

    title: str
    pr_ids: list[int] = field(default_factory=list)
    is_expanded: bool = False
    aggregate_ci_status: AggregateStatus = AggregateStatus.UNKNOWN
    workflow_summary: WorkflowSummary = field(default_factory=WorkflowSummary)

    def __len__(self) -> int:
        return len(self.pr_ids)
