"""Dashboard data models."""

from .enums import (
    AggregateStatus,
    CheckConclusion,
    CheckStatus,
    CIStatus,
    MergeMethod,
    ProcessingState,
)
from .group import PrGroup, WorkflowSummary
from .pull_request import (
    CheckRun,
    EnrichedPullRequest,
    InvalidStateTransitionError,
    Label,
    PullRequestAuthor,
    PullRequestRef,
    parse_timestamp,
)

__all__ = [
    "AggregateStatus",
    "CIStatus",
    "CheckConclusion",
    "CheckRun",
    "CheckStatus",
    "EnrichedPullRequest",
    "InvalidStateTransitionError",
    "Label",
    "MergeMethod",
    "ProcessingState",
    "PrGroup",
    "PullRequestAuthor",
    "PullRequestRef",
    "WorkflowSummary",
    "parse_timestamp",
]
