"""Enums for dashboard models."""

import enum


class CIStatus(str, enum.Enum):
    """CI status of a single pull request."""

    SUCCESS = "success"
    PENDING = "pending"
    FAILURE = "failure"
    UNKNOWN = "unknown"


class AggregateStatus(str, enum.Enum):
    """CI status folded over all members of a group."""

    SUCCESS = "success"
    PENDING = "pending"
    FAILURE = "failure"
    MIXED = "mixed"
    UNKNOWN = "unknown"


class CheckStatus(str, enum.Enum):
    """Check run status enum."""

    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class CheckConclusion(str, enum.Enum):
    """Check run conclusion enum."""

    SUCCESS = "success"
    FAILURE = "failure"
    NEUTRAL = "neutral"
    CANCELLED = "cancelled"
    TIMED_OUT = "timed_out"
    ACTION_REQUIRED = "action_required"
    STALE = "stale"
    SKIPPED = "skipped"


class MergeMethod(str, enum.Enum):
    """Merge strategies accepted by the merge endpoint."""

    MERGE = "merge"
    SQUASH = "squash"
    REBASE = "rebase"


class ProcessingState(str, enum.Enum):
    """Lifecycle of a pull request while a bulk action runs against it."""

    IDLE = "idle"
    PROCESSING = "processing"
    REMOVED = "removed"
