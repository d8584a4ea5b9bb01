"""PR discovery, enrichment, grouping and bulk-action engine."""

from .actions import BulkActionOrchestrator
from .aggregation import calculate_aggregate_status, calculate_workflow_summary
from .controller import DashboardController
from .enricher import PrEnricher
from .exceptions import (
    DashboardError,
    FailingWorkflowError,
    NoEligiblePullRequestsError,
    NoSuitableMergeMethodError,
)
from .merge import resolve_merge_method
from .search import SearchAndGroupOrchestrator, group_by_title, parse_repository_url
from .state import DashboardState
from .status import map_combined_status, status_from_check_runs
from .summary import WorkflowSummaryAggregator

__all__ = [
    "BulkActionOrchestrator",
    "DashboardController",
    "DashboardError",
    "DashboardState",
    "FailingWorkflowError",
    "NoEligiblePullRequestsError",
    "NoSuitableMergeMethodError",
    "PrEnricher",
    "SearchAndGroupOrchestrator",
    "WorkflowSummaryAggregator",
    "calculate_aggregate_status",
    "calculate_workflow_summary",
    "group_by_title",
    "map_combined_status",
    "parse_repository_url",
    "resolve_merge_method",
    "status_from_check_runs",
]
