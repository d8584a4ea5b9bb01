"""Domain errors raised by the dashboard orchestrators.

These are policy failures, distinct from the transport errors in
``renovate_dashboard.github.exceptions``; their messages are shown to the user
as-is.
"""


class DashboardError(Exception):
    """Base exception for dashboard policy failures."""

    pass


class NoSuitableMergeMethodError(DashboardError):
    """Raised when the repository allows none of the applicable merge methods."""

    def __init__(self, pr_number: int | None = None):
        target = f"PR #{pr_number}" if pr_number is not None else "this PR"
        super().__init__(f"No suitable merge method available for {target}")
        self.pr_number = pr_number


class FailingWorkflowError(DashboardError):
    """Raised when a merge is attempted on a PR whose workflow status is failure."""

    def __init__(self, pr_number: int):
        super().__init__("Cannot merge PR with failing workflow checks")
        self.pr_number = pr_number


class NoEligiblePullRequestsError(DashboardError):
    """Raised when every member of a group is excluded from a group merge."""

    def __init__(self, title: str):
        super().__init__(
            "All PRs in this group have failing workflows and cannot be merged."
        )
        self.title = title
