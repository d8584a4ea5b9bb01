"""Pull request records discovered and enriched by the dashboard."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .enums import CIStatus, ProcessingState

# idle -> processing -> {removed | idle (with error)}
_ALLOWED_TRANSITIONS: dict[ProcessingState, frozenset[ProcessingState]] = {
    ProcessingState.IDLE: frozenset({ProcessingState.PROCESSING}),
    ProcessingState.PROCESSING: frozenset(
        {ProcessingState.IDLE, ProcessingState.REMOVED}
    ),
    ProcessingState.REMOVED: frozenset(),
}


class InvalidStateTransitionError(Exception):
    """Raised when a pull request is moved along an edge the lifecycle forbids."""

    def __init__(
        self, pr_number: int, current: ProcessingState, target: ProcessingState
    ):
        super().__init__(
            f"PR #{pr_number} cannot move from {current.value} to {target.value}"
        )
        self.pr_number = pr_number
        self.current = current
        self.target = target


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a GitHub ISO-8601 timestamp (``Z`` suffix allowed)."""
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass(frozen=True)
class Label:
    """Issue label attached to a pull request."""

    id: int
    name: str
    color: str = ""
    description: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Label":
        return cls(
            id=data["id"],
            name=data["name"],
            color=data.get("color") or "",
            description=data.get("description"),
        )


@dataclass(frozen=True)
class PullRequestAuthor:
    """Login and avatar of the account that opened the pull request."""

    login: str
    avatar_url: str = ""


@dataclass(frozen=True)
class PullRequestRef:
    """Identity of a discovered pull request.

    Built from a search result item; never changes within a session.
    """

    id: int
    number: int
    title: str
    repo_owner: str
    repo_name: str
    html_url: str
    author: PullRequestAuthor
    created_at: datetime | None = None
    labels: tuple[Label, ...] = ()

    @property
    def full_name(self) -> str:
        return f"{self.repo_owner}/{self.repo_name}"

    @classmethod
    def from_search_item(
        cls, item: dict[str, Any], repo_owner: str, repo_name: str
    ) -> "PullRequestRef":
        """Convert a ``/search/issues`` item into a reference.

        Args:
            item: Search result item
            repo_owner: Owner parsed from the item's repository URL
            repo_name: Repository name parsed from the item's repository URL

        Returns:
            PullRequestRef for the item
        """
        user = item.get("user") or {}
        return cls(
            id=item["id"],
            number=item["number"],
            title=item["title"],
            repo_owner=repo_owner,
            repo_name=repo_name,
            html_url=item.get("html_url", ""),
            author=PullRequestAuthor(
                login=user.get("login", ""),
                avatar_url=user.get("avatar_url", ""),
            ),
            created_at=parse_timestamp(item.get("created_at")),
            labels=tuple(Label.from_api(label) for label in item.get("labels") or []),
        )


@dataclass(frozen=True)
class CheckRun:
    """Snapshot of one check run for the head commit."""

    id: int
    name: str
    status: str  # 'queued', 'in_progress', 'completed'
    conclusion: str | None  # 'success', 'failure', 'timed_out', ...
    html_url: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "CheckRun":
        return cls(
            id=data["id"],
            name=data["name"],
            status=data["status"],
            conclusion=data.get("conclusion"),
            html_url=data.get("html_url") or data.get("details_url"),
        )


@dataclass
class EnrichedPullRequest:
    """A discovered pull request plus the CI and repository data fetched for it.

    Enrichment fields start out unknown/empty and are overwritten in place by
    the enricher. ``processing_state`` follows the bulk-action lifecycle and
    may only change through :meth:`transition_to`.
    """

    ref: PullRequestRef
    head_sha: str = ""
    commits: int | None = None
    allow_squash_merge: bool = False
    allow_merge_commit: bool = False
    allow_rebase_merge: bool = False
    ci_status: CIStatus = CIStatus.UNKNOWN
    workflow_status: CIStatus = CIStatus.UNKNOWN
    check_runs: list[CheckRun] = field(default_factory=list)
    processing_state: ProcessingState = ProcessingState.IDLE
    last_error: str | None = None

    @property
    def id(self) -> int:
        return self.ref.id

    @property
    def number(self) -> int:
        return self.ref.number

    @property
    def title(self) -> str:
        return self.ref.title

    @property
    def repo_owner(self) -> str:
        return self.ref.repo_owner

    @property
    def repo_name(self) -> str:
        return self.ref.repo_name

    @property
    def is_modified(self) -> bool:
        """True once someone pushed extra commits on top of the bot's."""
        return (self.commits or 0) > 1

    @property
    def is_processing(self) -> bool:
        return self.processing_state == ProcessingState.PROCESSING

    def transition_to(self, target: ProcessingState) -> None:
        """Move to ``target``, enforcing the processing lifecycle.

        Raises:
            InvalidStateTransitionError: If the edge is not allowed
        """
        if target not in _ALLOWED_TRANSITIONS[self.processing_state]:
            raise InvalidStateTransitionError(
                self.number, self.processing_state, target
            )
        self.processing_state = target

    def reset_status(self) -> None:
        """Forget CI data after a failed enrichment."""
        self.ci_status = CIStatus.UNKNOWN
        self.workflow_status = CIStatus.UNKNOWN
        self.check_runs = []
