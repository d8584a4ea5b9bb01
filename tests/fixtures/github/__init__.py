"""GitHub API payload factories and an in-memory client double."""

from .fake_client import FakeGitHubClient
from .payloads import (
    check_run_payload,
    check_runs_response,
    combined_status_response,
    pull_detail_response,
    repository_response,
    search_item,
    search_response,
)

__all__ = [
    "FakeGitHubClient",
    "check_run_payload",
    "check_runs_response",
    "combined_status_response",
    "pull_detail_response",
    "repository_response",
    "search_item",
    "search_response",
]
