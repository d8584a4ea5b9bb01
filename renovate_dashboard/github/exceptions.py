"""Errors raised by the GitHub client.

Callers that show failures to the user read ``str(error)``, which is GitHub's
own ``message`` field when the response carried one.
"""

from typing import Any


class GitHubError(Exception):
    """A GitHub request failed.

    Attributes:
        status_code: HTTP status, or None for transport failures
        response_data: Decoded error body (empty when there was none)
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_data: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data or {}

    @property
    def documentation_url(self) -> str | None:
        """Link GitHub attaches to most error bodies."""
        return self.response_data.get("documentation_url")


class GitHubAuthenticationError(GitHubError):
    """The credential was rejected or lacks a required scope (401/403)."""


class GitHubNotFoundError(GitHubError):
    """The PR, repository or commit does not exist or is not visible (404)."""


class GitHubValidationError(GitHubError):
    """GitHub refused the change, e.g. a merge that is not allowed (422)."""


class GitHubServerError(GitHubError):
    """GitHub answered with a 5xx status."""


class GitHubConnectionError(GitHubError):
    """The request never got an HTTP response."""


class GitHubTimeoutError(GitHubError):
    """The request exceeded the client's total timeout."""


class GitHubResponseError(GitHubError):
    """A 2xx response whose body is not a JSON object."""


def error_for_status(
    status: int, message: str, response_data: dict[str, Any] | None = None
) -> GitHubError:
    """Build the exception matching a non-2xx status."""
    if status in (401, 403):
        error_class: type[GitHubError] = GitHubAuthenticationError
    elif status == 404:
        error_class = GitHubNotFoundError
    elif status == 422:
        error_class = GitHubValidationError
    elif 500 <= status < 600:
        error_class = GitHubServerError
    else:
        error_class = GitHubError
    return error_class(message, status, response_data)
