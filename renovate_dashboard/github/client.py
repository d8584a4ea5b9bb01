"""Async GitHub REST client used by the dashboard orchestrators."""

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import aiohttp
from yarl import URL

from .auth import AuthProvider
from .exceptions import (
    GitHubConnectionError,
    GitHubError,
    GitHubResponseError,
    GitHubTimeoutError,
    error_for_status,
)

logger = logging.getLogger(__name__)


@dataclass
class GitHubClientConfig:
    """Configuration for GitHub client."""

    base_url: str = "https://api.github.com"
    timeout: int = 30
    user_agent: str = "Renovate-Dashboard/0.1"
    max_connections: int = 100


class GitHubClient:
    """Async GitHub API client.

    Every call is a single attempt: non-2xx responses and transport failures
    are raised as ``GitHubError`` subclasses and never retried here.
    """

    def __init__(
        self,
        auth: AuthProvider,
        config: GitHubClientConfig | None = None,
    ) -> None:
        """Initialize GitHub client.

        Args:
            auth: Authentication provider
            config: Client configuration
        """
        self.auth = auth
        self.config = config or GitHubClientConfig()

        # HTTP session will be initialized on first use
        self._session: aiohttp.ClientSession | None = None
        self._session_lock = asyncio.Lock()

    async def __aenter__(self) -> "GitHubClient":
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> None:
        """Ensure HTTP session is initialized."""
        if self._session is None or self._session.closed:
            async with self._session_lock:
                if self._session is None or self._session.closed:
                    timeout = aiohttp.ClientTimeout(total=self.config.timeout)
                    connector = aiohttp.TCPConnector(limit=self.config.max_connections)

                    self._session = aiohttp.ClientSession(
                        timeout=timeout,
                        connector=connector,
                        headers={
                            "User-Agent": self.config.user_agent,
                            "Accept": "application/vnd.github.v3+json",
                        },
                    )

    async def close(self) -> None:
        """Close HTTP session and cleanup resources."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    def _generate_correlation_id(self) -> str:
        """Generate correlation ID for request tracking."""
        return str(uuid.uuid4())[:8]

    def _build_url(self, path: str) -> str:
        """Join an API path (query string included) onto the base URL."""
        return f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"

    async def request(
        self,
        method: str,
        path: str,
        data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make an authenticated request and return the parsed JSON body.

        The path is sent exactly as given, so query strings such as the search
        qualifiers keep their literal ``+`` separators.

        Args:
            method: HTTP method
            path: API path, optionally with a pre-encoded query string
            data: JSON request body

        Returns:
            Parsed JSON object, or an empty dict for 204/empty responses

        Raises:
            GitHubError: Various GitHub API errors
        """
        correlation_id = self._generate_correlation_id()
        url = self._build_url(path)

        request_headers: dict[str, str] = {}
        auth_token = await self.auth.get_token()
        request_headers.update(auth_token.to_header())

        await self._ensure_session()

        if not self._session:
            raise GitHubConnectionError("Failed to initialize HTTP session")

        request_kwargs: dict[str, Any] = {"headers": request_headers}
        if data is not None:
            request_kwargs["json"] = data

        start_time = time.time()
        logger.debug(f"GitHub API request [{correlation_id}] {method} {url}")

        try:
            async with self._session.request(
                method, URL(url, encoded=True), **request_kwargs
            ) as response:
                logger.debug(
                    f"GitHub API response [{correlation_id}] "
                    f"{response.status} in {time.time() - start_time:.2f}s"
                )

                if 200 <= response.status < 300:
                    return await self._read_payload(response, correlation_id)

                raise await self._error_from_response(response, correlation_id)

        except GitHubError:
            raise

        except TimeoutError as e:
            raise GitHubTimeoutError(f"Request timeout for {method} {url}") from e

        except aiohttp.ClientError as e:
            raise GitHubConnectionError(
                f"Connection error for {method} {url}: {e}"
            ) from e

    async def _read_payload(
        self, response: aiohttp.ClientResponse, correlation_id: str
    ) -> dict[str, Any]:
        """Parse a successful response body.

        Raises:
            GitHubResponseError: If the body is not a JSON object
        """
        if response.status == 204:
            return {}

        text = await response.text()
        if not text.strip():
            return {}

        try:
            payload = json.loads(text)
        except ValueError as e:
            logger.warning(f"GitHub API response [{correlation_id}] is not JSON: {e}")
            raise GitHubResponseError(
                f"Unexpected response from GitHub: {e}", response.status
            ) from e

        if not isinstance(payload, dict):
            raise GitHubResponseError(
                f"Unexpected response from GitHub: expected an object, "
                f"got {type(payload).__name__}",
                response.status,
            )
        return payload

    async def _error_from_response(
        self, response: aiohttp.ClientResponse, correlation_id: str
    ) -> GitHubError:
        """Turn a non-2xx response into the matching GitHubError.

        GitHub's ``message`` field is used as the error text; plain-text
        bodies are used as-is, and an empty body falls back to the status.
        """
        text = await response.text()
        try:
            error_data = json.loads(text) if text else {}
        except ValueError:
            error_data = {"message": text}
        if not isinstance(error_data, dict):
            error_data = {}

        message = (
            error_data.get("message")
            or f"API request failed with status: {response.status}"
        )
        logger.warning(
            f"GitHub API error [{correlation_id}] {response.status}: {message}"
        )
        return error_for_status(response.status, message, error_data)

    async def get(self, path: str) -> dict[str, Any]:
        """Make GET request to GitHub API."""
        return await self.request("GET", path)

    async def post(
        self, path: str, data: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Make POST request to GitHub API."""
        return await self.request("POST", path, data)

    async def put(
        self, path: str, data: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Make PUT request to GitHub API."""
        return await self.request("PUT", path, data)

    async def patch(
        self, path: str, data: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Make PATCH request to GitHub API."""
        return await self.request("PATCH", path, data)

    # Convenience methods for the endpoints the dashboard consumes

    async def search_pull_requests(
        self, author: str, organization: str, per_page: int = 100
    ) -> dict[str, Any]:
        """Search open pull requests by author within an organization.

        Only a single page is requested.

        Args:
            author: Author qualifier, e.g. ``app/renovate``
            organization: Organization login
            per_page: Page size (max 100)

        Returns:
            Search response with ``total_count`` and ``items``
        """
        query = (
            f"is:pr+author:{quote(author, safe='/')}"
            f"+org:{quote(organization, safe='')}+is:open"
        )
        return await self.get(f"/search/issues?q={query}&per_page={per_page}")

    async def get_pull(self, owner: str, repo: str, pull_number: int) -> dict[str, Any]:
        """Get specific pull request."""
        return await self.get(f"/repos/{owner}/{repo}/pulls/{pull_number}")

    async def get_repo(self, owner: str, repo: str) -> dict[str, Any]:
        """Get repository information, including allowed merge methods."""
        return await self.get(f"/repos/{owner}/{repo}")

    async def get_combined_status(
        self, owner: str, repo: str, ref: str
    ) -> dict[str, Any]:
        """Get the combined commit status for a ref."""
        return await self.get(f"/repos/{owner}/{repo}/commits/{ref}/status")

    async def list_check_runs(self, owner: str, repo: str, ref: str) -> dict[str, Any]:
        """List check runs for a ref (first page only)."""
        return await self.get(f"/repos/{owner}/{repo}/commits/{ref}/check-runs")

    async def close_pull(
        self, owner: str, repo: str, pull_number: int
    ) -> dict[str, Any]:
        """Close a pull request without merging it."""
        return await self.patch(
            f"/repos/{owner}/{repo}/pulls/{pull_number}", {"state": "closed"}
        )

    async def approve_pull(
        self, owner: str, repo: str, pull_number: int
    ) -> dict[str, Any]:
        """Submit an approving review."""
        return await self.post(
            f"/repos/{owner}/{repo}/pulls/{pull_number}/reviews", {"event": "APPROVE"}
        )

    async def merge_pull(
        self, owner: str, repo: str, pull_number: int, merge_method: str
    ) -> dict[str, Any]:
        """Merge a pull request with the given method."""
        return await self.put(
            f"/repos/{owner}/{repo}/pulls/{pull_number}/merge",
            {"merge_method": merge_method},
        )
