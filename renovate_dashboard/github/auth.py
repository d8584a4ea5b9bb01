"""Credentials attached to GitHub requests.

The dashboard only authenticates with the user's Personal Access Token. The
raw value is kept out of reprs so it never ends up in log lines.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from .exceptions import GitHubAuthenticationError

PAT_SCHEME = "token"


@dataclass(frozen=True)
class AuthToken:
    """A credential and the Authorization scheme it is sent with."""

    token: str = field(repr=False)
    token_type: str = "Bearer"

    def to_header(self) -> dict[str, str]:
        return {"Authorization": f"{self.token_type} {self.token}"}

    @property
    def masked(self) -> str:
        """Last four characters only, for log output."""
        if len(self.token) <= 4:
            return "***"
        return f"...{self.token[-4:]}"


class AuthProvider(ABC):
    """Supplies the token for every request the client sends."""

    @abstractmethod
    async def get_token(self) -> AuthToken:
        """Get authentication token."""


class PersonalAccessTokenAuth(AuthProvider):
    """Classic or fine-grained Personal Access Token."""

    def __init__(self, token: str):
        """Initialize PAT authentication.

        Args:
            token: The user's Personal Access Token; surrounding whitespace
                is ignored

        Raises:
            GitHubAuthenticationError: If the token is blank
        """
        token = (token or "").strip()
        if not token:
            raise GitHubAuthenticationError("Personal Access Token is required")
        self._token = AuthToken(token=token, token_type=PAT_SCHEME)  # nosec B106

    @property
    def token(self) -> str:
        return self._token.token

    def __repr__(self) -> str:
        return f"PersonalAccessTokenAuth({self._token.masked})"

    async def get_token(self) -> AuthToken:
        return self._token
