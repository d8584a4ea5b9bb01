"""
Unit tests for GitHub authentication.

Why: The user's Personal Access Token is the only credential; it must be
     validated up front, sent with the right scheme and kept out of logs.

What: Tests AuthToken and PersonalAccessTokenAuth.

How: Builds providers directly and inspects headers and reprs.
"""

import pytest

from renovate_dashboard.github.auth import AuthToken, PersonalAccessTokenAuth
from renovate_dashboard.github.exceptions import GitHubAuthenticationError


class TestAuthToken:
    """Test AuthToken data class."""

    def test_defaults_to_bearer(self) -> None:
        token = AuthToken(token="abc")

        assert token.to_header() == {"Authorization": "Bearer abc"}

    def test_repr_hides_credential(self) -> None:
        token = AuthToken(token="ghp_supersecret1234", token_type="token")

        assert "supersecret" not in repr(token)
        assert token.masked == "...1234"

    def test_short_token_fully_masked(self) -> None:
        assert AuthToken(token="abc").masked == "***"


class TestPersonalAccessTokenAuth:
    """Test PAT authentication."""

    async def test_uses_token_scheme(self) -> None:
        """
        Why: GitHub accepts classic and fine-grained PATs with ``token``.
        What: get_token returns the credential with the token scheme.
        How: Builds a provider and renders the header.
        """
        auth = PersonalAccessTokenAuth("ghp_abc")

        token = await auth.get_token()

        assert token.to_header() == {"Authorization": "token ghp_abc"}

    def test_strips_whitespace(self) -> None:
        assert PersonalAccessTokenAuth("  ghp_abc\n").token == "ghp_abc"

    def test_repr_is_masked(self) -> None:
        auth = PersonalAccessTokenAuth("ghp_supersecret1234")

        assert repr(auth) == "PersonalAccessTokenAuth(...1234)"

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_token_rejected(self, value) -> None:
        with pytest.raises(GitHubAuthenticationError, match="required"):
            PersonalAccessTokenAuth(value)
