"""Spotify OAuth Authentication Service.

Hey future me - this service wraps SpotifyClient's token endpoint calls and gives
the auth router a clean interface. It does NOT store tokens; the router writes
them into cookies (see api/session_cookies.py).

OAuth Flow (authorization code, confidential client):
1. generate_auth_url() -> URL + 16-char state (state goes into a cookie)
2. User visits URL, grants access, Spotify redirects to /auth/callback
3. exchange_code() -> tokens from code
4. refresh_token() -> new access token when the cookie expired
"""

import logging
import secrets
import string
from dataclasses import dataclass
from typing import Any

from raagriff.infrastructure.integrations.spotify_client import SpotifyClient

logger = logging.getLogger(__name__)

STATE_LENGTH = 16
_STATE_ALPHABET = string.ascii_letters + string.digits


def generate_state(length: int = STATE_LENGTH) -> str:
    """Random alphanumeric anti-CSRF token for the OAuth `state` parameter."""
    return "".join(secrets.choice(_STATE_ALPHABET) for _ in range(length))


@dataclass
class AuthUrlResult:
    """Result of auth URL generation.

    Hey future me - the caller MUST store `state` in the auth-state cookie before
    redirecting, the callback compares against it.
    """

    authorization_url: str
    state: str


@dataclass
class TokenResult:
    """Result of token operations.

    Hey future me - refresh_token might be None on refresh!
    Spotify doesn't always rotate it, so keep the old cookie in that case.
    """

    access_token: str
    refresh_token: str | None
    expires_in: int
    token_type: str
    scope: str | None


class SpotifyAuthService:
    """Service for Spotify OAuth authentication."""

    def __init__(self, client: SpotifyClient) -> None:
        """Initialize auth service.

        Args:
            client: Shared SpotifyClient (lives on app.state)
        """
        self._client = client

    def generate_auth_url(self, state: str | None = None) -> AuthUrlResult:
        """Generate the Spotify authorize URL.

        Args:
            state: Optional CSRF state (generated if None)

        Returns:
            AuthUrlResult with URL and state

        Raises:
            ConfigurationError: If client credentials are not configured
        """
        if state is None:
            state = generate_state()

        authorization_url = self._client.get_authorization_url(state)
        logger.debug(f"Generated auth URL with state={state[:4]}...")

        return AuthUrlResult(authorization_url=authorization_url, state=state)

    async def exchange_code(self, code: str) -> TokenResult:
        """Exchange authorization code for tokens.

        Raises:
            httpx.HTTPStatusError: Spotify answered with anything but 200
            httpx.RequestError: Transport failure
        """
        token_data = await self._client.exchange_code(code)

        logger.info("Successfully exchanged code for tokens")

        return _to_token_result(token_data)

    # Hey future me - Spotify access tokens expire after 1 hour!
    # IMPORTANT: Spotify might NOT return a new refresh_token - keep the old one!
    async def refresh_token(self, refresh_token: str) -> TokenResult:
        """Refresh an expired access token.

        Raises:
            TokenRefreshException: Refresh token revoked or app access denied
            httpx.HTTPStatusError: For other non-200 responses
            httpx.RequestError: Transport failure
        """
        token_data = await self._client.refresh_token(refresh_token)

        logger.debug("Successfully refreshed access token")

        return _to_token_result(token_data)


def _to_token_result(token_data: dict[str, Any]) -> TokenResult:
    return TokenResult(
        access_token=token_data["access_token"],
        refresh_token=token_data.get("refresh_token"),  # May be None on refresh
        expires_in=int(token_data.get("expires_in", 3600)),
        token_type=token_data.get("token_type", "Bearer"),
        scope=token_data.get("scope"),
    )
