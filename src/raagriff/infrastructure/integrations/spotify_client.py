"""Spotify HTTP client for the token endpoint and Web API catalog reads."""

import base64
import logging
from typing import Any, cast
from urllib.parse import urlencode

import httpx

from raagriff.config.settings import SpotifySettings
from raagriff.domain.exceptions import ConfigurationError, TokenRefreshException

logger = logging.getLogger(__name__)


class SpotifyClient:
    """HTTP client for Spotify OAuth (Basic auth) and catalog reads (Bearer auth).

    Upstream status codes are propagated unchanged as httpx.HTTPStatusError - no
    retries, no caching. Callers (the session-failure handler) decide what a 401
    or a 5xx means for the user's cookies.
    """

    # Hey future me, the AsyncClient has to be born inside the running event loop, so
    # unless one is injected (tests pass one built on httpx.MockTransport) it is created
    # on first use in _get_client().
    def __init__(
        self,
        settings: SpotifySettings,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        """
        Initialize Spotify client.

        Args:
            settings: Spotify configuration settings
            http_client: Optional pre-built client (tests, shared pools)
            timeout: Request timeout in seconds for the lazily built client
        """
        self.settings = settings
        self._client: httpx.AsyncClient | None = http_client
        self._timeout = timeout

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    # Called by the lifespan handler at shutdown.
    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _basic_auth_header(self) -> str:
        credentials = f"{self.settings.client_id}:{self.settings.client_secret}"
        encoded = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
        return f"Basic {encoded}"

    # Listen future me, this builds the URL to send users to Spotify for auth. The state
    # param prevents CSRF - the callback MUST compare it to the cookie we set.
    def get_authorization_url(self, state: str) -> str:
        """
        Generate Spotify OAuth authorization URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL

        Raises:
            ConfigurationError: If client_id or redirect_uri is not configured
        """
        for env_name, value in (
            ("SPOTIFY_CLIENT_ID", self.settings.client_id),
            ("SPOTIFY_REDIRECT_URI", self.settings.redirect_uri),
        ):
            if not value.strip():
                raise ConfigurationError(
                    f"{env_name} is not configured. Set it in the environment or .env "
                    "(apps are registered at https://developer.spotify.com/dashboard)"
                )

        params = {
            "response_type": "code",
            "client_id": self.settings.client_id,
            "scope": self.settings.scopes,
            "redirect_uri": self.settings.redirect_uri,
            "state": state,
        }
        return f"{self.settings.authorize_url}?{urlencode(params)}"

    async def _post_token(self, data: dict[str, str]) -> httpx.Response:
        client = await self._get_client()
        return await client.post(
            self.settings.token_url,
            data=data,
            headers={
                "Authorization": self._basic_auth_header(),
                "Content-Type": "application/x-www-form-urlencoded",
            },
        )

    # Yo future me, this is THE critical step after user auth. The code is single-use and
    # expires in 10 minutes. redirect_uri MUST match what went into the authorize URL.
    async def exchange_code(self, code: str) -> dict[str, Any]:
        """
        Exchange authorization code for access token.

        Args:
            code: Authorization code

        Returns:
            Token response with access_token, refresh_token, expires_in

        Raises:
            httpx.HTTPStatusError: If Spotify answers with anything but 200
            httpx.RequestError: On transport failure
        """
        response = await self._post_token(
            {
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": self.settings.redirect_uri,
            }
        )
        _raise_unless_ok(response)
        return cast(dict[str, Any], response.json())

    # Hey future me, Spotify returns 400 {"error": "invalid_grant"} when the refresh token
    # was revoked. We translate that (and 401/403) into TokenRefreshException so the
    # refresh route can tell "log in again" apart from a flaky network.
    async def refresh_token(self, refresh_token: str) -> dict[str, Any]:
        """
        Refresh access token using refresh token.

        Args:
            refresh_token: Refresh token from previous authentication

        Returns:
            Token response with access_token, expires_in and - only if Spotify
            rotated it - a new refresh_token

        Raises:
            TokenRefreshException: If refresh token is invalid/revoked (requires re-auth)
            httpx.HTTPStatusError: For other HTTP errors
        """
        response = await self._post_token(
            {
                "grant_type": "refresh_token",
                "refresh_token": refresh_token,
            }
        )

        if response.status_code == 400:
            try:
                error_data = response.json()
            except ValueError:
                error_data = {}
            if error_data.get("error") == "invalid_grant":
                description = error_data.get(
                    "error_description", "Refresh token is invalid or has been revoked"
                )
                raise TokenRefreshException(
                    message=f"Refresh token invalid: {description}",
                    error_code="invalid_grant",
                    http_status=400,
                )

        if response.status_code in (401, 403):
            raise TokenRefreshException(
                message="Spotify access denied. Please re-authenticate with Spotify.",
                error_code="access_denied",
                http_status=response.status_code,
            )

        _raise_unless_ok(response)
        return cast(dict[str, Any], response.json())

    # Hey future me - EVERY catalog read goes through here. Bearer auth, no retry.
    async def get(
        self,
        path: str,
        access_token: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """GET a Web API path (relative to api_base_url) and return the JSON body.

        Raises:
            httpx.HTTPStatusError: On any non-2xx response (status preserved)
            httpx.RequestError: On transport failure
        """
        client = await self._get_client()
        response = await client.get(
            f"{self.settings.api_base_url}{path}",
            params=params,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        if response.is_error:
            logger.debug(
                "Spotify GET %s failed with %s", path, response.status_code
            )
        response.raise_for_status()
        return cast(dict[str, Any], response.json())

    async def get_current_user(self, access_token: str) -> dict[str, Any]:
        """Get current authenticated user's profile (raw Spotify JSON)."""
        return await self.get("/me", access_token)

    async def get_recently_played(
        self, access_token: str, limit: int = 28
    ) -> dict[str, Any]:
        """Get the user's recently played tracks (cursor-paged, max 50)."""
        return await self.get(
            "/me/player/recently-played", access_token, {"limit": min(limit, 50)}
        )

    async def get_top_items(
        self, item_type: str, access_token: str, limit: int = 28, offset: int = 0
    ) -> dict[str, Any]:
        """Get the user's top "artists" or "tracks"."""
        return await self.get(
            f"/me/top/{item_type}",
            access_token,
            {"limit": min(limit, 50), "offset": offset},
        )

    async def get_followed_artists(
        self, access_token: str, limit: int = 28
    ) -> dict[str, Any]:
        """Get artists the user follows (cursor-paged)."""
        return await self.get(
            "/me/following", access_token, {"type": "artist", "limit": min(limit, 50)}
        )

    async def get_new_releases(
        self, access_token: str, limit: int = 12, offset: int = 0
    ) -> dict[str, Any]:
        """Get a page of new album releases."""
        return await self.get(
            "/browse/new-releases",
            access_token,
            {"limit": min(limit, 50), "offset": offset},
        )

    async def get_album(self, album_id: str, access_token: str) -> dict[str, Any]:
        """Get single album by ID (includes the first page of tracks)."""
        return await self.get(f"/albums/{album_id}", access_token)

    async def get_artist(self, artist_id: str, access_token: str) -> dict[str, Any]:
        """Get single artist by ID."""
        return await self.get(f"/artists/{artist_id}", access_token)

    # Hey future me, Spotify returns null in the array for unknown IDs - filter those out.
    async def get_several_artists(
        self, artist_ids: list[str], access_token: str
    ) -> list[dict[str, Any]]:
        """Get up to 50 artists in one request."""
        if not artist_ids:
            return []
        result = await self.get(
            "/artists", access_token, {"ids": ",".join(artist_ids[:50])}
        )
        return [artist for artist in result.get("artists", []) if artist is not None]

    async def get_artist_albums(
        self,
        artist_id: str,
        access_token: str,
        limit: int = 28,
        offset: int = 0,
        include_groups: str = "album,single",
    ) -> dict[str, Any]:
        """Get a single page of albums for an artist."""
        return await self.get(
            f"/artists/{artist_id}/albums",
            access_token,
            {
                "include_groups": include_groups,
                "limit": min(limit, 50),
                "offset": offset,
            },
        )

    async def get_artist_top_tracks(
        self, artist_id: str, access_token: str, market: str = "US"
    ) -> list[dict[str, Any]]:
        """Get an artist's top tracks (up to 10, ranked by popularity)."""
        result = await self.get(
            f"/artists/{artist_id}/top-tracks", access_token, {"market": market}
        )
        return cast(list[dict[str, Any]], result.get("tracks", []))

    async def get_playlist(self, playlist_id: str, access_token: str) -> dict[str, Any]:
        """Get playlist details including the first page of tracks."""
        return await self.get(f"/playlists/{playlist_id}", access_token)

    async def get_categories(
        self, access_token: str, limit: int = 28, offset: int = 0
    ) -> dict[str, Any]:
        """Get a page of browse categories."""
        return await self.get(
            "/browse/categories",
            access_token,
            {"limit": min(limit, 50), "offset": offset},
        )

    async def get_category(self, category_id: str, access_token: str) -> dict[str, Any]:
        """Get a single browse category."""
        return await self.get(f"/browse/categories/{category_id}", access_token)

    async def get_category_playlists(
        self, category_id: str, access_token: str, limit: int = 28, offset: int = 0
    ) -> dict[str, Any]:
        """Get a page of playlists tagged with a browse category."""
        return await self.get(
            f"/browse/categories/{category_id}/playlists",
            access_token,
            {"limit": min(limit, 50), "offset": offset},
        )

    async def get_track(self, track_id: str, access_token: str) -> dict[str, Any]:
        """Get single track by ID."""
        return await self.get(f"/tracks/{track_id}", access_token)

    # Hey future me, central search wrapper - every search (page handlers AND the
    # recommendation heuristics) goes through here. An empty query is passed through
    # as-is; Spotify rejects it and the heuristics treat that as "no matches".
    async def search(
        self,
        query: str,
        types: list[str],
        access_token: str,
        limit: int = 20,
        offset: int = 0,
        market: str | None = None,
    ) -> dict[str, Any]:
        """Search across Spotify resource types (raw JSON)."""
        params: dict[str, str | int] = {
            "q": query,
            "type": ",".join(types),
            "limit": min(limit, 50),
            "offset": offset,
        }
        if market:
            params["market"] = market
        return await self.get("/search", access_token, params)


def _raise_unless_ok(response: httpx.Response) -> None:
    """Token endpoints only count an exact 200 as success."""
    if response.status_code != 200:
        raise httpx.HTTPStatusError(
            f"Spotify token endpoint returned {response.status_code}",
            request=response.request,
            response=response,
        )
