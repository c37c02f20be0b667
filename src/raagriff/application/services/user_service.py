"""Current-user reads: profile, listening history, top items, follows."""

from typing import Any

from raagriff.application.services.pagination import (
    DEFAULT_LIMIT,
    build_page_envelope,
    calculate_offset,
)
from raagriff.application.services.spotify_session import SpotifySession
from raagriff.domain.dtos import PageEnvelope


class UserService:
    """Everything under /me."""

    def __init__(self, session: SpotifySession) -> None:
        self._session = session

    async def get_profile(self) -> dict[str, Any]:
        return await self._session.client.get_current_user(self._session.access_token)

    # Hey future me - every page shows the recently played sidebar, so this runs on
    # nearly every request (alongside get_profile).
    async def get_recently_played_tracks(
        self, limit: int = DEFAULT_LIMIT
    ) -> list[dict[str, Any]]:
        """Recently played tracks, newest first, unwrapped from their play records."""
        result = await self._session.client.get_recently_played(
            self._session.access_token, limit=limit
        )
        return [
            entry["track"]
            for entry in result.get("items") or []
            if entry and entry.get("track")
        ]

    async def _get_top(
        self, item_type: str, page: int | None, limit: int, base_url: str
    ) -> PageEnvelope:
        result = await self._session.client.get_top_items(
            item_type,
            self._session.access_token,
            limit=limit,
            offset=calculate_offset(page, limit),
        )
        return build_page_envelope(result, base_url, page, limit)

    async def get_top_artists(
        self,
        page: int | None = 1,
        limit: int = DEFAULT_LIMIT,
        base_url: str = "/profile/top/artists",
    ) -> PageEnvelope:
        return await self._get_top("artists", page, limit, base_url)

    async def get_top_tracks(
        self,
        page: int | None = 1,
        limit: int = DEFAULT_LIMIT,
        base_url: str = "/profile/top/tracks",
    ) -> PageEnvelope:
        return await self._get_top("tracks", page, limit, base_url)

    async def get_followed_artists(self, limit: int = DEFAULT_LIMIT) -> list[dict[str, Any]]:
        """Followed artists (first cursor page only)."""
        result = await self._session.client.get_followed_artists(
            self._session.access_token, limit=limit
        )
        return [a for a in (result.get("artists") or {}).get("items") or [] if a]
