"""Playlist reads: single playlists and browse-category playlists."""

from typing import Any

from raagriff.application.services.pagination import (
    DEFAULT_LIMIT,
    build_page_envelope,
    calculate_offset,
)
from raagriff.application.services.spotify_session import SpotifySession
from raagriff.domain.dtos import PageEnvelope


class PlaylistService:
    """Playlist pages. Featured playlists live in RecommendationService."""

    def __init__(self, session: SpotifySession) -> None:
        self._session = session

    async def get_playlist(self, playlist_id: str) -> dict[str, Any]:
        """Playlist with its first page of tracks. Errors propagate."""
        return await self._session.client.get_playlist(
            playlist_id, self._session.access_token
        )

    async def get_category_playlists(
        self,
        category_id: str,
        page: int | None = 1,
        limit: int = DEFAULT_LIMIT,
        base_url: str | None = None,
    ) -> PageEnvelope:
        """One page of playlists tagged with a browse category."""
        session = self._session
        result = await session.client.get_category_playlists(
            category_id,
            session.access_token,
            limit=limit,
            offset=calculate_offset(page, limit),
        )
        return build_page_envelope(
            result.get("playlists"),
            base_url or f"/explore/{category_id}",
            page,
            limit,
            name=result.get("message"),
        )
