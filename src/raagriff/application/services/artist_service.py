"""Artist reads: profile, discography pages, top tracks."""

from typing import Any

from raagriff.application.services.pagination import (
    DEFAULT_LIMIT,
    build_page_envelope,
    calculate_offset,
)
from raagriff.application.services.spotify_session import SpotifySession
from raagriff.domain.dtos import PageEnvelope


class ArtistService:
    """Artist pages."""

    def __init__(self, session: SpotifySession) -> None:
        self._session = session

    async def get_artist(self, artist_id: str) -> dict[str, Any]:
        return await self._session.client.get_artist(artist_id, self._session.access_token)

    async def get_several_artists(self, artist_ids: list[str]) -> list[dict[str, Any]]:
        return await self._session.client.get_several_artists(
            artist_ids, self._session.access_token
        )

    async def get_artist_albums(
        self,
        artist_id: str,
        page: int | None = 1,
        limit: int = DEFAULT_LIMIT,
        base_url: str | None = None,
    ) -> PageEnvelope:
        """One page of an artist's albums and singles.

        base_url defaults to the artist's own discography route so the
        "next" link of a truncated list (album page's "more by") still works.
        """
        session = self._session
        result = await session.client.get_artist_albums(
            artist_id,
            session.access_token,
            limit=limit,
            offset=calculate_offset(page, limit),
        )
        return build_page_envelope(
            result, base_url or f"/artists/{artist_id}/albums", page, limit
        )

    async def get_artist_top_tracks(self, artist_id: str) -> list[dict[str, Any]]:
        session = self._session
        return await session.client.get_artist_top_tracks(
            artist_id, session.access_token, market=session.market
        )
