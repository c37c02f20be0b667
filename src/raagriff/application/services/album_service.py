"""Album reads: new releases and single albums."""

import logging
from typing import Any

from raagriff.application.services.pagination import (
    LOWER_LIMIT,
    build_page_envelope,
    calculate_offset,
)
from raagriff.application.services.spotify_session import SpotifySession
from raagriff.domain.dtos import PageEnvelope

logger = logging.getLogger(__name__)


class AlbumService:
    """Album pages."""

    def __init__(self, session: SpotifySession) -> None:
        self._session = session

    async def get_new_releases(
        self, page: int | None = 1, limit: int = LOWER_LIMIT, base_url: str = "/albums"
    ) -> PageEnvelope:
        """One page of Spotify's new releases."""
        session = self._session
        result = await session.client.get_new_releases(
            session.access_token, limit=limit, offset=calculate_offset(page, limit)
        )
        return build_page_envelope(result.get("albums"), base_url, page, limit)

    async def get_album(self, album_id: str) -> dict[str, Any]:
        """Full album (first page of tracks included). Errors propagate."""
        return await self._session.client.get_album(album_id, self._session.access_token)
