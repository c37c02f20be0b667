"""Catalog search for the search pages."""

import logging
from typing import Any
from urllib.parse import quote

from raagriff.application.services.pagination import (
    DEFAULT_LIMIT,
    build_page_envelope,
    calculate_offset,
)
from raagriff.application.services.spotify_session import SpotifySession
from raagriff.domain.dtos import PageEnvelope

logger = logging.getLogger(__name__)

ALL_RESULTS_LIMIT = 12
TRACK_RESULTS_LIMIT = 50

# URL segment -> (Spotify search type, key of the paging object in the response)
SEARCH_TYPES: dict[str, tuple[str, str]] = {
    "albums": ("album", "albums"),
    "artists": ("artist", "artists"),
    "playlists": ("playlist", "playlists"),
    "tracks": ("track", "tracks"),
}


def default_limit_for(search_type: str) -> int:
    """Track lists are compact rows, so the tracks page shows more per page."""
    return TRACK_RESULTS_LIMIT if search_type == "tracks" else DEFAULT_LIMIT


class SearchService:
    def __init__(self, session: SpotifySession) -> None:
        self._session = session

    async def search_all(self, query: str) -> dict[str, list[dict[str, Any]]]:
        """First results for every type, keyed "albums"/"artists"/"playlists"/"tracks"."""
        session = self._session
        result = await session.client.search(
            query,
            [spotify_type for spotify_type, _ in SEARCH_TYPES.values()],
            session.access_token,
            limit=ALL_RESULTS_LIMIT,
        )
        return {
            key: [item for item in (result.get(key) or {}).get("items") or [] if item]
            for _, key in SEARCH_TYPES.values()
        }

    async def search_by_type(
        self,
        search_type: str,
        query: str,
        page: int | None = 1,
        limit: int | None = None,
    ) -> PageEnvelope:
        """One page of results for a single type.

        Args:
            search_type: "albums", "artists", "playlists" or "tracks"
            query: Raw user query
            page: 1-indexed page number
            limit: Page size (defaults per type)

        Raises:
            ValueError: Unknown search_type
        """
        if search_type not in SEARCH_TYPES:
            raise ValueError(f"Unknown search type: {search_type}")
        spotify_type, key = SEARCH_TYPES[search_type]
        limit = limit or default_limit_for(search_type)

        session = self._session
        result = await session.client.search(
            query,
            [spotify_type],
            session.access_token,
            limit=limit,
            offset=calculate_offset(page, limit),
        )
        base_url = f"/search/{search_type}/{quote(query, safe='')}"
        return build_page_envelope(result.get(key), base_url, page, limit)
