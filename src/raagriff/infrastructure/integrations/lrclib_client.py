"""LRCLIB HTTP client implementation (public lyrics database, no API key)."""

from typing import Any, cast

import httpx

from raagriff.config.settings import LyricsSettings


class LrclibClient:
    """HTTP client for the LRCLIB search API."""

    # LRCLIB asks clients to identify themselves.
    USER_AGENT = "RaagRiff/0.1.0"

    def __init__(
        self,
        settings: LyricsSettings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize LRCLIB client.

        Args:
            settings: Lyrics configuration settings
            http_client: Optional pre-built client (tests)
        """
        self.settings = settings
        self._client: httpx.AsyncClient | None = http_client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.settings.timeout)
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def search(self, query: str) -> list[dict[str, Any]]:
        """
        Free-text search over track and artist names.

        Args:
            query: e.g. "Song Artist"

        Returns:
            List of LRCLIB records (id, trackName, artistName, albumName,
            instrumental, plainLyrics, syncedLyrics). Empty list on 404.

        Raises:
            httpx.HTTPError: If the request fails
        """
        client = await self._get_client()
        try:
            response = await client.get(
                f"{self.settings.base_url}/search",
                params={"q": query},
                headers={"User-Agent": self.USER_AGENT},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return []
            raise
        data = response.json()
        if not isinstance(data, list):
            return []
        return cast(list[dict[str, Any]], data)
