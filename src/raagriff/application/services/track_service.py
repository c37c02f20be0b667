"""Single-track reads."""

from typing import Any

from raagriff.application.services.spotify_session import SpotifySession


class TrackService:
    def __init__(self, session: SpotifySession) -> None:
        self._session = session

    async def get_track(self, track_id: str) -> dict[str, Any]:
        """Track with album and artist stubs. Errors propagate."""
        return await self._session.client.get_track(track_id, self._session.access_token)
