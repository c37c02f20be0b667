"""External service integrations (Spotify Web API, LRCLIB)."""

from raagriff.infrastructure.integrations.lrclib_client import LrclibClient
from raagriff.infrastructure.integrations.spotify_client import SpotifyClient

__all__ = ["LrclibClient", "SpotifyClient"]
