"""Application services.

Hey future me - services are built per request around a SpotifySession (see
api/dependencies.py). They return raw Spotify dicts or PageEnvelopes; page
handlers pass those straight into templates.
"""

from raagriff.application.services.album_service import AlbumService
from raagriff.application.services.artist_service import ArtistService
from raagriff.application.services.category_service import CategoryService
from raagriff.application.services.lyrics_service import LyricsService
from raagriff.application.services.playlist_service import PlaylistService
from raagriff.application.services.recommendations import RecommendationService
from raagriff.application.services.related_artists import RelatedArtistsService
from raagriff.application.services.search_service import SearchService
from raagriff.application.services.spotify_auth_service import SpotifyAuthService
from raagriff.application.services.spotify_session import SpotifySession
from raagriff.application.services.track_service import TrackService
from raagriff.application.services.user_service import UserService

__all__ = [
    "AlbumService",
    "ArtistService",
    "CategoryService",
    "LyricsService",
    "PlaylistService",
    "RecommendationService",
    "RelatedArtistsService",
    "SearchService",
    "SpotifyAuthService",
    "SpotifySession",
    "TrackService",
    "UserService",
]
