"""Dependency injection for API routes."""

import logging
import random

from fastapi import Cookie, Depends, Request

from raagriff.api.session_cookies import (
    ACCESS_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
    request_original_url,
)
from raagriff.application.services import (
    AlbumService,
    ArtistService,
    CategoryService,
    LyricsService,
    PlaylistService,
    RecommendationService,
    RelatedArtistsService,
    SearchService,
    SpotifyAuthService,
    SpotifySession,
    TrackService,
    UserService,
)
from raagriff.application.services.auth_state import (
    AuthAction,
    redirect_location,
    resolve_auth_action,
)
from raagriff.config import Settings, get_settings
from raagriff.domain.exceptions import AuthenticationRequired
from raagriff.domain.ports import RandomSource
from raagriff.infrastructure.integrations import LrclibClient, SpotifyClient

logger = logging.getLogger(__name__)


# Hey future me - both HTTP clients are created ONCE in the lifespan handler and live on
# app.state (shared connection pool). Tests override these two dependencies with mocks
# instead of running the lifespan.
def get_spotify_client(request: Request) -> SpotifyClient:
    """Get the shared SpotifyClient from app state."""
    client: SpotifyClient = request.app.state.spotify_client
    return client


def get_lrclib_client(request: Request) -> LrclibClient:
    """Get the shared LrclibClient from app state."""
    client: LrclibClient = request.app.state.lrclib_client
    return client


# Fresh Random per request. Tests override with random.Random(seed).
def get_random_source() -> RandomSource:
    return random.Random()


def get_spotify_auth_service(
    client: SpotifyClient = Depends(get_spotify_client),
) -> SpotifyAuthService:
    return SpotifyAuthService(client)


# Listen future me, this is the auth gate for EVERY protected page. It only looks at
# which cookies exist (see auth_state.py for the table) and never touches them. If the
# user can't proceed we raise AuthenticationRequired with the redirect target and the
# exception handler turns it into a 302. FastAPI caches dependency results per request,
# so all the service factories below share one SpotifySession.
async def require_spotify_session(
    request: Request,
    access_token: str | None = Cookie(default=None, alias=ACCESS_TOKEN_COOKIE),
    refresh_token: str | None = Cookie(default=None, alias=REFRESH_TOKEN_COOKIE),
    client: SpotifyClient = Depends(get_spotify_client),
    rng: RandomSource = Depends(get_random_source),
    settings: Settings = Depends(get_settings),
) -> SpotifySession:
    """Resolve the auth state and build the request's SpotifySession.

    Raises:
        AuthenticationRequired: Unless both credential cookies are present
    """
    action = resolve_auth_action(access_token, refresh_token)
    if action is not AuthAction.PROCEED or access_token is None:
        location = redirect_location(action, request_original_url(request)) or "/login"
        logger.debug(f"Auth gate on {request.url.path}: {action.value} -> {location}")
        raise AuthenticationRequired(location, reason=action.value)

    return SpotifySession(
        client=client,
        access_token=access_token,
        market=settings.spotify.market,
        rng=rng,
    )


def get_user_service(
    session: SpotifySession = Depends(require_spotify_session),
) -> UserService:
    return UserService(session)


def get_album_service(
    session: SpotifySession = Depends(require_spotify_session),
) -> AlbumService:
    return AlbumService(session)


def get_artist_service(
    session: SpotifySession = Depends(require_spotify_session),
) -> ArtistService:
    return ArtistService(session)


def get_playlist_service(
    session: SpotifySession = Depends(require_spotify_session),
) -> PlaylistService:
    return PlaylistService(session)


def get_category_service(
    session: SpotifySession = Depends(require_spotify_session),
) -> CategoryService:
    return CategoryService(session)


def get_track_service(
    session: SpotifySession = Depends(require_spotify_session),
) -> TrackService:
    return TrackService(session)


def get_search_service(
    session: SpotifySession = Depends(require_spotify_session),
) -> SearchService:
    return SearchService(session)


def get_recommendation_service(
    session: SpotifySession = Depends(require_spotify_session),
) -> RecommendationService:
    return RecommendationService(session)


def get_related_artists_service(
    session: SpotifySession = Depends(require_spotify_session),
) -> RelatedArtistsService:
    return RelatedArtistsService(session)


def get_lyrics_service(
    client: LrclibClient = Depends(get_lrclib_client),
    settings: Settings = Depends(get_settings),
) -> LyricsService:
    return LyricsService(client, enabled=settings.lyrics.enabled)
