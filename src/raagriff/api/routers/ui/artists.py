"""Artist pages: artist detail and full discography."""

import asyncio
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from raagriff.api.dependencies import (
    get_artist_service,
    get_related_artists_service,
    get_user_service,
)
from raagriff.api.routers.ui._shared import render_page
from raagriff.application.services import (
    ArtistService,
    RelatedArtistsService,
    UserService,
)
from raagriff.application.services.pagination import LOWER_LIMIT

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/artists/{artist_id}", response_class=HTMLResponse)
async def artist_detail(
    request: Request,
    artist_id: str,
    users: UserService = Depends(get_user_service),
    artist_service: ArtistService = Depends(get_artist_service),
    related_service: RelatedArtistsService = Depends(get_related_artists_service),
) -> HTMLResponse:
    (
        current_user,
        recently_played,
        artist,
        albums,
        top_tracks,
        related_artists,
    ) = await asyncio.gather(
        users.get_profile(),
        users.get_recently_played_tracks(),
        artist_service.get_artist(artist_id),
        artist_service.get_artist_albums(artist_id, limit=LOWER_LIMIT),
        artist_service.get_artist_top_tracks(artist_id),
        related_service.get_related_artists(artist_id),
    )

    return render_page(
        request,
        "artist.html",
        current_user,
        recently_played,
        artist=artist,
        albums=albums,
        top_tracks=top_tracks,
        related_artists=related_artists,
    )


@router.get("/artists/{artist_id}/albums", response_class=HTMLResponse)
@router.get("/artists/{artist_id}/albums/pages/{page}", response_class=HTMLResponse)
async def artist_albums(
    request: Request,
    artist_id: str,
    page: int = 1,
    users: UserService = Depends(get_user_service),
    artist_service: ArtistService = Depends(get_artist_service),
) -> HTMLResponse:
    current_user, recently_played, artist, albums = await asyncio.gather(
        users.get_profile(),
        users.get_recently_played_tracks(),
        artist_service.get_artist(artist_id),
        artist_service.get_artist_albums(artist_id, page),
    )

    return render_page(
        request,
        "albums.html",
        current_user,
        recently_played,
        title=artist.get("name", "Albums"),
        albums=albums,
        is_artist_album=True,
    )
