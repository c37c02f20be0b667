"""Album pages: new releases and album detail."""

import asyncio
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from raagriff.api.dependencies import (
    get_album_service,
    get_artist_service,
    get_user_service,
)
from raagriff.api.routers.ui._shared import render_page
from raagriff.application.services import AlbumService, ArtistService, UserService
from raagriff.application.services.pagination import LOWER_LIMIT
from raagriff.domain.dtos import PageEnvelope

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/albums", response_class=HTMLResponse)
@router.get("/albums/pages/{page}", response_class=HTMLResponse)
async def albums(
    request: Request,
    page: int = 1,
    users: UserService = Depends(get_user_service),
    album_service: AlbumService = Depends(get_album_service),
) -> HTMLResponse:
    """New releases, one grid page at a time."""
    current_user, recently_played, new_releases = await asyncio.gather(
        users.get_profile(),
        users.get_recently_played_tracks(),
        album_service.get_new_releases(page),
    )
    return render_page(
        request,
        "albums.html",
        current_user,
        recently_played,
        title="New Releases",
        albums=new_releases,
    )


# The "more by" row needs the album's first artist, so it runs after the gather.
@router.get("/albums/{album_id}", response_class=HTMLResponse)
async def album_detail(
    request: Request,
    album_id: str,
    users: UserService = Depends(get_user_service),
    album_service: AlbumService = Depends(get_album_service),
    artist_service: ArtistService = Depends(get_artist_service),
) -> HTMLResponse:
    current_user, recently_played, album = await asyncio.gather(
        users.get_profile(),
        users.get_recently_played_tracks(),
        album_service.get_album(album_id),
    )

    first_artist = (album.get("artists") or [None])[0]
    more_by_artist = PageEnvelope.empty(limit=LOWER_LIMIT)
    if first_artist and first_artist.get("id"):
        more_by_artist = await artist_service.get_artist_albums(
            first_artist["id"], limit=LOWER_LIMIT
        )

    return render_page(
        request,
        "album.html",
        current_user,
        recently_played,
        album=album,
        first_artist=first_artist,
        more_by_artist=more_by_artist,
    )
