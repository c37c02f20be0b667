"""Profile pages: overview, top artists, top tracks."""

import asyncio
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from raagriff.api.dependencies import get_user_service
from raagriff.api.routers.ui._shared import render_page
from raagriff.application.services import UserService
from raagriff.application.services.pagination import DEFAULT_LIMIT, LOWER_LIMIT

logger = logging.getLogger(__name__)

router = APIRouter()

TOP_TRACKS_PAGE_LIMIT = 50


@router.get("/profile", response_class=HTMLResponse)
async def profile(
    request: Request,
    users: UserService = Depends(get_user_service),
) -> HTMLResponse:
    (
        current_user,
        recently_played,
        top_artists,
        top_tracks,
        followed_artists,
    ) = await asyncio.gather(
        users.get_profile(),
        users.get_recently_played_tracks(),
        users.get_top_artists(limit=LOWER_LIMIT),
        users.get_top_tracks(limit=LOWER_LIMIT // 2),
        users.get_followed_artists(),
    )
    return render_page(
        request,
        "profile.html",
        current_user,
        recently_played,
        top_artists=top_artists,
        top_tracks=top_tracks,
        followed_artists=followed_artists,
    )


@router.get("/profile/top/artists", response_class=HTMLResponse)
@router.get("/profile/top/artists/pages/{page}", response_class=HTMLResponse)
async def top_artists(
    request: Request,
    page: int = 1,
    users: UserService = Depends(get_user_service),
) -> HTMLResponse:
    current_user, recently_played, artists = await asyncio.gather(
        users.get_profile(),
        users.get_recently_played_tracks(),
        users.get_top_artists(page, DEFAULT_LIMIT),
    )
    return render_page(
        request,
        "top_artists.html",
        current_user,
        recently_played,
        title="Your Top Artists",
        artists=artists,
    )


@router.get("/profile/top/tracks", response_class=HTMLResponse)
@router.get("/profile/top/tracks/pages/{page}", response_class=HTMLResponse)
async def top_tracks(
    request: Request,
    page: int = 1,
    users: UserService = Depends(get_user_service),
) -> HTMLResponse:
    current_user, recently_played, tracks = await asyncio.gather(
        users.get_profile(),
        users.get_recently_played_tracks(),
        users.get_top_tracks(page, TOP_TRACKS_PAGE_LIMIT),
    )
    return render_page(
        request,
        "top_tracks.html",
        current_user,
        recently_played,
        title="Your Top Tracks",
        tracks=tracks,
    )
