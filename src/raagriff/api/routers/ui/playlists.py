"""Playlist pages: featured playlists and playlist detail."""

import asyncio
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from raagriff.api.dependencies import (
    get_playlist_service,
    get_recommendation_service,
    get_user_service,
)
from raagriff.api.routers.ui._shared import render_page
from raagriff.application.services import (
    PlaylistService,
    RecommendationService,
    UserService,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# Hey future me - the featured pool is reshuffled on every request, so page 2 is
# "another random slice", not a stable continuation of page 1.
@router.get("/playlists", response_class=HTMLResponse)
@router.get("/playlists/pages/{page}", response_class=HTMLResponse)
async def playlists(
    request: Request,
    page: int = 1,
    users: UserService = Depends(get_user_service),
    recommendations: RecommendationService = Depends(get_recommendation_service),
) -> HTMLResponse:
    current_user, recently_played, featured = await asyncio.gather(
        users.get_profile(),
        users.get_recently_played_tracks(),
        recommendations.get_featured_playlists(page),
    )
    return render_page(
        request,
        "playlists.html",
        current_user,
        recently_played,
        title="Featured Playlists",
        playlists=featured,
    )


@router.get("/playlists/{playlist_id}", response_class=HTMLResponse)
async def playlist_detail(
    request: Request,
    playlist_id: str,
    users: UserService = Depends(get_user_service),
    playlist_service: PlaylistService = Depends(get_playlist_service),
) -> HTMLResponse:
    current_user, recently_played, playlist = await asyncio.gather(
        users.get_profile(),
        users.get_recently_played_tracks(),
        playlist_service.get_playlist(playlist_id),
    )
    return render_page(
        request, "playlist.html", current_user, recently_played, playlist=playlist
    )
