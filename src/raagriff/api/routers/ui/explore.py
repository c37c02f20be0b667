"""Explore pages: browse categories and the playlists inside one."""

import asyncio
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from raagriff.api.dependencies import (
    get_category_service,
    get_playlist_service,
    get_user_service,
)
from raagriff.api.routers.ui._shared import render_page
from raagriff.application.services import CategoryService, PlaylistService, UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/explore", response_class=HTMLResponse)
@router.get("/explore/pages/{page}", response_class=HTMLResponse)
async def explore(
    request: Request,
    page: int = 1,
    users: UserService = Depends(get_user_service),
    category_service: CategoryService = Depends(get_category_service),
) -> HTMLResponse:
    current_user, recently_played, categories = await asyncio.gather(
        users.get_profile(),
        users.get_recently_played_tracks(),
        category_service.get_categories(page),
    )
    return render_page(
        request, "explore.html", current_user, recently_played, categories=categories
    )


@router.get("/explore/{category_id}", response_class=HTMLResponse)
@router.get("/explore/{category_id}/pages/{page}", response_class=HTMLResponse)
async def explore_category(
    request: Request,
    category_id: str,
    page: int = 1,
    users: UserService = Depends(get_user_service),
    category_service: CategoryService = Depends(get_category_service),
    playlist_service: PlaylistService = Depends(get_playlist_service),
) -> HTMLResponse:
    current_user, recently_played, category, category_playlists = await asyncio.gather(
        users.get_profile(),
        users.get_recently_played_tracks(),
        category_service.get_category(category_id),
        playlist_service.get_category_playlists(category_id, page),
    )
    return render_page(
        request,
        "category.html",
        current_user,
        recently_played,
        category=category,
        playlists=category_playlists,
    )
