"""Home page: recently played plus the recommendation rows."""

import asyncio
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from raagriff.api.dependencies import get_recommendation_service, get_user_service
from raagriff.api.routers.ui._shared import render_page
from raagriff.application.services import RecommendationService, UserService
from raagriff.application.services.pagination import LOWER_LIMIT

logger = logging.getLogger(__name__)

router = APIRouter()


# Hey future me - recommended albums and featured playlists swallow their own errors
# (empty rows), recommended artists does not. A dead token still surfaces through
# get_profile and ends in the session-failure redirect.
@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    users: UserService = Depends(get_user_service),
    recommendations: RecommendationService = Depends(get_recommendation_service),
) -> HTMLResponse:
    (
        current_user,
        recently_played,
        recommended_albums,
        recommended_artists,
        featured_playlists,
    ) = await asyncio.gather(
        users.get_profile(),
        users.get_recently_played_tracks(),
        recommendations.get_recommended_albums(LOWER_LIMIT),
        recommendations.get_recommended_artists(LOWER_LIMIT),
        recommendations.get_featured_playlists(1, LOWER_LIMIT),
    )

    return render_page(
        request,
        "home.html",
        current_user,
        recently_played,
        recommended_albums=recommended_albums,
        recommended_artists=recommended_artists,
        featured_playlists=featured_playlists,
    )
