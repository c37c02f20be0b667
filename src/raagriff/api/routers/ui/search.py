"""Search pages.

Hey future me - the search bar posts a form to /search and we redirect to a GET
URL (/search/all/<query>) so results are bookmarkable and the back button works.
"""

import asyncio
import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, Form, Path, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from raagriff.api.dependencies import get_search_service, get_user_service
from raagriff.api.routers.ui._shared import render_page
from raagriff.api.session_cookies import redirect
from raagriff.application.services import SearchService, UserService

logger = logging.getLogger(__name__)

router = APIRouter()

_SEARCH_TYPE_PATTERN = "^(albums|artists|playlists|tracks)$"


@router.post("/search")
async def search_submit(query: str = Form(default="")) -> RedirectResponse:
    """Form POST -> 303 to the "all results" page."""
    query = query.strip()
    if not query:
        return redirect("/", status_code=303)
    return redirect(f"/search/all/{quote(query, safe='')}", status_code=303)


@router.get("/search/all/{query:path}", response_class=HTMLResponse)
async def search_all(
    request: Request,
    query: str,
    users: UserService = Depends(get_user_service),
    search_service: SearchService = Depends(get_search_service),
) -> HTMLResponse:
    current_user, recently_played, results = await asyncio.gather(
        users.get_profile(),
        users.get_recently_played_tracks(),
        search_service.search_all(query),
    )
    return render_page(
        request,
        "search_all.html",
        current_user,
        recently_played,
        search_type="all",
        query=query,
        results=results,
    )


# Hey future me - queries like "AC/DC" arrive with their slash decoded, hence the path
# converters. The /pages/{page} route sits on the lower decorator so it is registered
# (and matched) before the bare form swallows the suffix into the query.
@router.get("/search/{search_type}/{query:path}", response_class=HTMLResponse)
@router.get("/search/{search_type}/{query:path}/pages/{page:int}", response_class=HTMLResponse)
async def search_by_type(
    request: Request,
    query: str,
    search_type: str = Path(pattern=_SEARCH_TYPE_PATTERN),
    page: int = 1,
    users: UserService = Depends(get_user_service),
    search_service: SearchService = Depends(get_search_service),
) -> HTMLResponse:
    current_user, recently_played, results = await asyncio.gather(
        users.get_profile(),
        users.get_recently_played_tracks(),
        search_service.search_by_type(search_type, query, page),
    )
    return render_page(
        request,
        "search_results.html",
        current_user,
        recently_played,
        search_type=search_type,
        query=query,
        results=results,
    )
