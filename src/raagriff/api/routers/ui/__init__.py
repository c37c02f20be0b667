"""UI Router Package - server-rendered pages.

Module Structure:
- _shared.py    - Jinja2 templates + render_page()
- home.py       - / (recently played, recommendations)
- albums.py     - /albums, /albums/{id}
- artists.py    - /artists/{id}, /artists/{id}/albums
- playlists.py  - /playlists, /playlists/{id}
- explore.py    - /explore, /explore/{category_id}
- profile.py    - /profile, /profile/top/artists, /profile/top/tracks
- search.py     - POST /search, /search/all/{q}, /search/{type}/{q}
- tracks.py     - /tracks/{id}

Every GET route here depends on require_spotify_session (through the service
factories), so none of them runs without both credential cookies.
"""

from fastapi import APIRouter

from raagriff.api.routers.ui.albums import router as albums_router
from raagriff.api.routers.ui.artists import router as artists_router
from raagriff.api.routers.ui.explore import router as explore_router
from raagriff.api.routers.ui.home import router as home_router
from raagriff.api.routers.ui.playlists import router as playlists_router
from raagriff.api.routers.ui.profile import router as profile_router
from raagriff.api.routers.ui.search import router as search_router
from raagriff.api.routers.ui.tracks import router as tracks_router

# Hey future me - no prefixes, each route spells out its full path.
router = APIRouter(tags=["UI"])

router.include_router(home_router)
router.include_router(albums_router)
router.include_router(artists_router)
router.include_router(playlists_router)
router.include_router(explore_router)
router.include_router(profile_router)
router.include_router(search_router)
router.include_router(tracks_router)

__all__ = ["router"]
