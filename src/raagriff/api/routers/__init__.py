"""API routers.

Hey future me - no /api prefix here: page routes live at the site root
(/albums, /profile ...) exactly as the browser sees them. The only JSON route is
/api/token, which spells out its own path.
"""

from fastapi import APIRouter

from raagriff.api.routers import auth
from raagriff.api.routers.ui import router as ui_router

router = APIRouter()
router.include_router(auth.router)
router.include_router(ui_router)

__all__ = ["router"]
