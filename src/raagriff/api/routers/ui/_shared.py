"""Shared utilities for UI routers.

Hey future me - this module holds what every page router needs:
- the Jinja2Templates instance (with our template globals)
- render_page(), which adds the current user and the recently played
  sidebar that every protected page shows
"""

import logging
from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from raagriff.application.services.formatting import (
    artist_names,
    format_timestamp,
    image_url,
)

logger = logging.getLogger(__name__)

# Hey future me - computed relative to THIS file so it works from the source tree and
# from site-packages alike: ui/ -> routers/ -> api/ -> raagriff/ -> templates/.
_TEMPLATES_DIR = Path(__file__).parent.parent.parent.parent / "templates"
templates = Jinja2Templates(directory=str(_TEMPLATES_DIR))

# Templates call these instead of poking at Spotify JSON directly
# ({{ image_url(album.images) }} rather than album.images[0].url).
templates.env.globals["format_timestamp"] = format_timestamp
templates.env.globals["image_url"] = image_url
templates.env.globals["artist_names"] = artist_names


def render_page(
    request: Request,
    template_name: str,
    current_user: dict[str, Any],
    recently_played_tracks: list[dict[str, Any]],
    **context: Any,
) -> HTMLResponse:
    """Render a full page with the shared header/sidebar context."""
    return templates.TemplateResponse(
        request,
        template_name,
        {
            "current_user": current_user,
            "recently_played_tracks": recently_played_tracks,
            **context,
        },
    )
