"""Application lifecycle management for startup and shutdown tasks.

This module handles the FastAPI lifespan context manager: logging setup and the
two shared HTTP clients (Spotify, LRCLIB) that live on app.state.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from raagriff.config import get_settings
from raagriff.infrastructure.integrations import LrclibClient, SpotifyClient
from raagriff.infrastructure.observability import configure_logging

logger = logging.getLogger(__name__)


# Listen future me, everything before `yield` runs at STARTUP, everything after at
# SHUTDOWN. The try/finally makes sure the connection pools get closed even if
# something in between blows up.
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles:
    - Logging configuration
    - Shared SpotifyClient / LrclibClient creation (app.state)
    - Client shutdown
    """
    settings = get_settings()

    configure_logging(
        log_level=settings.log_level,
        json_format=settings.observability.log_json_format,
        app_name=settings.app_name,
    )
    logger.info("Starting application: %s", settings.app_name)

    if not settings.spotify.client_id:
        logger.warning(
            "SPOTIFY_CLIENT_ID is not set - /auth will answer 503 until it is configured"
        )

    app.state.spotify_client = SpotifyClient(
        settings.spotify, timeout=settings.http_timeout
    )
    app.state.lrclib_client = LrclibClient(settings.lyrics)
    try:
        yield
    finally:
        logger.info("Shutting down application")
        await app.state.spotify_client.close()
        await app.state.lrclib_client.close()
