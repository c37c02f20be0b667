"""FastAPI application entry point.

Run with:
    uvicorn raagriff.main:app --port 5000
"""

from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from raagriff import __version__
from raagriff.api.exception_handlers import register_exception_handlers
from raagriff.api.routers import router
from raagriff.config import get_settings
from raagriff.infrastructure.lifecycle import lifespan
from raagriff.infrastructure.observability import RequestLoggingMiddleware

_STATIC_DIR = Path(__file__).parent / "static"


def create_app() -> FastAPI:
    """Build the application: middleware, exception handlers, static files, routes."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
        # Server-rendered site, no public API surface to document.
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None,
    )

    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)
    app.mount("/static", StaticFiles(directory=str(_STATIC_DIR)), name="static")
    app.include_router(router)

    return app


app = create_app()
