"""Custom exception handlers for the FastAPI application.

Hey future me - page handlers never catch upstream errors themselves. They let
httpx exceptions propagate and the handlers below pick the redirect (see
session_cookies.session_failure_response). Nothing here renders an error page;
every failure on a protected page ends in a redirect.
"""

import logging

import httpx
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from raagriff.api.session_cookies import redirect, session_failure_response
from raagriff.config import get_settings
from raagriff.domain.exceptions import AuthenticationRequired, ConfigurationError

logger = logging.getLogger(__name__)


# Hey future me, call this during create_app(), BEFORE any request arrives.
def register_exception_handlers(app: FastAPI) -> None:
    """Register handlers for the auth gate, upstream failures and misconfiguration.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(AuthenticationRequired)
    async def authentication_required_handler(
        request: Request, exc: AuthenticationRequired
    ) -> RedirectResponse:
        """Auth gate said no: plain 302, cookies untouched."""
        return redirect(exc.location)

    @app.exception_handler(httpx.HTTPStatusError)
    async def upstream_status_error_handler(
        request: Request, exc: httpx.HTTPStatusError
    ) -> RedirectResponse:
        return session_failure_response(request, exc, get_settings().session)

    @app.exception_handler(httpx.RequestError)
    async def upstream_transport_error_handler(
        request: Request, exc: httpx.RequestError
    ) -> RedirectResponse:
        return session_failure_response(request, exc, get_settings().session)

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(
        request: Request, exc: ConfigurationError
    ) -> JSONResponse:
        """Handle configuration errors with 503 Service Unavailable."""
        logger.error(
            "Configuration error at %s: %s",
            request.url.path,
            exc.message,
            extra={"path": request.url.path, "error": exc.message},
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": exc.message},
        )
