"""Per-request logging and correlation ID propagation."""

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from raagriff.infrastructure.observability.logging import (
    get_correlation_id,
    redact_secrets,
    set_correlation_id,
)

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
STATIC_PREFIX = "/static/"


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per page or API request and echo the correlation ID."""

    def __init__(self, app: ASGIApp, log_query_params: bool = False) -> None:
        """Initialize middleware.

        Args:
            app: ASGI application
            log_query_params: Add the (redacted) query string to the log extras.
                /auth/callback carries the OAuth code there, so it is off by default.
        """
        super().__init__(app)
        self.log_query_params = log_query_params

    # Yo, static assets are served but never logged. Exceptions get logged with the
    # request context and re-raised so Starlette still turns them into a 500.
    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        set_correlation_id(request.headers.get(CORRELATION_HEADER))
        method, path = request.method, request.url.path
        context: dict[str, object] = {"method": method, "path": path}
        if self.log_query_params and request.url.query:
            context["query_params"] = redact_secrets(str(request.query_params))

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"Request failed: {method} {path}",
                extra={
                    **context,
                    "duration_ms": _elapsed_ms(started),
                    "error_type": type(e).__name__,
                },
            )
            raise

        duration_ms = _elapsed_ms(started)
        if not path.startswith(STATIC_PREFIX):
            mark = "✓" if response.status_code < 400 else "✗"
            logger.info(
                f"{mark} {method} {path} → {response.status_code} ({duration_ms}ms)",
                extra={**context, "status_code": response.status_code, "duration_ms": duration_ms},
            )

        response.headers[CORRELATION_HEADER] = get_correlation_id()
        return response
