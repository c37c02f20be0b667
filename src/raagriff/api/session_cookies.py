"""Cookie-backed token store and the single session-failure handler.

Hey future me - the browser's cookie jar IS the token store. Three cookies:

- access_token        max-age = Spotify's expires_in (usually 3600)
- refresh_token       fixed 7 days, regardless of what Spotify grants
- spotify_auth_state  OAuth CSRF state, lives from /auth until /auth/callback

All are httponly. Everything that writes or deletes them goes through here so
the flags stay consistent.
"""

import logging

import httpx
from fastapi import Request, Response
from fastapi.responses import RedirectResponse

from raagriff.application.services.auth_state import LOGIN_PATH, build_refresh_url
from raagriff.config.settings import SessionSettings

logger = logging.getLogger(__name__)

ACCESS_TOKEN_COOKIE = "access_token"
REFRESH_TOKEN_COOKIE = "refresh_token"


def _set_cookie(
    response: Response, key: str, value: str, max_age: int | None, settings: SessionSettings
) -> None:
    response.set_cookie(
        key,
        value,
        max_age=max_age,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
    )


def _delete_cookie(response: Response, key: str, settings: SessionSettings) -> None:
    response.delete_cookie(
        key,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
    )


def set_access_token(
    response: Response, access_token: str, expires_in: int, settings: SessionSettings
) -> None:
    _set_cookie(response, ACCESS_TOKEN_COOKIE, access_token, expires_in, settings)


def set_refresh_token(
    response: Response, refresh_token: str, settings: SessionSettings
) -> None:
    _set_cookie(
        response,
        REFRESH_TOKEN_COOKIE,
        refresh_token,
        settings.refresh_token_max_age,
        settings,
    )


def set_auth_state(response: Response, state: str, settings: SessionSettings) -> None:
    # Session cookie (no max-age), same as the browser default for a bare cookie.
    _set_cookie(response, settings.auth_state_key, state, None, settings)


def clear_access_token(response: Response, settings: SessionSettings) -> None:
    _delete_cookie(response, ACCESS_TOKEN_COOKIE, settings)


def clear_refresh_token(response: Response, settings: SessionSettings) -> None:
    _delete_cookie(response, REFRESH_TOKEN_COOKIE, settings)


def clear_auth_state(response: Response, settings: SessionSettings) -> None:
    _delete_cookie(response, settings.auth_state_key, settings)


def clear_credentials(response: Response, settings: SessionSettings) -> None:
    """Forget both halves of the credential pair."""
    clear_access_token(response, settings)
    clear_refresh_token(response, settings)


def request_original_url(request: Request) -> str:
    """Path plus query string, the way the browser asked for it."""
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def redirect(location: str, status_code: int = 302) -> RedirectResponse:
    return RedirectResponse(url=location, status_code=status_code)


# Listen future me, this is THE one place that decides what an upstream failure on a
# protected page does to the user's session:
#   401            -> drop access_token, bounce through /auth/refresh_tokens and back
#   anything else  -> drop both cookies, back to /login (yes, even a Spotify 503)
# It's registered as the exception handler for httpx.HTTPStatusError and
# httpx.RequestError, so page handlers just let those propagate.
def session_failure_response(
    request: Request, exc: Exception, settings: SessionSettings
) -> RedirectResponse:
    """Turn an upstream failure into a cookie-clearing redirect."""
    status_code: int | None = None
    if isinstance(exc, httpx.HTTPStatusError):
        status_code = exc.response.status_code

    if status_code == 401:
        original_url = request_original_url(request)
        logger.info(f"Access token rejected on {original_url}, refreshing")
        response = redirect(build_refresh_url(original_url))
        clear_access_token(response, settings)
        return response

    logger.warning(
        f"Upstream failure on {request.url.path} ({status_code or type(exc).__name__}), "
        "clearing session",
        extra={"path": request.url.path, "status_code": status_code},
    )
    response = redirect(LOGIN_PATH)
    clear_credentials(response, settings)
    return response
