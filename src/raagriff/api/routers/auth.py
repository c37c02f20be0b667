"""Authentication routes: login page, OAuth dance, token refresh, player token.

Hey future me - tokens never touch a database. Spotify hands them to us in
/auth/callback and /auth/refresh_tokens, we write them into httponly cookies and
forget them. The browser player reads the access token back via /api/token.
"""

import logging

import httpx
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response

from raagriff.api.dependencies import get_spotify_auth_service
from raagriff.api.routers.ui._shared import templates
from raagriff.api.session_cookies import (
    ACCESS_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
    clear_auth_state,
    clear_credentials,
    clear_refresh_token,
    redirect,
    set_access_token,
    set_auth_state,
    set_refresh_token,
)
from raagriff.application.services.auth_state import (
    LOGIN_PATH,
    AuthAction,
    redirect_location,
    resolve_auth_action,
    safe_redirect_target,
)
from raagriff.application.services.spotify_auth_service import SpotifyAuthService
from raagriff.config import Settings, get_settings
from raagriff.domain.exceptions import TokenRefreshException

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


@router.get("/login", response_class=HTMLResponse, response_model=None)
async def login_page(request: Request) -> Response:
    """Login page, or straight home when both cookies are already there."""
    if request.cookies.get(ACCESS_TOKEN_COOKIE) and request.cookies.get(
        REFRESH_TOKEN_COOKIE
    ):
        return redirect("/")
    return templates.TemplateResponse(request, "login.html", {})


@router.get("/logout")
async def logout(settings: Settings = Depends(get_settings)) -> RedirectResponse:
    response = redirect(LOGIN_PATH)
    clear_credentials(response, settings.session)
    return response


# Hey future me - the 16-char state goes into a cookie AND into the authorize URL.
# Spotify echoes it back to /auth/callback where we compare the two.
@router.get("/auth")
async def authorize(
    auth_service: SpotifyAuthService = Depends(get_spotify_auth_service),
    settings: Settings = Depends(get_settings),
) -> RedirectResponse:
    """Start the OAuth authorization-code flow.

    Raises:
        ConfigurationError: Client credentials missing (handled as 503)
    """
    auth = auth_service.generate_auth_url()
    response = redirect(auth.authorization_url)
    set_auth_state(response, auth.state, settings.session)
    return response


# Yo, order matters here: a bad/missing state bounces to /login WITHOUT clearing the
# state cookie; only a matching state is consumed. A failed exchange sets nothing.
@router.get("/auth/callback")
async def auth_callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    auth_service: SpotifyAuthService = Depends(get_spotify_auth_service),
    settings: Settings = Depends(get_settings),
) -> RedirectResponse:
    """Finish the OAuth flow and store the credential pair."""
    stored_state = request.cookies.get(settings.session.auth_state_key)

    if error or not state or state != stored_state:
        logger.warning(
            "OAuth callback rejected",
            extra={"error": error, "state_present": bool(state)},
        )
        return redirect(LOGIN_PATH)

    try:
        tokens = await auth_service.exchange_code(code or "")
    except httpx.HTTPError as e:
        logger.warning(f"Authorization code exchange failed: {e}")
        response = redirect(LOGIN_PATH)
        clear_auth_state(response, settings.session)
        return response

    response = redirect("/")
    clear_auth_state(response, settings.session)
    set_access_token(response, tokens.access_token, tokens.expires_in, settings.session)
    if tokens.refresh_token:
        set_refresh_token(response, tokens.refresh_token, settings.session)
    return response


@router.get("/auth/refresh_tokens")
async def refresh_tokens(
    request: Request,
    redirect_to: str | None = None,
    auth_service: SpotifyAuthService = Depends(get_spotify_auth_service),
    settings: Settings = Depends(get_settings),
) -> RedirectResponse:
    """Trade the refresh cookie for a new access cookie, then go back.

    Any failure drops only the refresh cookie and sends the user to /login.
    """
    refresh_token = request.cookies.get(REFRESH_TOKEN_COOKIE)
    if not refresh_token:
        return redirect(LOGIN_PATH)

    try:
        tokens = await auth_service.refresh_token(refresh_token)
    except (TokenRefreshException, httpx.HTTPError) as e:
        logger.warning(f"Token refresh failed: {e}")
        response = redirect(LOGIN_PATH)
        clear_refresh_token(response, settings.session)
        return response

    response = redirect(safe_redirect_target(redirect_to))
    set_access_token(response, tokens.access_token, tokens.expires_in, settings.session)
    if tokens.refresh_token:
        set_refresh_token(response, tokens.refresh_token, settings.session)
    return response


# Hey future me - the Web Playback SDK needs the raw access token in JavaScript, but
# the cookie is httponly. This endpoint hands it over under the same cookie rules as the
# pages (refresh round-trip, or /auth when the refresh cookie is gone), except that a
# browser with no cookies at all gets a JSON 401 instead of the login page.
@router.get("/api/token", response_model=None)
async def access_token(request: Request) -> Response:
    """Return {"access_token": ...} for the browser player."""
    token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    refresh = request.cookies.get(REFRESH_TOKEN_COOKIE)
    action = resolve_auth_action(token, refresh)
    if action is AuthAction.LOGIN:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED, content={"error": "Unauthorized"}
        )
    location = redirect_location(action, request.url.path)
    if location is not None:
        return redirect(location)
    return JSONResponse({"access_token": token})
