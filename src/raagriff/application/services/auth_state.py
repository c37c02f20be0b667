"""Credential-cookie state machine for protected pages.

Hey future me - this module is PURE. It looks at which cookies are present and
tells the caller where to go; it never touches cookies itself. The
require_spotify_session dependency applies it on every protected route.

    access | refresh | action
    -------+---------+---------------------------------------------
    -      | -       | LOGIN     -> /login
    yes    | -       | AUTHORIZE -> /auth (refresh half lost, start over)
    -      | yes     | REFRESH   -> /auth/refresh_tokens?redirect_to=...
    yes    | yes     | PROCEED
"""

from enum import Enum
from urllib.parse import quote, urlsplit

LOGIN_PATH = "/login"
AUTHORIZE_PATH = "/auth"
REFRESH_PATH = "/auth/refresh_tokens"

# Characters encodeURIComponent leaves alone on top of quote()'s defaults.
_URI_COMPONENT_SAFE = "!*'()"


class AuthAction(str, Enum):
    """What a request must do before it may talk to Spotify."""

    LOGIN = "login"
    AUTHORIZE = "authorize"
    REFRESH = "refresh"
    PROCEED = "proceed"


def resolve_auth_action(access_token: str | None, refresh_token: str | None) -> AuthAction:
    """Map cookie presence to an AuthAction. Empty strings count as absent."""
    if not access_token and not refresh_token:
        return AuthAction.LOGIN
    if access_token and not refresh_token:
        return AuthAction.AUTHORIZE
    if not access_token:
        return AuthAction.REFRESH
    return AuthAction.PROCEED


def build_refresh_url(original_url: str) -> str:
    """Refresh endpoint URL that returns the browser to original_url afterwards.

    The target is percent-encoded like encodeURIComponent, so "/profile"
    becomes "%2Fprofile".
    """
    return f"{REFRESH_PATH}?redirect_to={quote(original_url, safe=_URI_COMPONENT_SAFE)}"


def redirect_location(action: AuthAction, original_url: str) -> str | None:
    """Where to send the browser for `action`, or None for PROCEED."""
    if action is AuthAction.LOGIN:
        return LOGIN_PATH
    if action is AuthAction.AUTHORIZE:
        return AUTHORIZE_PATH
    if action is AuthAction.REFRESH:
        return build_refresh_url(original_url)
    return None


# Listen future me, redirect_to comes straight from the query string. Only accept
# same-site paths, otherwise /auth/refresh_tokens becomes an open redirect.
def safe_redirect_target(redirect_to: str | None, default: str = "/") -> str:
    """Return redirect_to if it is a relative path on this site, else default."""
    if not redirect_to or not redirect_to.startswith("/") or redirect_to.startswith("//"):
        return default
    if "\\" in redirect_to:
        return default
    parts = urlsplit(redirect_to)
    if parts.scheme or parts.netloc:
        return default
    return redirect_to
