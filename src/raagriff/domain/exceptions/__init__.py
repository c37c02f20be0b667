"""Domain exceptions."""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    # Hey future me, we store message as an attribute so handlers can log it without
    # parsing str(exception). Don't raise this directly - use a specific subclass.
    def __init__(self, message: str, *args: Any) -> None:
        super().__init__(message, *args)
        self.message = message


class ConfigurationError(DomainException):
    """Application misconfiguration.

    Raised when required configuration is missing or invalid.

    HTTP Status: 503 (Service Unavailable)

    Example:
        raise ConfigurationError("SPOTIFY_CLIENT_ID is not configured")
    """

    pass


class AuthenticationError(DomainException):
    """User is not authenticated or token expired.

    HTTP Status: 401
    """

    pass


class AuthenticationRequired(AuthenticationError):
    """The credential cookies say the request must go somewhere else first.

    Hey future me - this is raised by the require_spotify_session dependency, never
    by services. `location` is where the browser gets sent (/login, /auth or the
    refresh endpoint). The exception handler turns it into a plain 302.
    """

    def __init__(self, location: str, reason: str = "") -> None:
        super().__init__(reason or f"Authentication required, redirecting to {location}")
        self.location = location


class TokenRefreshException(DomainException):
    """Raised when token refresh fails and re-authentication is required.

    Hey future me - Spotify answers 400 invalid_grant when the refresh token was
    revoked, and 401/403 when the app lost access. Either way the refresh cookie
    is useless and the user has to log in again.
    """

    def __init__(
        self,
        message: str = "Token refresh failed. Please re-authenticate with Spotify.",
        error_code: str | None = None,
        http_status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code  # e.g., "invalid_grant"
        self.http_status = http_status  # e.g., 400, 401


__all__ = [
    "DomainException",
    "ConfigurationError",
    "AuthenticationError",
    "AuthenticationRequired",
    "TokenRefreshException",
]
