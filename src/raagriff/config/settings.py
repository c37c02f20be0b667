"""Application settings loaded from environment variables and .env files."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SpotifySettings(BaseSettings):
    """Spotify Web API credentials and endpoints."""

    model_config = SettingsConfigDict(
        env_prefix="SPOTIFY_", env_file=".env", extra="ignore"
    )

    client_id: str = Field(default="", description="Spotify app client ID")
    client_secret: str = Field(default="", description="Spotify app client secret")
    redirect_uri: str = Field(
        default="http://localhost:5000/auth/callback",
        description="OAuth callback URL registered in the Spotify dashboard",
    )
    # Hey future me - streaming + user-read-playback-state are needed by the
    # Web Playback SDK in static/js/player.js. Without them the player never
    # reaches the "ready" event.
    scopes: str = Field(
        default=" ".join(
            [
                "streaming",
                "user-read-email",
                "user-read-private",
                "user-read-playback-state",
                "user-modify-playback-state",
                "user-read-recently-played",
                "user-top-read",
                "user-follow-read",
                "playlist-read-private",
            ]
        ),
        description="Space-separated OAuth scopes",
    )
    market: str = Field(default="US", description="ISO 3166-1 alpha-2 market")
    api_base_url: str = "https://api.spotify.com/v1"
    accounts_base_url: str = "https://accounts.spotify.com"

    @property
    def authorize_url(self) -> str:
        return f"{self.accounts_base_url}/authorize"

    @property
    def token_url(self) -> str:
        return f"{self.accounts_base_url}/api/token"


class SessionSettings(BaseSettings):
    """Cookie names and lifetimes for the browser-held credential pair."""

    model_config = SettingsConfigDict(
        env_prefix="SESSION_", env_file=".env", extra="ignore"
    )

    auth_state_key: str = "spotify_auth_state"
    # Fixed one week, independent of what Spotify grants for the refresh token.
    refresh_token_max_age: int = Field(default=604800, ge=1)
    cookie_secure: bool = False
    cookie_samesite: Literal["lax", "strict", "none"] = "lax"


class LyricsSettings(BaseSettings):
    """LRCLIB lyrics lookup configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LYRICS_", env_file=".env", extra="ignore"
    )

    enabled: bool = True
    base_url: str = "https://lrclib.net/api"
    timeout: float = Field(default=10.0, gt=0)


class ObservabilitySettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="OBSERVABILITY_", env_file=".env", extra="ignore"
    )

    log_json_format: bool = False


class Settings(BaseSettings):
    """Root settings object."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "RaagRiff"
    app_env: str = Field(default="development", description="development|production")
    debug: bool = False
    log_level: str = "INFO"
    http_timeout: float = Field(default=30.0, gt=0)

    spotify: SpotifySettings = Field(default_factory=SpotifySettings)
    session: SessionSettings = Field(default_factory=SessionSettings)
    lyrics: LyricsSettings = Field(default_factory=LyricsSettings)
    observability: ObservabilitySettings = Field(
        default_factory=ObservabilitySettings
    )

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


# Hey future me - cached so every Depends(get_settings) shares one instance.
# Tests that need different values should build Settings(...) directly and
# override the dependency instead of mutating the environment.
@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
