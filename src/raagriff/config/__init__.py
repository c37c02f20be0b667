"""Configuration module for RaagRiff."""

from .settings import (
    LyricsSettings,
    ObservabilitySettings,
    SessionSettings,
    Settings,
    SpotifySettings,
    get_settings,
)

__all__ = [
    "LyricsSettings",
    "ObservabilitySettings",
    "SessionSettings",
    "Settings",
    "SpotifySettings",
    "get_settings",
]
