"""RaagRiff - server-rendered web front end for the Spotify Web API."""

__version__ = "0.1.0"
