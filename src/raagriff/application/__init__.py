"""Application layer: services that compose Spotify reads into page data."""
