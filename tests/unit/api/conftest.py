"""App and client fixtures for router tests.

The lifespan never runs here: the two HTTP clients and the random source are
replaced through dependency_overrides.
"""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from raagriff.api.dependencies import (
    get_lrclib_client,
    get_random_source,
    get_spotify_client,
)
from raagriff.main import create_app

USER = {
    "id": "user-1",
    "display_name": "Test Listener",
    "images": [],
    "followers": {"total": 3},
}

TRACK = {
    "id": "track-1",
    "name": "Get Lucky (feat. Pharrell Williams)",
    "uri": "spotify:track:track-1",
    "duration_ms": 369_000,
    "album": {"id": "album-1", "name": "Random Access Memories", "images": []},
    "artists": [
        {"id": "artist-1", "name": "Daft Punk"},
        {"id": "artist-2", "name": "Pharrell Williams"},
    ],
}

ARTIST = {
    "id": "artist-1",
    "name": "Daft Punk",
    "genres": ["french house", "electro"],
    "popularity": 80,
    "images": [],
    "followers": {"total": 1000},
    "uri": "spotify:artist:artist-1",
}


@pytest.fixture
def spotify_stub(spotify_client: MagicMock) -> MagicMock:
    """Spotify mock answering every read a page can make."""
    spotify_client.get_current_user.return_value = USER
    spotify_client.get_recently_played.return_value = {"items": [{"track": TRACK}]}
    spotify_client.get_top_items.return_value = {"items": [], "total": 0}
    spotify_client.get_followed_artists.return_value = {"artists": {"items": [ARTIST]}}
    spotify_client.get_track.return_value = TRACK
    spotify_client.get_artist.return_value = ARTIST
    spotify_client.get_several_artists.return_value = [ARTIST]
    spotify_client.get_artist_top_tracks.return_value = [TRACK]
    spotify_client.get_artist_albums.return_value = {"items": [], "total": 0}
    spotify_client.search.return_value = {}
    return spotify_client


@pytest.fixture
def app(spotify_client: MagicMock, lrclib_client: MagicMock, identity_rng) -> FastAPI:
    app = create_app()
    app.dependency_overrides[get_spotify_client] = lambda: spotify_client
    app.dependency_overrides[get_lrclib_client] = lambda: lrclib_client
    app.dependency_overrides[get_random_source] = lambda: identity_rng
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, follow_redirects=False)


@pytest.fixture
def logged_in_client(client: TestClient) -> TestClient:
    client.cookies.set("access_token", "access-123")
    client.cookies.set("refresh_token", "refresh-123")
    return client


def set_cookie_headers(response) -> dict[str, str]:
    """Map cookie name -> full Set-Cookie header."""
    headers = {}
    for header in response.headers.get_list("set-cookie"):
        name = header.split("=", 1)[0]
        headers[name] = header
    return headers


@pytest.fixture
def cookie_headers():
    return set_cookie_headers
