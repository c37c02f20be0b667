"""Shared fixtures: a spec'd SpotifyClient mock and a predictable random source."""

from collections.abc import Sequence
from typing import Any, TypeVar
from unittest.mock import MagicMock

import httpx
import pytest

from raagriff.application.services.spotify_session import SpotifySession
from raagriff.infrastructure.integrations import LrclibClient, SpotifyClient

T = TypeVar("T")


class IdentityRandom:
    """Random source that never reorders anything.

    random() returns a value just below 1.0, so the Fisher-Yates walk always swaps
    an element with itself. sample() and choice() take from the front.
    """

    def random(self) -> float:
        return 0.999999

    def sample(self, population: Sequence[T], k: int) -> list[T]:
        return list(population)[:k]

    def choice(self, seq: Sequence[T]) -> T:
        return seq[0]


def make_status_error(
    status_code: int, url: str = "https://api.spotify.com/v1/me"
) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", url)
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError(
        f"Spotify returned {status_code}", request=request, response=response
    )


@pytest.fixture
def identity_rng() -> IdentityRandom:
    return IdentityRandom()


@pytest.fixture
def status_error() -> Any:
    """Factory for httpx.HTTPStatusError with a given status code."""
    return make_status_error


@pytest.fixture
def spotify_client() -> MagicMock:
    """SpotifyClient mock - async methods become AsyncMocks via the spec."""
    return MagicMock(spec=SpotifyClient)


@pytest.fixture
def lrclib_client() -> MagicMock:
    client = MagicMock(spec=LrclibClient)
    client.search.return_value = []
    return client


@pytest.fixture
def session(spotify_client: MagicMock, identity_rng: IdentityRandom) -> SpotifySession:
    return SpotifySession(
        client=spotify_client, access_token="access-123", market="US", rng=identity_rng
    )
