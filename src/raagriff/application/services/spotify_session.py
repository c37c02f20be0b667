"""Request-scoped context handed to every Spotify-backed service."""

import random
from dataclasses import dataclass, field

from raagriff.domain.ports import RandomSource
from raagriff.infrastructure.integrations.spotify_client import SpotifyClient


# Hey future me - one of these is built per request by the require_spotify_session
# dependency, AFTER the auth state machine said PROCEED. Services never read
# cookies; they only see this. Tests build it directly with a mocked client and
# random.Random(seed).
@dataclass(frozen=True)
class SpotifySession:
    """Everything a service needs to talk to Spotify on behalf of one user."""

    client: SpotifyClient
    access_token: str
    market: str = "US"
    rng: RandomSource = field(default_factory=random.Random)
