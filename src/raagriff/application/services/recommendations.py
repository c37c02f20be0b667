"""Recommendation heuristics built from the user's recently played tracks.

Hey future me - Spotify retired /recommendations and /browse/featured-playlists for
new apps, so everything "recommended" here is faked with search:

    recently played -> seed artist names -> search per seed -> merge/dedupe
                    -> sort by a heuristic key -> shuffle -> truncate

Nothing is cached; every page load reshuffles. All randomness goes through
session.rng so tests can pin it with random.Random(seed).
"""

import asyncio
import logging
from collections.abc import Iterable
from typing import Any, TypeVar

from raagriff.application.services.pagination import LOWER_LIMIT, paginate_items
from raagriff.application.services.spotify_session import SpotifySession
from raagriff.domain.dtos import PageEnvelope, RecentListening
from raagriff.domain.ports import RandomSource

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_SEED_ARTISTS = 5
ARTIST_SEARCH_LIMIT = 10
PLAYLIST_SEARCH_LIMIT = 20
PLAYLIST_SEED_ARTISTS = 3
# Stop fanning out once we hold this many times the requested page size.
CANDIDATE_POOL_FACTOR = 3

MOODS = ("chill", "workout", "party", "focus", "relax", "energy")
GENRES = ("pop", "rock", "hip hop", "electronic", "indie", "jazz")


def shuffle(items: Iterable[T], rng: RandomSource) -> list[T]:
    """Fisher-Yates shuffle into a new list, walking from the end.

    Uses rng.random() only, so any random.Random-compatible source (or a scripted
    fake) produces a reproducible order.
    """
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        result[i], result[j] = result[j], result[i]
    return result


def merge_unique(
    merged: list[dict[str, Any]],
    seen_ids: set[str],
    items: Iterable[dict[str, Any] | None],
    exclude_ids: set[str] | frozenset[str] = frozenset(),
) -> int:
    """Append items whose id is neither seen nor excluded. Returns how many were added."""
    added = 0
    for item in items:
        if not item:
            continue
        item_id = item.get("id")
        if not item_id or item_id in seen_ids or item_id in exclude_ids:
            continue
        seen_ids.add(item_id)
        merged.append(item)
        added += 1
    return added


def summarize_recent_listening(recently_played: dict[str, Any]) -> RecentListening:
    """Extract tracks, first-seen artists (deduped by id) and album ids."""
    summary = RecentListening()
    seen_artist_ids: set[str] = set()

    for entry in recently_played.get("items") or []:
        track = (entry or {}).get("track")
        if not track:
            continue
        summary.tracks.append(track)

        for artist in track.get("artists") or []:
            artist_id = artist.get("id")
            if artist_id and artist_id not in seen_artist_ids:
                seen_artist_ids.add(artist_id)
                summary.artist_ids.append(artist_id)
                summary.artist_names.append(artist.get("name", ""))

        album_id = (track.get("album") or {}).get("id")
        if album_id:
            summary.album_ids.add(album_id)

    return summary


def _search_items(result: dict[str, Any], key: str) -> list[dict[str, Any]]:
    return [item for item in (result.get(key) or {}).get("items") or [] if item]


def _playlist_track_count(playlist: dict[str, Any]) -> int:
    return int((playlist.get("tracks") or {}).get("total") or 0)


def _single_page(items: list[dict[str, Any]], limit: int) -> PageEnvelope:
    return PageEnvelope(
        base_url="", page=1, items=items, total=len(items), limit=limit, offset=0
    )


class RecommendationService:
    """Recommended albums/artists and featured playlists for one user."""

    def __init__(self, session: SpotifySession) -> None:
        self._session = session

    async def get_recent_listening(self, limit: int) -> RecentListening:
        """Read recently played tracks and summarize them."""
        session = self._session
        recently_played = await session.client.get_recently_played(
            session.access_token, limit=limit
        )
        return summarize_recent_listening(recently_played)

    async def _fan_out_search(
        self,
        seed_names: list[str],
        search_type: str,
        result_key: str,
        exclude_ids: set[str],
        stop_at: int,
    ) -> list[dict[str, Any]]:
        # Sequential on purpose: we stop as soon as the pool is big enough.
        session = self._session
        queries = [f'artist:"{name}"' for name in seed_names] or [""]
        merged: list[dict[str, Any]] = []
        seen_ids: set[str] = set()

        for query in queries:
            result = await session.client.search(
                query,
                [search_type],
                session.access_token,
                limit=ARTIST_SEARCH_LIMIT,
                market=session.market,
            )
            merge_unique(merged, seen_ids, _search_items(result, result_key), exclude_ids)
            if len(merged) >= stop_at:
                break

        return merged

    # Hey future me - this one NEVER raises. The home page is still useful without
    # album recommendations, so any failure logs and returns the empty envelope.
    async def get_recommended_albums(self, limit: int = LOWER_LIMIT) -> PageEnvelope:
        """Albums by recently played artists, newest first, then shuffled.

        Args:
            limit: Number of albums to return

        Returns:
            Single-page envelope (total = number of returned items)
        """
        try:
            recent = await self.get_recent_listening(limit)
            merged = await self._fan_out_search(
                recent.artist_names[:MAX_SEED_ARTISTS],
                "album",
                "albums",
                exclude_ids=recent.album_ids,
                stop_at=limit * CANDIDATE_POOL_FACTOR,
            )
        except Exception as e:
            logger.warning(f"Recommended albums unavailable: {e}")
            return PageEnvelope.empty(limit=limit)

        newest_first = sorted(
            merged, key=lambda album: album.get("release_date") or "", reverse=True
        )
        items = shuffle(newest_first, self._session.rng)[:limit]
        return _single_page(items, limit)

    async def get_recommended_artists(self, limit: int = LOWER_LIMIT) -> PageEnvelope:
        """Artists found by searching recently played artist names.

        Artists already in the recent history are excluded. Errors propagate to the
        page handler (and from there to the session-failure handler).
        """
        recent = await self.get_recent_listening(limit)
        seeds = recent.artist_names[:MAX_SEED_ARTISTS]
        if not seeds:
            return PageEnvelope.empty(limit=limit)

        merged = await self._fan_out_search(
            seeds,
            "artist",
            "artists",
            exclude_ids=set(recent.artist_ids),
            stop_at=limit * CANDIDATE_POOL_FACTOR,
        )
        most_popular_first = sorted(
            merged, key=lambda artist: artist.get("popularity") or 0, reverse=True
        )
        items = shuffle(most_popular_first, self._session.rng)[:limit]
        return _single_page(items, limit)

    def build_playlist_queries(self, artist_names: list[str]) -> list[str]:
        """Exactly three queries: sampled artists, one mood, one genre."""
        rng = self._session.rng
        sampled = rng.sample(artist_names, min(PLAYLIST_SEED_ARTISTS, len(artist_names)))
        return [" ".join(sampled), rng.choice(MOODS), rng.choice(GENRES)]

    async def _search_playlists(self, query: str) -> list[dict[str, Any]]:
        session = self._session
        result = await session.client.search(
            query,
            ["playlist"],
            session.access_token,
            limit=PLAYLIST_SEARCH_LIMIT,
            market=session.market,
        )
        return _search_items(result, "playlists")

    # Yo, the three searches run concurrently. return_exceptions=True keeps one bad
    # query (Spotify 400s on an empty q) from sinking the other two.
    async def get_featured_playlists(
        self,
        page: int | None = 1,
        limit: int = LOWER_LIMIT,
        base_url: str = "/playlists",
    ) -> PageEnvelope:
        """Playlists matching the user's artists plus a random mood and genre.

        Returns:
            Paged envelope over the shuffled pool of the biggest playlists
        """
        try:
            recent = await self.get_recent_listening(limit)
            queries = self.build_playlist_queries(recent.artist_names)
            results = await asyncio.gather(
                *(self._search_playlists(query) for query in queries),
                return_exceptions=True,
            )
        except Exception as e:
            logger.warning(f"Featured playlists unavailable: {e}")
            return PageEnvelope.empty(base_url=base_url, limit=limit)

        merged: list[dict[str, Any]] = []
        seen_ids: set[str] = set()
        for query, result in zip(queries, results):
            if isinstance(result, BaseException):
                logger.warning(f'Playlist search for "{query}" failed: {result}')
                continue
            non_empty = [p for p in result if _playlist_track_count(p) > 0]
            merge_unique(merged, seen_ids, non_empty)

        biggest_first = sorted(merged, key=_playlist_track_count, reverse=True)
        pool = shuffle(biggest_first[: limit * CANDIDATE_POOL_FACTOR], self._session.rng)
        return paginate_items(pool, base_url, page, limit)
