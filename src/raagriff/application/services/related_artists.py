"""Related-artists heuristic (Spotify's /related-artists endpoint is gone).

Hey future me - this is best-effort enrichment in five stages:

1. target artist info            (failure -> empty result, nothing else runs)
2. up to 3 genre searches        (candidates scored by overlapping genres)
3. collaborators on top tracks   (flagged, sort first)
4. one combined 2-genre search   (only while under the cap)
5. full profiles for up to 5 collaborators (images, genres, popularity)

Every stage after the first degrades to "contributes nothing" on failure.
"""

import logging
from typing import Any

from raagriff.application.services.spotify_session import SpotifySession
from raagriff.domain.dtos import RelatedArtistCandidate

logger = logging.getLogger(__name__)

RELATED_ARTISTS_CAP = 20
GENRE_SEARCH_LIMIT = 10
MAX_GENRE_SEARCHES = 3
MAX_COLLABORATOR_PROFILES = 5


def genre_overlap(artist: dict[str, Any], target_genres: set[str]) -> int:
    """Number of the artist's genres shared with the target."""
    return len(set(artist.get("genres") or []) & target_genres)


def rank_candidates(
    candidates: list[RelatedArtistCandidate], cap: int = RELATED_ARTISTS_CAP
) -> list[dict[str, Any]]:
    """Collaborators first, then genre score desc, then popularity desc.

    Ties keep discovery order. Only the artist dicts are returned.
    """
    ranked = sorted(
        candidates,
        key=lambda c: (not c.is_collaborator, -c.genre_score, -c.popularity),
    )
    return [candidate.artist for candidate in ranked[:cap]]


class RelatedArtistsService:
    """Builds a "fans also like" list for an artist."""

    def __init__(self, session: SpotifySession) -> None:
        self._session = session

    def _add_scored(
        self,
        candidates: dict[str, RelatedArtistCandidate],
        artists: list[dict[str, Any]],
        target_id: str,
        target_genres: set[str],
    ) -> None:
        for artist in artists:
            artist_id = artist.get("id") if artist else None
            if not artist_id or artist_id == target_id:
                continue
            score = genre_overlap(artist, target_genres)
            existing = candidates.get(artist_id)
            if existing is None:
                candidates[artist_id] = RelatedArtistCandidate(
                    artist=artist, genre_score=score
                )
            elif score > existing.genre_score:
                existing.genre_score = score

    async def _search_artists(self, query: str) -> list[dict[str, Any]]:
        session = self._session
        result = await session.client.search(
            query, ["artist"], session.access_token, limit=GENRE_SEARCH_LIMIT
        )
        return [a for a in (result.get("artists") or {}).get("items") or [] if a]

    async def _collect_genre_matches(
        self,
        candidates: dict[str, RelatedArtistCandidate],
        genres: list[str],
        target_id: str,
        target_genres: set[str],
    ) -> None:
        for genre in genres[:MAX_GENRE_SEARCHES]:
            try:
                artists = await self._search_artists(f'genre:"{genre}"')
            except Exception as e:
                logger.warning(f'Related artists: genre search "{genre}" failed: {e}')
                continue
            self._add_scored(candidates, artists, target_id, target_genres)

    async def _collect_collaborators(
        self, candidates: dict[str, RelatedArtistCandidate], target_id: str
    ) -> list[str]:
        session = self._session
        try:
            top_tracks = await session.client.get_artist_top_tracks(
                target_id, session.access_token, market=session.market
            )
        except Exception as e:
            logger.warning(f"Related artists: top tracks for {target_id} failed: {e}")
            return []

        collaborator_ids: list[str] = []
        for track in top_tracks:
            for artist in (track or {}).get("artists") or []:
                artist_id = artist.get("id")
                if not artist_id or artist_id == target_id or artist_id in collaborator_ids:
                    continue
                collaborator_ids.append(artist_id)
                candidate = candidates.get(artist_id)
                if candidate is None:
                    candidates[artist_id] = RelatedArtistCandidate(
                        artist=artist, is_collaborator=True
                    )
                else:
                    candidate.is_collaborator = True
        return collaborator_ids

    async def _fetch_collaborator_profiles(
        self,
        candidates: dict[str, RelatedArtistCandidate],
        collaborator_ids: list[str],
        target_genres: set[str],
    ) -> None:
        ids = collaborator_ids[:MAX_COLLABORATOR_PROFILES]
        if not ids:
            return
        session = self._session
        try:
            profiles = await session.client.get_several_artists(ids, session.access_token)
        except Exception as e:
            logger.warning(f"Related artists: collaborator profiles failed: {e}")
            return

        for profile in profiles:
            candidate = candidates.get(profile.get("id", ""))
            if candidate is None:
                continue
            candidate.artist = profile
            candidate.genre_score = max(
                candidate.genre_score, genre_overlap(profile, target_genres)
            )

    async def get_related_artists(self, artist_id: str) -> list[dict[str, Any]]:
        """Related artists for artist_id, at most 20, never including the artist itself.

        Returns:
            Plain Spotify artist dicts (empty list if the artist can't be read)
        """
        candidates: dict[str, RelatedArtistCandidate] = {}
        session = self._session

        try:
            target = await session.client.get_artist(artist_id, session.access_token)
        except Exception as e:
            logger.warning(f"Related artists: artist {artist_id} unavailable: {e}")
            return []

        genres: list[str] = list(target.get("genres") or [])
        target_genres = set(genres)

        await self._collect_genre_matches(candidates, genres, artist_id, target_genres)
        collaborator_ids = await self._collect_collaborators(candidates, artist_id)

        if len(candidates) < RELATED_ARTISTS_CAP and len(genres) >= 2:
            query = f'genre:"{genres[0]}" genre:"{genres[1]}"'
            try:
                artists = await self._search_artists(query)
            except Exception as e:
                logger.warning(f"Related artists: combined genre search failed: {e}")
            else:
                self._add_scored(candidates, artists, artist_id, target_genres)

        await self._fetch_collaborator_profiles(candidates, collaborator_ids, target_genres)

        return rank_candidates(list(candidates.values()))
