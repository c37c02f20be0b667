"""Tests for the related-artists heuristic."""

import asyncio
from unittest.mock import MagicMock

import pytest

from raagriff.application.services.related_artists import (
    RelatedArtistsService,
    genre_overlap,
    rank_candidates,
)
from raagriff.domain.dtos import RelatedArtistCandidate


def _artist(artist_id: str, genres: list[str] | None = None, popularity: int = 0) -> dict:
    return {
        "id": artist_id,
        "name": artist_id.title(),
        "genres": genres or [],
        "popularity": popularity,
    }


def _artist_results(*artists: dict) -> dict:
    return {"artists": {"items": list(artists)}}


TARGET = _artist("target", ["indie", "rock", "pop"], popularity=60)


@pytest.fixture
def scenario(spotify_client: MagicMock) -> MagicMock:
    """Target with three genres, two collaborators, one combined-search hit."""
    searches = {
        'genre:"indie"': _artist_results(
            _artist("a1", ["indie", "rock"], 10),
            _artist("a2", ["indie"], 90),
            TARGET,
        ),
        'genre:"rock"': _artist_results(
            _artist("a1", ["indie", "rock"], 10), _artist("a3", ["rock"], 50)
        ),
        'genre:"pop"': _artist_results(),
        'genre:"indie" genre:"rock"': _artist_results(_artist("a4", ["indie", "rock", "pop"], 5)),
    }

    async def search(query, types, token, limit):
        return searches[query]

    spotify_client.get_artist.return_value = TARGET
    spotify_client.search.side_effect = search
    spotify_client.get_artist_top_tracks.return_value = [
        {"id": "t1", "artists": [{"id": "target"}, {"id": "c1", "name": "C1"}]},
        {"id": "t2", "artists": [{"id": "c1", "name": "C1"}, {"id": "a2", "name": "A2"}]},
    ]
    spotify_client.get_several_artists.return_value = [
        _artist("c1", ["pop"], 70),
        _artist("a2", ["indie"], 90),
    ]
    return spotify_client


class TestGenreOverlap:
    def test_counts_shared_genres(self):
        assert genre_overlap(_artist("x", ["indie", "jazz", "rock"]), {"indie", "rock"}) == 2

    def test_missing_genres(self):
        assert genre_overlap({"id": "x"}, {"indie"}) == 0


class TestRankCandidates:
    def test_collaborators_then_score_then_popularity(self):
        candidates = [
            RelatedArtistCandidate(_artist("low", popularity=10), genre_score=3),
            RelatedArtistCandidate(_artist("collab", popularity=1), is_collaborator=True),
            RelatedArtistCandidate(_artist("high", popularity=90), genre_score=3),
            RelatedArtistCandidate(_artist("best", popularity=5), genre_score=5),
        ]

        ranked = rank_candidates(candidates)

        assert [artist["id"] for artist in ranked] == ["collab", "best", "high", "low"]

    def test_cap(self):
        candidates = [RelatedArtistCandidate(_artist(f"a{i}")) for i in range(30)]
        assert len(rank_candidates(candidates, cap=20)) == 20

    def test_ties_keep_discovery_order(self):
        candidates = [RelatedArtistCandidate(_artist(name)) for name in ("x", "y", "z")]
        assert [artist["id"] for artist in rank_candidates(candidates)] == ["x", "y", "z"]


class TestRelatedArtistsService:
    async def test_full_ranking(self, session, scenario: MagicMock):
        related = await RelatedArtistsService(session).get_related_artists("target")

        assert [artist["id"] for artist in related] == ["a2", "c1", "a4", "a1", "a3"]

    async def test_returns_plain_artist_dicts(self, session, scenario: MagicMock):
        related = await RelatedArtistsService(session).get_related_artists("target")

        for artist in related:
            assert isinstance(artist, dict)
            assert "genre_score" not in artist
            assert "is_collaborator" not in artist

    async def test_collaborator_profiles_replace_stubs(self, session, scenario: MagicMock):
        related = await RelatedArtistsService(session).get_related_artists("target")

        c1 = next(artist for artist in related if artist["id"] == "c1")
        assert c1["popularity"] == 70
        assert c1["genres"] == ["pop"]
        scenario.get_several_artists.assert_awaited_once_with(["c1", "a2"], "access-123")

    async def test_target_never_included(self, session, scenario: MagicMock):
        related = await RelatedArtistsService(session).get_related_artists("target")
        assert "target" not in {artist["id"] for artist in related}

    async def test_searches_issued(self, session, scenario: MagicMock):
        await RelatedArtistsService(session).get_related_artists("target")

        queries = [call.args[0] for call in scenario.search.await_args_list]
        assert queries == [
            'genre:"indie"',
            'genre:"rock"',
            'genre:"pop"',
            'genre:"indie" genre:"rock"',
        ]
        scenario.get_artist_top_tracks.assert_awaited_once_with(
            "target", "access-123", market="US"
        )

    async def test_target_failure_returns_empty(
        self, session, spotify_client: MagicMock, status_error
    ):
        spotify_client.get_artist.side_effect = status_error(404)

        assert await RelatedArtistsService(session).get_related_artists("gone") == []
        spotify_client.search.assert_not_awaited()
        spotify_client.get_artist_top_tracks.assert_not_awaited()

    async def test_failed_stages_contribute_nothing(
        self, session, spotify_client: MagicMock, status_error
    ):
        async def search(query, types, token, limit):
            if query == 'genre:"indie"':
                raise status_error(500)
            return _artist_results(_artist("a3", ["rock"], 50))

        spotify_client.get_artist.return_value = TARGET
        spotify_client.search.side_effect = search
        spotify_client.get_artist_top_tracks.side_effect = status_error(503)

        related = await RelatedArtistsService(session).get_related_artists("target")

        assert [artist["id"] for artist in related] == ["a3"]
        spotify_client.get_several_artists.assert_not_awaited()

    async def test_single_genre_skips_combined_search(
        self, session, spotify_client: MagicMock
    ):
        spotify_client.get_artist.return_value = _artist("target", ["jazz"])
        spotify_client.search.return_value = _artist_results(_artist("j1", ["jazz"]))
        spotify_client.get_artist_top_tracks.return_value = []

        related = await RelatedArtistsService(session).get_related_artists("target")

        assert [artist["id"] for artist in related] == ["j1"]
        assert spotify_client.search.await_count == 1

    async def test_capped_at_twenty(self, session, spotify_client: MagicMock):
        spotify_client.get_artist.return_value = _artist("target", ["a", "b", "c"])
        batches = iter(
            [
                _artist_results(*(_artist(f"x{i}", ["a"]) for i in range(10))),
                _artist_results(*(_artist(f"y{i}", ["b"]) for i in range(10))),
                _artist_results(*(_artist(f"z{i}", ["c"]) for i in range(10))),
            ]
        )
        spotify_client.search.side_effect = lambda *args, **kwargs: next(batches)
        spotify_client.get_artist_top_tracks.return_value = []

        related = await RelatedArtistsService(session).get_related_artists("target")

        assert len(related) == 20
        # 30 candidates already, no combined search
        assert spotify_client.search.await_count == 3

    async def test_concurrent_calls_keep_separate_candidates(
        self, session, spotify_client: MagicMock
    ):
        targets = {
            "jazzer": _artist("jazzer", ["jazz"]),
            "rocker": _artist("rocker", ["rock"]),
        }
        hits = {
            'genre:"jazz"': _artist_results(_artist("j1", ["jazz"])),
            'genre:"rock"': _artist_results(_artist("r1", ["rock"])),
        }

        async def search(query, types, token, limit):
            await asyncio.sleep(0)
            return hits[query]

        async def get_artist(artist_id, token):
            await asyncio.sleep(0)
            return targets[artist_id]

        spotify_client.get_artist.side_effect = get_artist
        spotify_client.search.side_effect = search
        spotify_client.get_artist_top_tracks.return_value = []
        service = RelatedArtistsService(session)

        jazz, rock = await asyncio.gather(
            service.get_related_artists("jazzer"), service.get_related_artists("rocker")
        )

        assert [artist["id"] for artist in jazz] == ["j1"]
        assert [artist["id"] for artist in rock] == ["r1"]
