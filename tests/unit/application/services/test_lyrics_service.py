"""Tests for lyrics lookup and trimming."""

from unittest.mock import MagicMock

import httpx
import pytest

from raagriff.application.services.lyrics_service import (
    LyricsService,
    build_lyrics_query,
    clean_artist_name,
    clean_lyrics_text,
    clean_track_name,
    get_partial_lyrics,
)


def _lines(count: int) -> str:
    return "\n".join(f"line {i}" for i in range(1, count + 1))


def _record(**overrides) -> dict:
    record = {
        "id": 1,
        "trackName": "Get Lucky",
        "artistName": "Daft Punk",
        "albumName": "Random Access Memories",
        "instrumental": False,
        "plainLyrics": _lines(10),
        "syncedLyrics": None,
    }
    record.update(overrides)
    return record


class TestQueryCleaning:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Song (Live) - 2020 Remaster", "Song"),
            ("Song [Bonus Track]", "Song"),
            ("Song - Remastered 2011", "Song"),
            ("Song feat. Somebody", "Song"),
            ("Song ft. Somebody", "Song"),
            ("Plain Song", "Plain Song"),
        ],
    )
    def test_clean_track_name(self, raw, expected):
        assert clean_track_name(raw) == expected

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("A, B & C", "A"), ("Simon & Garfunkel", "Simon"), ("Solo", "Solo")],
    )
    def test_clean_artist_name(self, raw, expected):
        assert clean_artist_name(raw) == expected

    def test_build_query(self):
        assert build_lyrics_query("Song (Live) - 2020 Remaster", "A, B & C") == "Song A"


class TestCleanLyricsText:
    def test_strips_timestamps_and_section_headers(self):
        raw = "[Verse 1]\n[00:12.34] first line\n[00:15.00]second line\n\n\n\n[Chorus]\nhook   "

        assert clean_lyrics_text(raw) == "first line\nsecond line\n\nhook"

    def test_windows_newlines(self):
        assert clean_lyrics_text("a\r\nb\r\n") == "a\nb"


class TestGetPartialLyrics:
    def test_half_of_short_lyrics(self):
        excerpt, is_partial, total, shown = get_partial_lyrics(_lines(10))

        assert (is_partial, total, shown) == (True, 10, 5)
        assert excerpt == _lines(5)

    def test_rounds_up(self):
        _, _, total, shown = get_partial_lyrics(_lines(7))
        assert (total, shown) == (7, 4)

    def test_capped_at_sixteen_lines(self):
        _, is_partial, total, shown = get_partial_lyrics(_lines(40))
        assert (is_partial, total, shown) == (True, 40, 16)

    def test_single_line_is_complete(self):
        excerpt, is_partial, total, shown = get_partial_lyrics("only line")
        assert (excerpt, is_partial, total, shown) == ("only line", False, 1, 1)


class TestLyricsService:
    async def test_found(self, lrclib_client: MagicMock):
        lrclib_client.search.return_value = [_record()]

        result = await LyricsService(lrclib_client).get_track_lyrics(
            "Get Lucky (feat. Pharrell Williams)", "Daft Punk, Pharrell Williams"
        )

        lrclib_client.search.assert_awaited_once_with("Get Lucky Daft Punk")
        assert result.found is True
        assert result.is_partial is True
        assert result.message == "Partial lyrics shown"
        assert result.lyrics == _lines(5)
        assert (result.total_lines, result.shown_lines) == (10, 5)
        assert result.song_title == "Get Lucky"
        assert result.song_artist == "Daft Punk"

    async def test_full_lyrics_message(self, lrclib_client: MagicMock):
        lrclib_client.search.return_value = [_record(plainLyrics="just one line")]

        result = await LyricsService(lrclib_client).get_track_lyrics("Song", "Artist")

        assert result.found is True
        assert result.is_partial is False
        assert result.message == "Full lyrics shown"

    async def test_synced_lyrics_fallback(self, lrclib_client: MagicMock):
        lrclib_client.search.return_value = [
            _record(plainLyrics=None, syncedLyrics="[00:01.00] hello there\n[00:02.00] again")
        ]

        result = await LyricsService(lrclib_client).get_track_lyrics("Song", "Artist")

        assert result.found is True
        assert result.lyrics == "hello there"
        assert result.total_lines == 2

    async def test_no_match(self, lrclib_client: MagicMock):
        lrclib_client.search.return_value = []

        result = await LyricsService(lrclib_client).get_track_lyrics("Song", "Artist")

        assert result.found is False
        assert result.message == "Lyrics not found for this track"
        assert result.lyrics is None

    async def test_instrumental(self, lrclib_client: MagicMock):
        lrclib_client.search.return_value = [_record(instrumental=True, plainLyrics=None)]

        result = await LyricsService(lrclib_client).get_track_lyrics("Song", "Artist")

        assert result.found is False
        assert result.message == "This track is instrumental"

    async def test_too_short(self, lrclib_client: MagicMock):
        lrclib_client.search.return_value = [_record(plainLyrics="[Intro]\nok")]

        result = await LyricsService(lrclib_client).get_track_lyrics("Song", "Artist")

        assert result.found is False
        assert result.message == "Lyrics not available for this track!"

    async def test_upstream_error_never_raises(self, lrclib_client: MagicMock):
        lrclib_client.search.side_effect = httpx.ConnectError("lrclib down")

        result = await LyricsService(lrclib_client).get_track_lyrics("Song", "Artist")

        assert result.found is False
        assert result.message == "Unable to fetch lyrics at this time!"
        assert result.error == "lrclib down"

    async def test_disabled(self, lrclib_client: MagicMock):
        result = await LyricsService(lrclib_client, enabled=False).get_track_lyrics(
            "Song", "Artist"
        )

        assert result.found is False
        lrclib_client.search.assert_not_awaited()
