"""Lyrics lookup for the track page (LRCLIB public database).

Hey future me - this service NEVER raises. The track page renders either the
lyrics excerpt or the LyricsResult message, whatever happens upstream.
"""

import logging
import math
import re
from typing import Any

from raagriff.domain.dtos import LyricsResult
from raagriff.infrastructure.integrations.lrclib_client import LrclibClient

logger = logging.getLogger(__name__)

PARTIAL_LYRICS_PERCENTAGE = 50
MAX_PARTIAL_LINES = 16
MIN_LYRICS_LENGTH = 4

# Applied in order. Remaster/feat. suffixes run to end of string.
_TRACK_NAME_NOISE = (
    re.compile(r"\(.*?\)"),
    re.compile(r"\[.*?\]"),
    re.compile(r"\s*-\s*.*?Remaster.*$", re.IGNORECASE),
    re.compile(r"\s*feat\..*$", re.IGNORECASE),
    re.compile(r"\s*ft\..*$", re.IGNORECASE),
)
_LRC_TIMESTAMP = re.compile(r"^[ \t]*\[\d{1,2}:\d{2}(?:[.:]\d{1,3})?\]\s?", re.MULTILINE)
_SECTION_HEADER = re.compile(r"^[ \t]*\[[^\]\n]*\][ \t]*$", re.MULTILINE)
_BLANK_RUNS = re.compile(r"\n{3,}")


def clean_track_name(track_name: str) -> str:
    """Strip bracketed notes, remaster suffixes and featured artists.

    >>> clean_track_name("Song (Live) - 2020 Remaster")
    'Song'
    """
    cleaned = track_name
    for pattern in _TRACK_NAME_NOISE:
        cleaned = pattern.sub("", cleaned)
    return cleaned.strip()


def clean_artist_name(artist_name: str) -> str:
    """First credited artist: "A, B & C" -> "A"."""
    return artist_name.split(",")[0].split("&")[0].strip()


def build_lyrics_query(track_name: str, artist_name: str) -> str:
    return f"{clean_track_name(track_name)} {clean_artist_name(artist_name)}"


def clean_lyrics_text(raw_lyrics: str) -> str:
    """Drop LRC timestamps and [Chorus]-style headers, collapse blank runs."""
    text = _LRC_TIMESTAMP.sub("", raw_lyrics.replace("\r\n", "\n"))
    text = _SECTION_HEADER.sub("", text)
    text = "\n".join(line.rstrip() for line in text.split("\n"))
    return _BLANK_RUNS.sub("\n\n", text).strip()


def get_partial_lyrics(
    lyrics: str,
    percentage: int = PARTIAL_LYRICS_PERCENTAGE,
    max_lines: int = MAX_PARTIAL_LINES,
) -> tuple[str, bool, int, int]:
    """Cut lyrics down to an excerpt.

    Returns:
        (excerpt, is_partial, total_lines, shown_lines) where shown_lines is
        min(ceil(percentage% of total_lines), max_lines)
    """
    lines = lyrics.split("\n")
    total_lines = len(lines)
    shown_lines = min(math.ceil(total_lines * percentage / 100), max_lines)
    return (
        "\n".join(lines[:shown_lines]),
        shown_lines < total_lines,
        total_lines,
        shown_lines,
    )


class LyricsService:
    """Finds and trims lyrics for a Spotify track."""

    def __init__(self, client: LrclibClient, enabled: bool = True) -> None:
        self._client = client
        self._enabled = enabled

    async def get_track_lyrics(self, track_name: str, artist_name: str) -> LyricsResult:
        """Look up lyrics by cleaned "<track> <artist>" query.

        Args:
            track_name: Spotify track name (may include "(Live)", "- Remaster" ...)
            artist_name: Artist credit string

        Returns:
            LyricsResult - found=False with a user-facing message on any problem
        """
        if not self._enabled:
            return LyricsResult.not_found("Lyrics are turned off")

        query = build_lyrics_query(track_name, artist_name)
        try:
            records = await self._client.search(query)
        except Exception as e:
            logger.warning(f'Lyrics lookup for "{query}" failed: {e}')
            return LyricsResult.not_found(
                "Unable to fetch lyrics at this time!", error=str(e)
            )

        if not records:
            logger.debug(f'No lyrics match for "{query}"')
            return LyricsResult.not_found("Lyrics not found for this track")

        match: dict[str, Any] = records[0]
        if match.get("instrumental"):
            return LyricsResult.not_found("This track is instrumental")

        raw_lyrics = match.get("plainLyrics") or match.get("syncedLyrics") or ""
        cleaned = clean_lyrics_text(raw_lyrics)
        if len(cleaned) < MIN_LYRICS_LENGTH:
            return LyricsResult.not_found("Lyrics not available for this track!")

        excerpt, is_partial, total_lines, shown_lines = get_partial_lyrics(cleaned)
        return LyricsResult(
            found=True,
            message="Partial lyrics shown" if is_partial else "Full lyrics shown",
            lyrics=excerpt,
            is_partial=is_partial,
            total_lines=total_lines,
            shown_lines=shown_lines,
            song_title=match.get("trackName"),
            song_artist=match.get("artistName"),
        )
