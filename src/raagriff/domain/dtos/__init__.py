"""
Data Transfer Objects handed from application services to page handlers.

Hey future me - Spotify JSON stays as plain dicts inside `items` (templates read
them directly). These DTOs only wrap the parts WE compute: pagination math and
lyrics lookups.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class PageEnvelope:
    """One page of a list-returning aggregator.

    `page` is 1-indexed and `offset = limit * (page - 1)`. `next` / `previous`
    are app-relative URLs following the "<base_url>/pages/<n>" convention, and
    `next` is only set while `offset + limit < total`.
    """

    base_url: str
    page: int
    items: list[dict[str, Any]]
    total: int
    limit: int
    offset: int
    next: str | None = None
    previous: str | None = None
    name: str | None = None

    @classmethod
    def empty(cls, base_url: str = "", limit: int = 0, page: int = 1) -> "PageEnvelope":
        """Envelope returned by best-effort aggregators when nothing could be built."""
        return cls(
            base_url=base_url,
            page=page,
            items=[],
            total=0,
            limit=limit,
            offset=limit * (page - 1),
        )


@dataclass
class LyricsResult:
    """Outcome of a lyrics lookup - never an exception, always one of these."""

    found: bool
    message: str
    source: str = "lrclib"
    lyrics: str | None = None
    is_partial: bool = False
    total_lines: int = 0
    shown_lines: int = 0
    song_title: str | None = None
    song_artist: str | None = None
    error: str | None = None

    @classmethod
    def not_found(cls, message: str, error: str | None = None) -> "LyricsResult":
        return cls(found=False, message=message, error=error)


@dataclass
class RelatedArtistCandidate:
    """Working record for the related-artists heuristic.

    Only `artist` leaves the service; the score/flag fields are internal and
    get stripped before the result is returned.
    """

    artist: dict[str, Any]
    genre_score: int = 0
    is_collaborator: bool = False

    @property
    def popularity(self) -> int:
        return int(self.artist.get("popularity") or 0)


@dataclass
class RecentListening:
    """What we learn from the recently-played endpoint."""

    tracks: list[dict[str, Any]] = field(default_factory=list)
    artist_ids: list[str] = field(default_factory=list)
    artist_names: list[str] = field(default_factory=list)
    album_ids: set[str] = field(default_factory=set)


__all__ = [
    "LyricsResult",
    "PageEnvelope",
    "RecentListening",
    "RelatedArtistCandidate",
]
