"""Track detail page."""

import asyncio
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from raagriff.api.dependencies import (
    get_artist_service,
    get_lyrics_service,
    get_related_artists_service,
    get_track_service,
    get_user_service,
)
from raagriff.api.routers.ui._shared import render_page
from raagriff.application.services import (
    ArtistService,
    LyricsService,
    RelatedArtistsService,
    TrackService,
    UserService,
)
from raagriff.domain.dtos import LyricsResult

logger = logging.getLogger(__name__)

router = APIRouter()


# Hey future me - two rounds: the track first (we need its artist ids), then artist
# profiles, the main artist's top tracks, related artists and lyrics together.
@router.get("/tracks/{track_id}", response_class=HTMLResponse)
async def track_detail(
    request: Request,
    track_id: str,
    users: UserService = Depends(get_user_service),
    track_service: TrackService = Depends(get_track_service),
    artist_service: ArtistService = Depends(get_artist_service),
    related_service: RelatedArtistsService = Depends(get_related_artists_service),
    lyrics_service: LyricsService = Depends(get_lyrics_service),
) -> HTMLResponse:
    current_user, recently_played, track = await asyncio.gather(
        users.get_profile(),
        users.get_recently_played_tracks(),
        track_service.get_track(track_id),
    )

    artist_ids = [a["id"] for a in track.get("artists") or [] if a and a.get("id")]
    if not artist_ids:
        return render_page(
            request,
            "track.html",
            current_user,
            recently_played,
            track=track,
            track_artists=[],
            top_tracks=[],
            related_artists=[],
            lyrics=LyricsResult.not_found("Lyrics not found for this track"),
        )

    main_artist_id = artist_ids[0]
    main_artist_name = track["artists"][0].get("name", "")
    track_artists, top_tracks, related_artists, lyrics = await asyncio.gather(
        artist_service.get_several_artists(artist_ids),
        artist_service.get_artist_top_tracks(main_artist_id),
        related_service.get_related_artists(main_artist_id),
        lyrics_service.get_track_lyrics(track.get("name", ""), main_artist_name),
    )

    return render_page(
        request,
        "track.html",
        current_user,
        recently_played,
        track=track,
        track_artists=track_artists,
        top_tracks=top_tracks,
        related_artists=related_artists,
        lyrics=lyrics,
    )
