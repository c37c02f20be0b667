"""Small presentation helpers exposed to Jinja2 templates as globals."""

from typing import Any


def format_timestamp(milliseconds: int | float | None) -> str:
    """Format a duration as "m:ss", or "h:mm:ss" once it reaches an hour.

    >>> format_timestamp(215000)
    '3:35'
    >>> format_timestamp(3_725_000)
    '1:02:05'
    """
    total_seconds = int((milliseconds or 0) // 1000)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    if hours >= 1:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


# Hey future me - Spotify sends images largest-first, and sometimes an empty list
# (new playlists, obscure artists). Templates call this instead of images[0].
def image_url(
    images: list[dict[str, Any]] | None, default: str = "/static/images/placeholder.svg"
) -> str:
    """Return the URL of the first (largest) image, or a placeholder."""
    for image in images or []:
        if image and image.get("url"):
            return str(image["url"])
    return default


def artist_names(artists: list[dict[str, Any]] | None, separator: str = ", ") -> str:
    """Join artist names ("A, B, C") skipping entries without a name."""
    return separator.join(
        artist["name"] for artist in artists or [] if artist and artist.get("name")
    )
