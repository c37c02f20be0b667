"""Offset math and page envelopes shared by every list-returning service."""

from typing import Any

from raagriff.domain.dtos import PageEnvelope

# Item counts used across the UI. LOWER_LIMIT fills one card row, DEFAULT_LIMIT a
# full grid page.
LOWER_LIMIT = 12
DEFAULT_LIMIT = 28


def normalize_page(page: int | None) -> int:
    """Missing or non-positive page numbers mean the first page."""
    if page is None or page < 1:
        return 1
    return page


def calculate_offset(page: int | None = None, limit: int = DEFAULT_LIMIT) -> int:
    """Translate a 1-indexed page number into an upstream offset.

    Args:
        page: Page number from the `/pages/{page}` path suffix (defaults to 1)
        limit: Items per page

    Returns:
        limit * (page - 1)
    """
    return limit * (normalize_page(page) - 1)


def _page_links(
    base_url: str, page: int, limit: int, offset: int, total: int
) -> tuple[str | None, str | None]:
    next_url = f"{base_url}/pages/{page + 1}" if offset + limit < total else None
    previous_url = f"{base_url}/pages/{page - 1}" if page > 1 else None
    return next_url, previous_url


def build_page_envelope(
    paging: dict[str, Any] | None,
    base_url: str,
    page: int | None,
    limit: int,
    name: str | None = None,
) -> PageEnvelope:
    """Wrap one Spotify paging object into a PageEnvelope.

    Spotify's own `next` URL points at api.spotify.com; we replace it with an
    app-relative `<base_url>/pages/<n>` link. Null items (deleted playlists etc.)
    are dropped.
    """
    page = normalize_page(page)
    paging = paging or {}
    offset = calculate_offset(page, limit)
    total = int(paging.get("total") or 0)
    items = [item for item in paging.get("items") or [] if item is not None]
    next_url, previous_url = _page_links(base_url, page, limit, offset, total)

    return PageEnvelope(
        base_url=base_url,
        page=page,
        items=items,
        total=total,
        limit=limit,
        offset=offset,
        next=next_url,
        previous=previous_url,
        name=name,
    )


def paginate_items(
    items: list[dict[str, Any]],
    base_url: str,
    page: int | None,
    limit: int,
) -> PageEnvelope:
    """Slice an in-memory list into one page (used for shuffled recommendation sets)."""
    page = normalize_page(page)
    offset = calculate_offset(page, limit)
    total = len(items)
    next_url, previous_url = _page_links(base_url, page, limit, offset, total)

    return PageEnvelope(
        base_url=base_url,
        page=page,
        items=items[offset : offset + limit],
        total=total,
        limit=limit,
        offset=offset,
        next=next_url,
        previous=previous_url,
    )
