"""Browse categories for the explore page."""

from typing import Any

from raagriff.application.services.pagination import (
    DEFAULT_LIMIT,
    build_page_envelope,
    calculate_offset,
)
from raagriff.application.services.spotify_session import SpotifySession
from raagriff.domain.dtos import PageEnvelope


class CategoryService:
    def __init__(self, session: SpotifySession) -> None:
        self._session = session

    async def get_categories(
        self, page: int | None = 1, limit: int = DEFAULT_LIMIT, base_url: str = "/explore"
    ) -> PageEnvelope:
        session = self._session
        result = await session.client.get_categories(
            session.access_token, limit=limit, offset=calculate_offset(page, limit)
        )
        return build_page_envelope(
            result.get("categories"), base_url, page, limit, name="Explore"
        )

    async def get_category(self, category_id: str) -> dict[str, Any]:
        return await self._session.client.get_category(
            category_id, self._session.access_token
        )
