"""Paginated browsing of the movie and TV show catalog."""

from __future__ import annotations

from ..models import (
    DEFAULT_PAGE_LIMIT,
    ContentRecord,
    Movie,
    PaginatedResponse,
    Pagination,
    TVShow,
)
from ..storage import MOVIES_COLLECTION, TVSHOWS_COLLECTION, RecordStore
from ..utils import paginate, total_pages
from .content_resolver import ContentResolver


class CatalogService:
    """Read-only listings over the catalog collections."""

    def __init__(self, store: RecordStore):
        self._store = store

    async def list_movies(
        self, page: int = 1, limit: int = DEFAULT_PAGE_LIMIT
    ) -> PaginatedResponse[Movie]:
        movies = await self._load_movies()
        return self._page(PaginatedResponse[Movie], movies, page, limit)

    async def list_tv_shows(
        self, page: int = 1, limit: int = DEFAULT_PAGE_LIMIT
    ) -> PaginatedResponse[TVShow]:
        shows = await self._load_tv_shows()
        return self._page(PaginatedResponse[TVShow], shows, page, limit)

    async def list_all_content(
        self, page: int = 1, limit: int = DEFAULT_PAGE_LIMIT
    ) -> PaginatedResponse[Movie | TVShow]:
        """Movies first, then shows, each tagged with its content type."""

        content: list[Movie | TVShow] = [
            *await self._load_movies(),
            *await self._load_tv_shows(),
        ]
        return self._page(PaginatedResponse[ContentRecord], content, page, limit)

    async def count(self) -> dict[str, int]:
        movies = await self._store.read_all(MOVIES_COLLECTION)
        shows = await self._store.read_all(TVSHOWS_COLLECTION)
        return {"movies": len(movies), "tvshows": len(shows)}

    async def _load_movies(self) -> list[Movie]:
        records = await self._store.read_all(MOVIES_COLLECTION)
        return [ContentResolver.to_model(record, "movie") for record in records]

    async def _load_tv_shows(self) -> list[TVShow]:
        records = await self._store.read_all(TVSHOWS_COLLECTION)
        return [ContentResolver.to_model(record, "tvshow") for record in records]

    @staticmethod
    def _page(
        response_model: type[PaginatedResponse], items: list, page: int, limit: int
    ) -> PaginatedResponse:
        total = len(items)
        return response_model(
            data=paginate(items, page, limit),
            pagination=Pagination(
                page=page,
                limit=limit,
                total=total,
                total_pages=total_pages(total, limit),
            ),
        )
