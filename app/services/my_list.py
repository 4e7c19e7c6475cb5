"""Per-user watchlist membership: add, remove and paginated listing."""

from __future__ import annotations

import asyncio
import logging
import uuid
import weakref
from datetime import datetime
from typing import Callable, Literal

from ..cache import TTLCache
from ..errors import ContentNotFound, DuplicateEntry, EntryNotFound, OrphanedEntry
from ..models import (
    DEFAULT_PAGE_LIMIT,
    ContentType,
    MyListItem,
    PaginatedResponse,
    Pagination,
    WatchlistEntry,
)
from ..storage import MYLIST_COLLECTION, Record, RecordStore
from ..utils import paginate, total_pages, utcnow
from .content_resolver import ContentResolver

logger = logging.getLogger(__name__)

CACHE_PREFIX = "mylist:"
DEFAULT_CACHE_TTL = 300

OrphanPolicy = Literal["fail", "skip"]


def cache_prefix(user_id: str) -> str:
    return f"{CACHE_PREFIX}{user_id}:"


def cache_key(user_id: str, page: int, limit: int) -> str:
    return f"{cache_prefix(user_id)}{page}:{limit}"


def _triple_matcher(
    user_id: str, content_id: str, content_type: str
) -> Callable[[Record], bool]:
    def _matches(record: Record) -> bool:
        return (
            record.get("userId") == user_id
            and record.get("contentId") == content_id
            and record.get("contentType") == content_type
        )

    return _matches


class MyListService:
    """Maintain watchlist entries with uniqueness and cache coherence.

    Each ``(user_id, content_id, content_type)`` triple exists at most once.
    Mutations and cache fills for a user run under that user's lock, so the
    duplicate check and the write cannot interleave with another mutation,
    and a page read before a mutation is never cached after it.
    """

    def __init__(
        self,
        store: RecordStore,
        resolver: ContentResolver,
        cache: TTLCache,
        *,
        cache_ttl: int = DEFAULT_CACHE_TTL,
        orphan_policy: OrphanPolicy = "fail",
        clock: Callable[[], datetime] = utcnow,
    ):
        self._store = store
        self._resolver = resolver
        self._cache = cache
        self._cache_ttl = cache_ttl
        self._orphan_policy = orphan_policy
        self._clock = clock
        # Locks are dropped once no coroutine holds or awaits them.
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def _user_lock(self, user_id: str) -> asyncio.Lock:
        return self._locks.setdefault(user_id, asyncio.Lock())

    async def add_to_my_list(
        self, user_id: str, content_id: str, content_type: ContentType
    ) -> WatchlistEntry:
        """Add content to the user's list and return the new entry."""

        await self._resolver.resolve(content_id, content_type)

        async with self._user_lock(user_id):
            existing = await self._store.find(
                MYLIST_COLLECTION, _triple_matcher(user_id, content_id, content_type)
            )
            if existing:
                raise DuplicateEntry()

            entry = WatchlistEntry(
                id=str(uuid.uuid4()),
                user_id=user_id,
                content_id=content_id,
                content_type=content_type,
                added_at=self._clock(),
            )
            await self._store.append(MYLIST_COLLECTION, entry.to_payload())
            self.invalidate_user_cache(user_id)

        logger.info("Added %s %s to list of %s", content_type, content_id, user_id)
        return entry

    async def remove_from_my_list(
        self, user_id: str, content_id: str, content_type: ContentType
    ) -> bool:
        """Remove the matching entry, raising ``EntryNotFound`` if absent."""

        async with self._user_lock(user_id):
            removed = await self._store.remove_where(
                MYLIST_COLLECTION, _triple_matcher(user_id, content_id, content_type)
            )
            if not removed:
                raise EntryNotFound()
            self.invalidate_user_cache(user_id)

        logger.info("Removed %s %s from list of %s", content_type, content_id, user_id)
        return True

    async def get_my_list(
        self, user_id: str, page: int = 1, limit: int = DEFAULT_PAGE_LIMIT
    ) -> PaginatedResponse[MyListItem]:
        """Return one page of the user's list, newest first, with content attached."""

        key = cache_key(user_id, page, limit)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        async with self._user_lock(user_id):
            cached = self._cache.get(key)
            if cached is not None:
                return cached
            response = await self._build_page(user_id, page, limit)
            self._cache.set(key, response, self._cache_ttl)
        return response

    async def _build_page(
        self, user_id: str, page: int, limit: int
    ) -> PaginatedResponse[MyListItem]:
        records = await self._store.find(
            MYLIST_COLLECTION, lambda record: record.get("userId") == user_id
        )
        entries = [WatchlistEntry.model_validate(record) for record in records]
        # Newest first; equal timestamps fall back to later insertion first.
        ordered = [
            entry
            for _, entry in sorted(
                enumerate(entries),
                key=lambda pair: (pair[1].added_at, pair[0]),
                reverse=True,
            )
        ]

        total = len(ordered)
        page_entries = paginate(ordered, page, limit)
        data = await self._hydrate(page_entries)

        return PaginatedResponse[MyListItem](
            data=data,
            pagination=Pagination(
                page=page,
                limit=limit,
                total=total,
                total_pages=total_pages(total, limit),
            ),
        )

    def invalidate_user_cache(self, user_id: str) -> None:
        self._cache.delete_pattern(f"{cache_prefix(user_id)}*")

    async def _hydrate(self, entries: list[WatchlistEntry]) -> list[MyListItem]:
        results = await asyncio.gather(
            *(
                self._resolver.resolve(entry.content_id, entry.content_type)
                for entry in entries
            ),
            return_exceptions=True,
        )

        items: list[MyListItem] = []
        for entry, result in zip(entries, results):
            if isinstance(result, ContentNotFound):
                if self._orphan_policy == "skip":
                    logger.warning(
                        "Skipping list entry %s: %s", entry.id, result.message
                    )
                    continue
                raise OrphanedEntry(
                    f"List entry {entry.id} references missing content: {result.message}"
                ) from result
            if isinstance(result, BaseException):
                raise result
            items.append(MyListItem.from_entry(entry, result))
        return items
