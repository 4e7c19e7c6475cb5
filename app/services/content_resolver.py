"""Lookup of catalog records by identifier and content type."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from ..errors import ContentNotFound, StorageFailure
from ..models import CONTENT_TYPE_LABELS, ContentType, Movie, TVShow
from ..storage import MOVIES_COLLECTION, TVSHOWS_COLLECTION, RecordStore

logger = logging.getLogger(__name__)

CATALOG_COLLECTIONS: dict[str, str] = {
    "movie": MOVIES_COLLECTION,
    "tvshow": TVSHOWS_COLLECTION,
}


class ContentResolver:
    """Resolve movie and show records held by the read-only catalog."""

    def __init__(self, store: RecordStore):
        self._store = store

    async def resolve(self, content_id: str, content_type: ContentType) -> Movie | TVShow:
        """Return the catalog record or raise ``ContentNotFound``."""

        collection = CATALOG_COLLECTIONS.get(content_type)
        if collection is None:
            raise ContentNotFound(f"Unknown content type {content_type!r}")

        matches = await self._store.find(
            collection, lambda record: str(record.get("id")) == content_id
        )
        if not matches:
            label = CONTENT_TYPE_LABELS[content_type]
            raise ContentNotFound(f"{label} with id {content_id} not found")
        return self.to_model(matches[0], content_type)

    async def exists(self, content_id: str, content_type: ContentType) -> bool:
        try:
            await self.resolve(content_id, content_type)
        except ContentNotFound:
            return False
        return True

    @staticmethod
    def to_model(record: dict[str, object], content_type: ContentType) -> Movie | TVShow:
        """Validate a stored catalog record into its tagged model."""

        model = Movie if content_type == "movie" else TVShow
        try:
            return model.model_validate({**record, "contentType": content_type})
        except ValidationError as exc:
            logger.warning(
                "Catalog record %s (%s) failed validation: %s",
                record.get("id"),
                content_type,
                exc,
            )
            raise StorageFailure(
                f"Catalog record {record.get('id')} is malformed"
            ) from exc
