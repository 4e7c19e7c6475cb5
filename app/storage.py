"""Collection persistence for watchlist and catalog records.

Every collection is an ordered set of JSON objects carrying an ``id`` field.
Two backends are provided: one JSON file per collection (the default, and
the layout the seed data and fixtures use) and a single SQLAlchemy table
shared by all collections. Writes to a collection are serialised inside the
process so concurrent appends and removals cannot lose each other's updates.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Iterable

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from .database import Database
from .db_models import StoredRecord
from .errors import StorageFailure

logger = logging.getLogger(__name__)

MYLIST_COLLECTION = "mylist"
MOVIES_COLLECTION = "movies"
TVSHOWS_COLLECTION = "tvshows"

Record = dict[str, Any]
Predicate = Callable[[Record], bool]

COLLECTION_NAME_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def _record_id(item: Record) -> str:
    try:
        return str(item["id"])
    except KeyError as exc:
        raise ValueError("Records must carry an 'id' field") from exc


class RecordStore(ABC):
    """Generic collection storage keyed by each record's ``id``."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock(self, collection: str) -> asyncio.Lock:
        return self._locks.setdefault(collection, asyncio.Lock())

    @abstractmethod
    async def read_all(self, collection: str) -> list[Record]:
        """Return every record, or an empty list if the collection is new."""

    @abstractmethod
    async def _write(self, collection: str, items: list[Record]) -> None:
        """Replace the collection contents; caller holds the collection lock."""

    async def _append(self, collection: str, item: Record) -> None:
        items = await self.read_all(collection)
        items.append(item)
        await self._write(collection, items)

    async def _remove(self, collection: str, predicate: Predicate) -> list[Record]:
        items = await self.read_all(collection)
        kept: list[Record] = []
        removed: list[Record] = []
        for item in items:
            (removed if predicate(item) else kept).append(item)
        if removed:
            await self._write(collection, kept)
        return removed

    async def write_all(self, collection: str, items: Iterable[Record]) -> None:
        """Atomically replace the full contents of ``collection``."""

        materialised = [dict(item) for item in items]
        async with self._lock(collection):
            await self._write(collection, materialised)
        logger.debug("Replaced %s with %d records", collection, len(materialised))

    async def append(self, collection: str, item: Record) -> None:
        async with self._lock(collection):
            await self._append(collection, dict(item))

    async def find(self, collection: str, predicate: Predicate) -> list[Record]:
        return [item for item in await self.read_all(collection) if predicate(item)]

    async def remove_where(self, collection: str, predicate: Predicate) -> list[Record]:
        """Delete matching records and return them."""

        async with self._lock(collection):
            return await self._remove(collection, predicate)


class JsonFileRecordStore(RecordStore):
    """Stores each collection as ``<data_dir>/<collection>.json``."""

    def __init__(self, data_dir: str | Path):
        super().__init__()
        self.data_dir = Path(data_dir).expanduser()

    def path_for(self, collection: str) -> Path:
        if not COLLECTION_NAME_RE.match(collection):
            raise ValueError(f"Invalid collection name: {collection!r}")
        return self.data_dir / f"{collection}.json"

    async def read_all(self, collection: str) -> list[Record]:
        return await asyncio.to_thread(self._read_sync, collection)

    async def _write(self, collection: str, items: list[Record]) -> None:
        await asyncio.to_thread(self._write_sync, collection, items)

    def _read_sync(self, collection: str) -> list[Record]:
        path = self.path_for(collection)
        if not path.exists():
            return []
        try:
            with path.open("r", encoding="utf-8") as handle:
                raw = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageFailure(f"Unable to read collection {collection}") from exc

        if not isinstance(raw, list) or not all(isinstance(item, dict) for item in raw):
            raise StorageFailure(f"Collection {collection} is not a list of records")
        return raw

    def _write_sync(self, collection: str, items: list[Record]) -> None:
        path = self.path_for(collection)
        temp_name: str | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=path.parent,
                prefix=f".{collection}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                temp_name = handle.name
                json.dump(items, handle, indent=2)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_name, path)
        except (OSError, TypeError, ValueError) as exc:
            if temp_name is not None:
                Path(temp_name).unlink(missing_ok=True)
            raise StorageFailure(f"Unable to write collection {collection}") from exc


class DatabaseRecordStore(RecordStore):
    """Stores every collection as rows of the ``records`` table."""

    def __init__(self, database: Database):
        super().__init__()
        self._database = database

    async def read_all(self, collection: str) -> list[Record]:
        statement = (
            select(StoredRecord)
            .where(StoredRecord.collection == collection)
            .order_by(StoredRecord.position)
        )
        try:
            async with self._database.session_factory() as session:
                rows = (await session.scalars(statement)).all()
        except SQLAlchemyError as exc:
            raise StorageFailure(f"Unable to read collection {collection}") from exc
        return [dict(row.payload) for row in rows]

    async def _write(self, collection: str, items: list[Record]) -> None:
        try:
            async with self._database.session() as session:
                await session.execute(
                    delete(StoredRecord).where(StoredRecord.collection == collection)
                )
                session.add_all(
                    StoredRecord(
                        collection=collection,
                        record_id=_record_id(item),
                        payload=item,
                    )
                    for item in items
                )
        except SQLAlchemyError as exc:
            raise StorageFailure(f"Unable to write collection {collection}") from exc

    async def _append(self, collection: str, item: Record) -> None:
        try:
            async with self._database.session() as session:
                session.add(
                    StoredRecord(
                        collection=collection,
                        record_id=_record_id(item),
                        payload=item,
                    )
                )
        except SQLAlchemyError as exc:
            raise StorageFailure(f"Unable to append to collection {collection}") from exc

    async def _remove(self, collection: str, predicate: Predicate) -> list[Record]:
        statement = select(StoredRecord).where(StoredRecord.collection == collection)
        try:
            async with self._database.session() as session:
                rows = (await session.scalars(statement)).all()
                matched = [row for row in rows if predicate(dict(row.payload))]
                if matched:
                    await session.execute(
                        delete(StoredRecord).where(
                            StoredRecord.position.in_([row.position for row in matched])
                        )
                    )
        except SQLAlchemyError as exc:
            raise StorageFailure(f"Unable to update collection {collection}") from exc
        return [dict(row.payload) for row in matched]
