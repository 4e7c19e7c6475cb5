"""SQLAlchemy ORM models backing the database record store."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, Integer, JSON, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base
from .utils import utcnow


class StoredRecord(Base):
    """A single JSON record belonging to a named collection."""

    __tablename__ = "records"
    __table_args__ = (
        UniqueConstraint("collection", "record_id", name="uq_records_collection_record"),
    )

    # Autoincrement keeps insertion order for read_all.
    position: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    collection: Mapped[str] = mapped_column(String(64), index=True)
    record_id: Mapped[str] = mapped_column(String(255))
    payload: Mapped[dict[str, Any]] = mapped_column(JSON)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )
