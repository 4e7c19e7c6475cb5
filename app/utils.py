"""Utility helpers for the My List service."""

from __future__ import annotations

import math
from datetime import date, datetime, timezone
from typing import Sequence, TypeVar

T = TypeVar("T")


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""

    return datetime.now(timezone.utc)


def parse_date(value: object) -> object:
    """Normalise stored date strings to ``date`` values.

    Catalog files hold either plain ISO dates (``1999-03-31``) or full
    timestamps (``2023-01-01T00:00:00.000Z``); only the calendar date is kept.
    Values that are not strings are returned untouched for pydantic to judge.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        candidate = value.strip()[:10]
        try:
            return date.fromisoformat(candidate)
        except ValueError as exc:
            raise ValueError(f"Invalid date value: {value!r}") from exc
    return value


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit > 0 else 0


def paginate(items: Sequence[T], page: int, limit: int) -> list[T]:
    """Return the ``page``-th slice of ``limit`` items (1-indexed)."""

    offset = (page - 1) * limit
    return list(items[offset : offset + limit])
