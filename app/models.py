"""Pydantic models describing watchlist and catalog payloads."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Annotated, Generic, Literal, TypeVar, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .utils import parse_date

ContentType = Literal["movie", "tvshow"]

CONTENT_TYPE_LABELS: dict[str, str] = {"movie": "Movie", "tvshow": "TV Show"}

DEFAULT_PAGE_LIMIT = 20
MAX_PAGE_LIMIT = 1_000

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model exchanging camelCase keys on the wire and on disk."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True)


class Episode(CamelModel):
    episode_number: int
    season_number: int
    release_date: date
    director: str = ""
    actors: list[str] = Field(default_factory=list)

    @field_validator("release_date", mode="before")
    @classmethod
    def _normalise_release_date(cls, value: object) -> object:
        return parse_date(value)


class Movie(CamelModel):
    """A movie as held by the content catalog."""

    content_type: Literal["movie"] = "movie"
    id: str
    title: str
    description: str = ""
    genres: list[str] = Field(default_factory=list)
    release_date: date
    director: str = ""
    actors: list[str] = Field(default_factory=list)
    poster_url: str | None = None
    backdrop_url: str | None = None

    @field_validator("release_date", mode="before")
    @classmethod
    def _normalise_release_date(cls, value: object) -> object:
        return parse_date(value)


class TVShow(CamelModel):
    """A TV show and its episodes as held by the content catalog."""

    content_type: Literal["tvshow"] = "tvshow"
    id: str
    title: str
    description: str = ""
    genres: list[str] = Field(default_factory=list)
    poster_url: str | None = None
    backdrop_url: str | None = None
    episodes: list[Episode] = Field(default_factory=list)


ContentRecord = Annotated[Union[Movie, TVShow], Field(discriminator="content_type")]


class WatchlistEntry(CamelModel):
    """One user's intent to track one piece of content."""

    id: str
    user_id: str
    content_id: str
    content_type: ContentType
    added_at: datetime

    @field_validator("added_at")
    @classmethod
    def _ensure_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class MyListItem(WatchlistEntry):
    """A watchlist entry hydrated with its catalog record."""

    content: ContentRecord | None = None

    @classmethod
    def from_entry(
        cls, entry: WatchlistEntry, content: Movie | TVShow | None
    ) -> "MyListItem":
        return cls(**entry.model_dump(), content=content)


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class PaginatedResponse(CamelModel, Generic[T]):
    data: list[T] = Field(default_factory=list)
    pagination: Pagination


class ListItemRequest(CamelModel):
    """Body accepted by the add and remove endpoints."""

    content_id: UUID
    content_type: ContentType

    @field_validator("content_id", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value


class PageQuery(CamelModel):
    """Pagination query parameters."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT)
