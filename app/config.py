"""Application configuration models."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Iterable, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


DEFAULT_CORS_ORIGINS: tuple[str, ...] = ("http://localhost:3000",)


class Settings(BaseSettings):
    """Settings loaded from environment variables or a .env file."""

    app_name: str = Field(default="My List", alias="APP_NAME")
    server_host: str = Field(default="0.0.0.0", alias="HOST")
    server_port: int = Field(default=3000, alias="PORT")
    environment: Literal["development", "production", "test"] = Field(
        default="development", alias="ENVIRONMENT"
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    storage_backend: Literal["json", "database"] = Field(
        default="json", alias="STORAGE_BACKEND"
    )
    data_dir: Path = Field(default=Path("./data"), alias="DATA_DIR")
    database_url: str = Field(
        default="sqlite+aiosqlite:///./mylist.db", alias="DATABASE_URL"
    )

    mylist_cache_ttl: int = Field(
        default=300, alias="MYLIST_CACHE_TTL", ge=1, le=86_400
    )
    orphaned_entry_policy: Literal["fail", "skip"] = Field(
        default="fail", alias="ORPHANED_ENTRY_POLICY"
    )
    seed_on_startup: bool = Field(default=True, alias="SEED_ON_STARTUP")

    cors_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=DEFAULT_CORS_ORIGINS, alias="CORS_ORIGINS"
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_cors_origins(cls, value: object) -> tuple[str, ...]:
        """Accept comma separated origins from environment values."""

        if value is None:
            return DEFAULT_CORS_ORIGINS
        if isinstance(value, str):
            raw_values = [part.strip() for part in value.split(",")]
        elif isinstance(value, Iterable):
            raw_values = [str(part).strip() for part in value]
        else:
            raise TypeError("CORS_ORIGINS must be a string or iterable of strings")

        cleaned: list[str] = []
        for entry in raw_values:
            entry = entry.rstrip("/")
            if entry and entry not in cleaned:
                cleaned.append(entry)
        if not cleaned:
            return DEFAULT_CORS_ORIGINS
        return tuple(cleaned)

    @field_validator("orphaned_entry_policy", "storage_backend", mode="before")
    @classmethod
    def _lowercase_choice(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _uppercase_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper() or "INFO"
        return value

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[call-arg]


settings = get_settings()
