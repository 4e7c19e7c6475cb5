"""Configuration settings behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from app.config import DEFAULT_CORS_ORIGINS, Settings


def test_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.storage_backend == "json"
    assert settings.mylist_cache_ttl == 300
    assert settings.orphaned_entry_policy == "fail"
    assert settings.cors_origins == DEFAULT_CORS_ORIGINS


def test_environment_aliases(monkeypatch) -> None:
    """Settings should be read from their environment variable names."""

    monkeypatch.setenv("STORAGE_BACKEND", "Database")
    monkeypatch.setenv("DATA_DIR", "/srv/mylist")
    monkeypatch.setenv("MYLIST_CACHE_TTL", "60")
    monkeypatch.setenv("ORPHANED_ENTRY_POLICY", "SKIP")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example/, https://b.example")

    settings = Settings(_env_file=None)

    assert settings.storage_backend == "database"
    assert settings.data_dir == Path("/srv/mylist")
    assert settings.mylist_cache_ttl == 60
    assert settings.orphaned_entry_policy == "skip"
    assert settings.cors_origins == ("https://a.example", "https://b.example")


def test_blank_cors_origins_fall_back_to_default() -> None:
    settings = Settings(_env_file=None, CORS_ORIGINS=" , ")

    assert settings.cors_origins == DEFAULT_CORS_ORIGINS


def test_unknown_storage_backend_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, STORAGE_BACKEND="redis")


def test_cache_ttl_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, MYLIST_CACHE_TTL=0)
