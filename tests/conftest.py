"""Pytest configuration and test helpers."""

from __future__ import annotations

import json
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import SimpleNamespace

import pytest


# Ensure the application package is importable when running tests without an
# editable install. This mirrors the expected runtime layout where ``app`` sits
# at the project root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


from app.storage import JsonFileRecordStore  # noqa: E402


IDS = SimpleNamespace(
    movie="6f1c2b8e-3d4a-4f5b-9c6d-7e8f9a0b1c2d",
    second_movie="0d3e5f7a-9b1c-4d2e-8f3a-5b7c9d1e3f5a",
    show="8a7b6c5d-4e3f-4a1b-8c9d-0e1f2a3b4c5d",
)

MOVIES = [
    {
        "id": IDS.movie,
        "title": "Test Movie",
        "description": "A test movie for integration testing",
        "genres": ["Action", "Comedy"],
        "releaseDate": "2023-01-01T00:00:00.000Z",
        "director": "Test Director",
        "actors": ["Actor 1", "Actor 2"],
        "posterUrl": "https://example.com/poster.jpg",
        "backdropUrl": "https://example.com/backdrop.jpg",
    },
    {
        "id": IDS.second_movie,
        "title": "Second Movie",
        "description": "Another feature",
        "genres": ["Drama"],
        "releaseDate": "1999-03-31",
        "director": "Someone Else",
        "actors": ["Actor 5"],
    },
]

TV_SHOWS = [
    {
        "id": IDS.show,
        "title": "Test TV Show",
        "description": "A test TV show for integration testing",
        "genres": ["Drama", "SciFi"],
        "posterUrl": "https://example.com/poster.jpg",
        "episodes": [
            {
                "episodeNumber": 1,
                "seasonNumber": 1,
                "releaseDate": "2023-01-01T00:00:00.000Z",
                "director": "Episode Director",
                "actors": ["Actor 3", "Actor 4"],
            }
        ],
    }
]


class StepClock:
    """Clock returning strictly increasing timestamps one second apart."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        value = self.current
        self.current = value + timedelta(seconds=1)
        return value


class ManualClock:
    """Monotonic clock advanced explicitly by tests."""

    def __init__(self) -> None:
        self.now = 1_000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def ids() -> SimpleNamespace:
    return IDS


@pytest.fixture
def data_dir(tmp_path) -> Path:
    """A data directory holding the test catalog and an empty list."""

    directory = tmp_path / "data"
    directory.mkdir()
    (directory / "movies.json").write_text(json.dumps(MOVIES), encoding="utf-8")
    (directory / "tvshows.json").write_text(json.dumps(TV_SHOWS), encoding="utf-8")
    return directory


@pytest.fixture
def store(data_dir) -> JsonFileRecordStore:
    return JsonFileRecordStore(data_dir)


@pytest.fixture
def step_clock() -> StepClock:
    return StepClock()


@pytest.fixture
def manual_clock() -> ManualClock:
    return ManualClock()
