"""TTL cache behaviour tests."""

from __future__ import annotations

import pytest

from app.cache import TTLCache


def test_get_returns_value_until_expiry(manual_clock) -> None:
    cache = TTLCache(clock=manual_clock)
    cache.set("mylist:u1:1:20", {"total": 3}, 300)

    manual_clock.advance(299.5)
    assert cache.get("mylist:u1:1:20") == {"total": 3}

    manual_clock.advance(0.5)
    assert cache.get("mylist:u1:1:20") is None
    assert len(cache) == 0


def test_missing_key_returns_default() -> None:
    cache = TTLCache()

    assert cache.get("absent") is None
    assert cache.get("absent", "fallback") == "fallback"


def test_set_overwrites_and_resets_ttl(manual_clock) -> None:
    cache = TTLCache(clock=manual_clock)
    cache.set("key", 1, 10)
    manual_clock.advance(8)
    cache.set("key", 2, 10)
    manual_clock.advance(8)

    assert cache.get("key") == 2


def test_non_positive_ttl_is_rejected() -> None:
    with pytest.raises(ValueError):
        TTLCache().set("key", 1, 0)


def test_delete_pattern_removes_prefix_only() -> None:
    cache = TTLCache()
    cache.set("mylist:u1:1:20", "a", 60)
    cache.set("mylist:u1:2:20", "b", 60)
    cache.set("mylist:u10:1:20", "c", 60)
    cache.set("mylist:u2:1:20", "d", 60)

    removed = cache.delete_pattern("mylist:u1:*")

    assert removed == 2
    assert cache.get("mylist:u1:1:20") is None
    assert cache.get("mylist:u10:1:20") == "c"
    assert cache.get("mylist:u2:1:20") == "d"


def test_delete_pattern_without_wildcard_is_exact() -> None:
    cache = TTLCache()
    cache.set("mylist:u1:1:20", "a", 60)
    cache.set("mylist:u1:1:200", "b", 60)

    assert cache.delete_pattern("mylist:u1:1:20") == 1
    assert cache.get("mylist:u1:1:200") == "b"
    assert cache.delete_pattern("mylist:u1:1:20") == 0


def test_clear_removes_everything() -> None:
    cache = TTLCache()
    cache.set("a", 1, 60)
    cache.set("b", 2, 60)

    cache.clear()

    assert len(cache) == 0
    assert cache.get("a") is None


def test_empty_cache_is_truthy() -> None:
    cache = TTLCache()

    assert len(cache) == 0
    assert cache
