"""In-process TTL cache with prefix invalidation."""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable

logger = logging.getLogger(__name__)

_MISSING = object()


class TTLCache:
    """Key/value cache whose entries expire after a per-entry TTL.

    A single instance is built at startup and handed to the services that
    need it. Expired entries are dropped lazily on access. Nothing is shared
    across processes.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key, _MISSING)
            if entry is _MISSING:
                return default
            value, expires_at = entry
            if expires_at <= now:
                del self._entries[key]
                return default
            return value

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        with self._lock:
            self._entries[key] = (value, self._clock() + ttl_seconds)

    def invalidate_prefix(self, prefix: str) -> int:
        """Remove every key starting with ``prefix`` and return the count."""

        with self._lock:
            doomed = [key for key in self._entries if key.startswith(prefix)]
            for key in doomed:
                del self._entries[key]
        if doomed:
            logger.debug("Invalidated %d cache entries under %s", len(doomed), prefix)
        return len(doomed)

    def delete_pattern(self, pattern: str) -> int:
        """Remove keys matching ``prefix*``; a pattern without ``*`` is exact."""

        if pattern.endswith("*"):
            return self.invalidate_prefix(pattern[:-1])
        with self._lock:
            return 1 if self._entries.pop(pattern, _MISSING) is not _MISSING else 0

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        now = self._clock()
        with self._lock:
            return sum(1 for _, expires_at in self._entries.values() if expires_at > now)

    def __bool__(self) -> bool:
        # An empty cache is still a usable cache.
        return True
