"""In-memory TTL cache for remote content.

Entries are never mutated in place: a write replaces the whole entry, and an
entry found past ``expires_at`` is evicted on that lookup (no background
sweep). The clock is injected so tests can move time without sleeping.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import structlog

from quasar_docs.models.cache import CacheEntry

log = structlog.get_logger()

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class ContentCache:
    """Process-scoped cache keyed by fetch operation (``raw:<path>``, ``dir:<path>``)."""

    def __init__(self, ttl: timedelta, clock: Clock = utc_now) -> None:
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> str | None:
        """Return cached content, or ``None`` on miss. Expired entries are evicted."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        if self._clock() > entry.expires_at:
            # Only evict the entry we looked at; a concurrent set may have replaced it
            if self._entries.get(key) is entry:
                del self._entries[key]
            log.debug("cache_entry_expired", key=key)
            return None

        return entry.content

    def set(self, key: str, content: str) -> CacheEntry:
        now = self._clock()
        entry = CacheEntry(content=content, fetched_at=now, expires_at=now + self._ttl)
        self._entries[key] = entry
        return entry

    def __len__(self) -> int:
        return len(self._entries)
