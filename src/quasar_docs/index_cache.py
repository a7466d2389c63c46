"""Holds the single live documentation index behind a TTL gate.

The cached reference is only ever swapped for a complete new ``DocIndex``, so
readers see either the previous index or the next one, never a partial build.
Stale callers arriving while a rebuild is in flight wait on the same lock and
reuse its result instead of crawling again.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta

import structlog

from quasar_docs.cache import Clock, utc_now
from quasar_docs.models.index import DocIndex

log = structlog.get_logger()

IndexBuilder = Callable[[], Awaitable[DocIndex]]


class IndexCache:
    def __init__(
        self,
        builder: IndexBuilder,
        ttl: timedelta = timedelta(hours=1),
        clock: Clock = utc_now,
    ) -> None:
        self._builder = builder
        self._ttl = ttl
        self._clock = clock
        self._index: DocIndex | None = None
        self._built_at: datetime | None = None
        self._lock = asyncio.Lock()

    def _fresh(self) -> DocIndex | None:
        if self._index is None or self._built_at is None:
            return None
        if self._clock() - self._built_at >= self._ttl:
            return None
        return self._index

    async def get_index(self) -> DocIndex:
        """Return the cached index, rebuilding it first if it is missing or expired."""
        index = self._fresh()
        if index is not None:
            return index

        async with self._lock:
            # Another task may have finished a rebuild while we waited
            index = self._fresh()
            if index is not None:
                return index

            started = self._clock()
            index = await self._builder()
            if not index.pages:
                # Empty crawl means the remote was unreachable; retry on next call
                log.warning("index_build_empty", cached=False)
                return index

            self._index, self._built_at = index, started
            return index

    def invalidate(self) -> None:
        """Force the next ``get_index`` call to rebuild."""
        self._index = None
        self._built_at = None
