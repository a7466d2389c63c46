"""Per-process application state handed to every tool handler.

Owns the HTTP client and both caches so nothing lives in module globals; tests
build their own ``AppState`` with fake clocks and mocked transports.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from functools import partial

import httpx

from quasar_docs.cache import Clock, ContentCache, utc_now
from quasar_docs.config import Settings
from quasar_docs.fetcher import Fetcher, build_http_client
from quasar_docs.index_cache import IndexCache
from quasar_docs.indexer import build_index


@dataclass
class AppState:
    settings: Settings
    http_client: httpx.AsyncClient
    fetcher: Fetcher
    index_cache: IndexCache

    @classmethod
    def create(
        cls,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
        clock: Clock = utc_now,
    ) -> AppState:
        settings = settings or Settings()
        client = http_client or build_http_client(settings.github)
        content_cache = ContentCache(
            ttl=timedelta(minutes=settings.cache.content_ttl_minutes), clock=clock
        )
        fetcher = Fetcher(client, content_cache, settings)
        index_cache = IndexCache(
            builder=partial(build_index, fetcher, lightweight=True, clock=clock),
            ttl=timedelta(minutes=settings.cache.index_ttl_minutes),
            clock=clock,
        )
        return cls(
            settings=settings,
            http_client=client,
            fetcher=fetcher,
            index_cache=index_cache,
        )
