"""Unit-specific fixtures (HTTP mocked with respx, time driven by FakeClock)."""

from __future__ import annotations

from datetime import timedelta

import httpx
import pytest
import respx

from quasar_docs.cache import ContentCache
from quasar_docs.fetcher import Fetcher
from tests.conftest import FakeClock


@pytest.fixture()
async def fetcher(clock: FakeClock, router: respx.Router) -> Fetcher:
    """Fetcher with its own content cache over a mocked transport."""
    async with httpx.AsyncClient() as client:
        yield Fetcher(client, ContentCache(ttl=timedelta(minutes=30), clock=clock))
