from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CacheEntry(BaseModel):
    """Cached remote content: a raw file body or a serialized directory listing."""

    model_config = ConfigDict(frozen=True)

    content: str
    fetched_at: datetime
    expires_at: datetime  # fetched_at + ttl
