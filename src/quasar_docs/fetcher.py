"""Remote content fetcher for the Quasar docs on GitHub.

Two endpoint families are used: raw.githubusercontent.com for file bodies and
the GitHub contents API for directory listings. Every HTTP call produces a
tagged ``FetchResult``; the public methods collapse it so callers only ever
see "content", "not found" (``None``) or "empty listing". Upstream failures
are logged here and never raised past this module.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from quasar_docs import __version__
from quasar_docs.config import DocsSettings, GitHubSettings, Settings
from quasar_docs.models.index import DirectoryEntry

if TYPE_CHECKING:
    from quasar_docs.cache import ContentCache

log = structlog.get_logger()

MARKDOWN_EXT = ".md"
USER_AGENT = f"quasar-docs-mcp/{__version__}"

_listing_adapter = TypeAdapter(list[DirectoryEntry])


# ---------------------------------------------------------------------------
# Tagged fetch results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FetchOk:
    content: str


@dataclass(frozen=True)
class FetchNotFound:
    pass


@dataclass(frozen=True)
class FetchUpstreamError:
    detail: str


FetchResult = FetchOk | FetchNotFound | FetchUpstreamError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def build_public_url(path: str, base_url: str = DocsSettings().public_base_url) -> str:
    """Map a docs file path to its quasar.dev URL.

    ``vue-components/btn.md`` -> ``https://quasar.dev/vue-components/btn``
    """
    clean = re.sub(r"\.md$", "", path)
    clean = re.sub(r"/index$", "", clean)
    return f"{base_url.rstrip('/')}/{clean}"


def build_http_client(settings: GitHubSettings | None = None) -> httpx.AsyncClient:
    """Create the shared async client. One per process, closed by the server lifespan."""
    settings = settings or GitHubSettings()
    headers = {"User-Agent": USER_AGENT}
    token = settings.resolved_token()
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return httpx.AsyncClient(
        headers=headers,
        timeout=httpx.Timeout(settings.timeout_seconds),
        follow_redirects=True,
    )


# ---------------------------------------------------------------------------
# Fetcher
# ---------------------------------------------------------------------------


class Fetcher:
    """Cached access to raw doc files and directory listings."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        cache: ContentCache,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or Settings()
        self._client = client
        self._cache = cache
        self._github = settings.github
        self._docs = settings.docs

    def build_public_url(self, path: str) -> str:
        return build_public_url(path, self._docs.public_base_url)

    async def fetch_file(self, path: str) -> str | None:
        """Return the raw file body, or ``None`` if it is missing or unreachable."""
        key = f"raw:{path}"
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        result = await self._get(f"{self._github.raw_base_url}/{path}")
        if isinstance(result, FetchOk):
            self._cache.set(key, result.content)
            return result.content
        return None

    async def fetch_directory(self, path: str = "") -> list[DirectoryEntry]:
        """Return the entries of a docs directory; empty on any failure."""
        key = f"dir:{path}"
        cached = self._cache.get(key)
        if cached is not None:
            return _listing_adapter.validate_json(cached)

        url = f"{self._github.api_base_url}/{path}" if path else self._github.api_base_url
        result = await self._get(url, headers={"Accept": "application/vnd.github.v3+json"})
        if not isinstance(result, FetchOk):
            return []

        entries = self._parse_listing(url, result.content)
        if isinstance(entries, FetchUpstreamError):
            return []

        self._cache.set(key, _listing_adapter.dump_json(entries).decode())
        return entries

    async def list_markdown_files(self) -> list[str]:
        """Depth-first crawl of the docs tree, returning every markdown file path."""
        files: list[str] = []

        async def crawl(dir_path: str) -> None:
            for entry in await self.fetch_directory(dir_path):
                if entry.type == "dir":
                    await crawl(entry.path)
                elif entry.name.endswith(MARKDOWN_EXT):
                    files.append(entry.path)

        await crawl("")
        return files

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _get(self, url: str, headers: dict[str, str] | None = None) -> FetchResult:
        try:
            response = await self._client.get(url, headers=headers)
        except httpx.HTTPError as exc:
            log.warning("fetch_upstream_error", url=url, error=str(exc))
            return FetchUpstreamError(str(exc))

        if response.status_code == 404:
            log.debug("fetch_not_found", url=url)
            return FetchNotFound()
        if not response.is_success:
            log.warning("fetch_upstream_error", url=url, status_code=response.status_code)
            return FetchUpstreamError(f"HTTP {response.status_code}")

        return FetchOk(response.text)

    def _parse_listing(self, url: str, body: str) -> list[DirectoryEntry] | FetchUpstreamError:
        try:
            raw = TypeAdapter(list[dict]).validate_json(body)
        except ValidationError as exc:
            log.warning("fetch_malformed_listing", url=url, error=str(exc))
            return FetchUpstreamError("malformed directory listing")

        prefix = self._github.api_path_prefix
        entries: list[DirectoryEntry] = []
        for item in raw:
            kind = item.get("type")
            name = item.get("name")
            item_path = item.get("path")
            # Symlinks and submodules are not part of the docs tree
            if kind not in ("file", "dir") or not name or not item_path:
                continue
            entries.append(
                DirectoryEntry(name=name, path=item_path.replace(prefix, "", 1), type=kind)
            )
        return entries
