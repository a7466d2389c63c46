from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict


class DirectoryEntry(BaseModel):
    """Single item of a remote directory listing."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: str  # Relative to the docs root, e.g. "vue-components/btn.md"
    type: Literal["file", "dir"]


class Section(BaseModel):
    """Top-level grouping of pages, keyed by the first path segment."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: str
    title: str
    description: str


class Page(BaseModel):
    """One documentation file."""

    model_config = ConfigDict(frozen=True)

    path: str
    title: str
    section: str
    keywords: tuple[str, ...] = ()
    url: str


class DocIndex(BaseModel):
    """Immutable snapshot of every section and page seen in one crawl."""

    model_config = ConfigDict(frozen=True)

    version: str
    build_date: datetime
    sections: tuple[Section, ...]  # Sorted by name
    pages: tuple[Page, ...]  # Sorted by path

    def section_names(self) -> list[str]:
        return [s.name for s in self.sections]

    def page_count(self, section: str) -> int:
        return sum(1 for p in self.pages if p.section == section)


class SearchResult(BaseModel):
    title: str
    path: str
    section: str
    url: str
    snippet: str
    score: int
