from __future__ import annotations

from quasar_docs.models.cache import CacheEntry
from quasar_docs.models.index import DirectoryEntry, DocIndex, Page, SearchResult, Section
from quasar_docs.models.tools import (
    GetComponentInput,
    GetComponentOutput,
    GetPageInput,
    GetPageOutput,
    ListSectionsInput,
    ListSectionsOutput,
    PageSummary,
    ResponseFormat,
    SearchDocsInput,
    SearchDocsOutput,
    SectionNotFoundOutput,
    SectionPagesOutput,
    SectionSummary,
)

__all__ = [
    # index
    "DirectoryEntry",
    "Section",
    "Page",
    "DocIndex",
    "SearchResult",
    # cache
    "CacheEntry",
    # tools
    "ResponseFormat",
    "GetComponentInput",
    "GetComponentOutput",
    "GetPageInput",
    "GetPageOutput",
    "SearchDocsInput",
    "SearchDocsOutput",
    "SectionNotFoundOutput",
    "ListSectionsInput",
    "ListSectionsOutput",
    "SectionSummary",
    "SectionPagesOutput",
    "PageSummary",
]
