"""Lexical search over the documentation index.

Scoring is a plain additive sum per query term:

=====================================================  =====
criterion                                              score
=====================================================  =====
title equals term, or equals ``q-<term>``              +100
otherwise title contains term                          +50
path contains term                                     +30
a keyword equals term or ``q-<term>``                  +40
otherwise some keyword contains term                   +20
section name contains term                             +15
=====================================================  =====

Pages scoring zero are dropped. Ranking is by descending score using a stable
sort, so equal scores keep the index's path order.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from quasar_docs.indexer import file_stem, section_of
from quasar_docs.models.index import DocIndex, Page, SearchResult

if TYPE_CHECKING:
    from quasar_docs.fetcher import Fetcher

CONTENT_MATCH_SCORE = 10
SNIPPET_BEFORE = 50
SNIPPET_AFTER = 100

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")


def normalize_query(query: str) -> list[str]:
    """Lowercase, drop punctuation, split on whitespace, discard 1-char tokens."""
    cleaned = _DISALLOWED.sub("", query.lower())
    return [term for term in cleaned.split() if len(term) > 1]


def calculate_score(page: Page, terms: Iterable[str]) -> int:
    score = 0
    title = page.title.lower()
    path = page.path.lower()
    section = page.section.lower()

    for term in terms:
        prefixed = f"q-{term}"

        if title in (term, prefixed):
            score += 100
        elif term in title:
            score += 50

        if term in path:
            score += 30

        if any(k in (term, prefixed) for k in page.keywords):
            score += 40
        elif any(term in k for k in page.keywords):
            score += 20

        if term in section:
            score += 15

    return score


def search_index(pages: Sequence[Page], query: str, limit: int = 10) -> list[SearchResult]:
    """Rank ``pages`` against ``query``. An empty normalized query yields no results."""
    terms = normalize_query(query)
    if not terms:
        return []

    results = []
    for page in pages:
        score = calculate_score(page, terms)
        if score > 0:
            results.append(
                SearchResult(
                    title=page.title,
                    path=page.path,
                    section=page.section,
                    url=page.url,
                    snippet=f"Section: {page.section}",
                    score=score,
                )
            )

    results.sort(key=lambda r: r.score, reverse=True)
    return results[:limit]


def extract_snippet(content: str, position: int, term_length: int) -> str:
    start = max(0, position - SNIPPET_BEFORE)
    end = min(len(content), position + term_length + SNIPPET_AFTER)
    snippet = content[start:end].replace("\n", " ").strip()
    if start > 0:
        snippet = "..." + snippet
    if end < len(content):
        snippet = snippet + "..."
    return snippet


async def search_content(
    fetcher: Fetcher,
    query: str,
    paths: Sequence[str],
    limit: int = 5,
) -> list[SearchResult]:
    """Fetch each candidate page and score it by the query terms found in its body.

    One network round trip per uncached path: callers bound ``paths``.
    """
    terms = normalize_query(query)
    if not terms:
        return []

    results = []
    for path in paths:
        content = await fetcher.fetch_file(path)
        if not content:
            continue

        lowered = content.lower()
        score = 0
        snippet = ""
        for term in terms:
            position = lowered.find(term)
            if position == -1:
                continue
            score += CONTENT_MATCH_SCORE
            if not snippet:
                snippet = extract_snippet(content, position, len(term))

        if score > 0:
            results.append(
                SearchResult(
                    title=file_stem(path) or path,
                    path=path,
                    section=section_of(path),
                    url=fetcher.build_public_url(path),
                    snippet=snippet,
                    score=score,
                )
            )

    results.sort(key=lambda r: r.score, reverse=True)
    return results[:limit]


def merge_results(
    primary: Sequence[SearchResult], supplement: Iterable[SearchResult]
) -> list[SearchResult]:
    """Index results first; content results appended only for paths not yet seen."""
    merged = list(primary)
    seen = {r.path for r in merged}
    for result in supplement:
        if result.path not in seen:
            seen.add(result.path)
            merged.append(result)
    return merged


def filter_by_section(index: DocIndex, section: str) -> list[Page]:
    """Pages whose section equals or contains ``section`` (case-insensitive)."""
    needle = section.lower()
    return [p for p in index.pages if needle in p.section.lower()]
