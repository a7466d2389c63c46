"""Builds the in-memory documentation index from the remote docs tree.

Two modes share one crawl:

* lightweight: titles and keywords are derived from file names only, so the
  only network traffic is the directory crawl. This is what the index cache uses.
* full: every page is fetched and its frontmatter/headings/body are mined for
  a better title and richer keywords. A failed fetch degrades that page to the
  file-name defaults; it never aborts the build.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from quasar_docs.cache import Clock, utc_now
from quasar_docs.fetcher import MARKDOWN_EXT
from quasar_docs.models.index import DocIndex, Page, Section

if TYPE_CHECKING:
    from quasar_docs.fetcher import Fetcher

log = structlog.get_logger()

INDEX_VERSION = "1.0.0"


@dataclass(frozen=True)
class SectionDefinition:
    title: str
    description: str


SECTION_DEFINITIONS: dict[str, SectionDefinition] = {
    "vue-components": SectionDefinition(
        "Vue Components", "Quasar UI components like buttons, inputs, dialogs, etc."
    ),
    "vue-directives": SectionDefinition(
        "Vue Directives", "Custom Vue directives for DOM manipulation"
    ),
    "vue-composables": SectionDefinition(
        "Vue Composables", "Composition API utilities and hooks"
    ),
    "quasar-plugins": SectionDefinition(
        "Quasar Plugins", "Plugins for notifications, dialogs, loading states, etc."
    ),
    "quasar-utils": SectionDefinition("Quasar Utils", "Utility functions for common tasks"),
    "layout": SectionDefinition("Layout", "Layout components and page structure"),
    "style": SectionDefinition("Style", "CSS classes, typography, colors, and theming"),
    "options": SectionDefinition("Options", "Configuration options and settings"),
    "quasar-cli-vite": SectionDefinition("Quasar CLI (Vite)", "Vite-based CLI documentation"),
    "quasar-cli-webpack": SectionDefinition(
        "Quasar CLI (Webpack)", "Webpack-based CLI documentation"
    ),
    "start": SectionDefinition("Getting Started", "Installation and setup guides"),
    "introduction-to-quasar": SectionDefinition("Introduction", "Overview of Quasar Framework"),
    "app-extensions": SectionDefinition(
        "App Extensions", "Creating and using Quasar app extensions"
    ),
    "security": SectionDefinition("Security", "Security best practices"),
}

_FRONTMATTER_TITLE = re.compile(r"^---\s*\n[\s\S]*?title:\s*['\"]?([^'\"\n]+)['\"]?", re.M)
_FIRST_HEADING = re.compile(r"^#\s+(.+)$", re.M)
_COMPONENT_STEM = re.compile(r"([a-z-]+)\.md$")
_FRONTMATTER_KEYWORDS = re.compile(r"keywords:\s*\[([^\]]+)\]")
_STRUCTURAL_TERMS = re.compile(r"\b(api|props?|events?|slots?|methods?|examples?)\b")


def humanize_slug(slug: str) -> str:
    """``color-palette`` -> ``Color Palette``. Only first letters are touched."""
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), slug.replace("-", " "))


def file_stem(path: str) -> str:
    return path.split("/")[-1].replace(MARKDOWN_EXT, "")


def section_of(path: str) -> str:
    return path.split("/")[0]


def make_section(name: str) -> Section:
    definition = SECTION_DEFINITIONS.get(name) or SectionDefinition(
        humanize_slug(name), f"Documentation for {name}"
    )
    return Section(
        name=name, path=name, title=definition.title, description=definition.description
    )


def extract_title(content: str) -> str:
    """Frontmatter ``title:``, else the first ``#`` heading, else empty string."""
    match = _FRONTMATTER_TITLE.search(content)
    if match:
        return match.group(1).strip()

    match = _FIRST_HEADING.search(content)
    if match:
        return match.group(1).strip()

    return ""


def extract_keywords(content: str, path: str) -> list[str]:
    keywords: list[str] = [part.replace(MARKDOWN_EXT, "").lower() for part in path.split("/")]

    match = _COMPONENT_STEM.search(path)
    if match:
        name = match.group(1)
        keywords += [name, f"q-{name}"]

    match = _FRONTMATTER_KEYWORDS.search(content)
    if match:
        keywords += [
            re.sub(r"['\"]", "", k.strip()).lower() for k in match.group(1).split(",")
        ]

    keywords += _STRUCTURAL_TERMS.findall(content.lower())

    return list(dict.fromkeys(keywords))


def _lightweight_page(path: str, fetcher: Fetcher) -> Page:
    stem = file_stem(path)
    section = section_of(path)
    return Page(
        path=path,
        title=humanize_slug(stem),
        section=section,
        keywords=(stem, f"q-{stem}", section),
        url=fetcher.build_public_url(path),
    )


async def _full_page(path: str, fetcher: Fetcher) -> Page:
    content = await fetcher.fetch_file(path)
    if content is None:
        log.debug("index_page_fetch_failed", path=path)
    title = extract_title(content) if content else ""
    keywords = extract_keywords(content, path) if content else []
    return Page(
        path=path,
        title=title or file_stem(path),
        section=section_of(path),
        keywords=tuple(keywords),
        url=fetcher.build_public_url(path),
    )


async def build_index(
    fetcher: Fetcher,
    *,
    lightweight: bool = True,
    clock: Clock = utc_now,
) -> DocIndex:
    """Crawl the docs tree and return a fresh, fully built index."""
    files = await fetcher.list_markdown_files()

    sections: dict[str, Section] = {}
    pages: list[Page] = []
    for path in files:
        name = section_of(path)
        if name not in sections:
            sections[name] = make_section(name)

        if lightweight:
            pages.append(_lightweight_page(path, fetcher))
        else:
            pages.append(await _full_page(path, fetcher))

    index = DocIndex(
        version=INDEX_VERSION,
        build_date=clock(),
        sections=tuple(sorted(sections.values(), key=lambda s: s.name)),
        pages=tuple(sorted(pages, key=lambda p: p.path)),
    )
    log.info(
        "index_build_complete",
        mode="lightweight" if lightweight else "full",
        sections=len(index.sections),
        pages=len(index.pages),
    )
    return index
