"""Rendering of tool outputs as markdown prose or JSON.

Both encodings are derived from the same pydantic output model, so the prose
form never carries information the structured form lacks.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from pydantic import BaseModel

from quasar_docs.models.tools import (
    GetComponentOutput,
    GetPageOutput,
    ListSectionsOutput,
    ResponseFormat,
    SearchDocsOutput,
    SectionNotFoundOutput,
    SectionPagesOutput,
)

CONTENT_TRUNCATION_MESSAGE = (
    "Content was truncated due to size limits. "
    "Use quasar_search_docs to find specific sections."
)

M = TypeVar("M", bound=BaseModel)


def truncate_content(content: str, limit: int) -> tuple[str, bool]:
    """Cut ``content`` to ``limit`` characters, preferring a line boundary.

    The cut backs up to the last newline only when that newline sits in the
    final fifth of the window; otherwise the hard cut is kept.
    """
    if len(content) <= limit:
        return content, False

    clipped = content[:limit]
    last_newline = clipped.rfind("\n")
    if last_newline > limit * 0.8:
        clipped = clipped[:last_newline]

    notice = (
        "\n\n---\n[Content truncated due to size. "
        "Use quasar_search_docs to find specific sections.]"
    )
    return clipped + notice, True


def render(model: M, response_format: ResponseFormat, markdown: Callable[[M], str]) -> str:
    if response_format == ResponseFormat.JSON:
        return model.model_dump_json(indent=2, exclude_none=True)
    return markdown(model)


# ---------------------------------------------------------------------------
# Markdown renderers
# ---------------------------------------------------------------------------


def component_markdown(out: GetComponentOutput) -> str:
    return f"# Documentation for {out.component}\n\nURL: {out.url}\n\n---\n\n{out.content}"


def page_markdown(out: GetPageOutput) -> str:
    return f"# Documentation: {out.requested_path}\n\nURL: {out.url}\n\n---\n\n{out.content}"


def section_not_found_markdown(out: SectionNotFoundOutput) -> str:
    return f"{out.message} Available sections: {', '.join(out.available_sections)}"


def search_markdown(out: SearchDocsOutput) -> str:
    if not out.results:
        return out.message or f"No results found for '{out.query}'."

    lines = []
    for position, r in enumerate(out.results, start=out.offset + 1):
        entry = (
            f"{position}. **{r.title}**\n"
            f"   Section: {r.section}\n"
            f"   Path: {r.path}\n"
            f"   URL: {r.url}"
        )
        if r.snippet and r.snippet != f"Section: {r.section}":
            entry += f"\n   Snippet: {r.snippet}"
        lines.append(entry)

    first, last = out.offset + 1, out.offset + out.count
    text = f"Found {out.total} result(s) for '{out.query}' (showing {first}-{last}):\n\n"
    text += "\n\n".join(lines)
    if out.has_more:
        text += f"\n\nMore results available. Use offset={out.next_offset} to see the next page."
    if out.truncated:
        text += f"\n\n[{out.truncation_message}]"
    return text


def sections_markdown(out: ListSectionsOutput) -> str:
    blocks = [
        f"### {s.title}\n- Path: `{s.path}`\n- {s.description}\n- Pages: {s.page_count}"
        for s in out.sections
    ]
    return (
        "# Quasar Documentation Sections\n\n"
        f"{out.total} section(s) available:\n\n"
        + "\n\n".join(blocks)
        + "\n\nUse `quasar_list_sections` with a section name to see pages within that section."
    )


def section_pages_markdown(out: SectionPagesOutput) -> str:
    page_list = "\n".join(f"- **{p.title}** ({p.path})" for p in out.pages)
    return f"## {out.title}\n\n{out.count} page(s):\n\n{page_list}"
