"""Tool handler for quasar_search_docs: search, pagination and size budget.

Results are gathered for ``offset + limit + overfetch_margin`` so that the
content-search fallback decision and ``has_more`` do not depend on the page
being requested. The rendered response is then checked once against the
character budget; if it is over, the page is halved (never below one result)
and rendered again. There is no second shrink pass.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog

from quasar_docs.formatting import render, search_markdown, section_not_found_markdown
from quasar_docs.models.index import SearchResult
from quasar_docs.models.tools import (
    SearchDocsInput,
    SearchDocsOutput,
    SectionNotFoundOutput,
)
from quasar_docs.search import filter_by_section, merge_results, search_content, search_index

if TYPE_CHECKING:
    from quasar_docs.state import AppState

log = structlog.get_logger()


def build_page(
    args: SearchDocsInput,
    window: Sequence[SearchResult],
    total: int,
    **extra: object,
) -> SearchDocsOutput:
    end = args.offset + len(window)
    has_more = total > end
    return SearchDocsOutput(
        query=args.query,
        section=args.section,
        total=total,
        count=len(window),
        offset=args.offset,
        results=list(window),
        has_more=has_more,
        next_offset=end if has_more else None,
        **extra,
    )


def paginate(args: SearchDocsInput, results: Sequence[SearchResult]) -> SearchDocsOutput:
    window = results[args.offset : args.offset + args.limit]
    message = None
    if not results:
        message = f"No results found for '{args.query}'."
        if args.section:
            message += " Try removing the section filter or searching in a different section."
    elif not window:
        message = (
            f"No results at offset {args.offset}; "
            f"{len(results)} result(s) available for '{args.query}'."
        )
    return build_page(args, window, len(results), message=message)


def fit_to_budget(
    args: SearchDocsInput,
    output: SearchDocsOutput,
    character_limit: int,
) -> str:
    """Render ``output``; if over budget, halve the page once and render again."""
    text = render(output, args.response_format, search_markdown)
    if len(text) <= character_limit or not output.results:
        return text

    keep = max(1, output.count // 2)
    if keep < output.count:
        notice = (
            f"Response truncated from {output.count} to {keep} result(s) to fit the "
            f"{character_limit} character limit. Use offset or a smaller limit to page "
            "through the remaining results."
        )
    else:
        notice = (
            f"The single result exceeds the {character_limit} character limit "
            "and is returned as is."
        )
    reduced = build_page(
        args,
        output.results[:keep],
        output.total,
        truncated=True,
        truncation_message=notice,
        message=output.message,
    )
    log.info("search_response_truncated", original=output.count, kept=keep)
    return render(reduced, args.response_format, search_markdown)


async def handle(args: SearchDocsInput, state: AppState) -> str:
    settings = state.settings.search
    index = await state.index_cache.get_index()

    pages = list(index.pages)
    if args.section:
        pages = filter_by_section(index, args.section)
        if not pages:
            missing = SectionNotFoundOutput(
                section=args.section,
                message=f"No pages found in section '{args.section}'.",
                available_sections=index.section_names(),
            )
            return render(missing, args.response_format, section_not_found_markdown)

    wanted = args.offset + args.limit + settings.overfetch_margin
    results = search_index(pages, args.query, wanted)

    if args.include_content and len(results) < wanted:
        candidates = [p.path for p in pages[: settings.content_search_max_pages]]
        supplement = await search_content(
            state.fetcher, args.query, candidates, wanted - len(results)
        )
        results = merge_results(results, supplement)

    output = paginate(args, results)
    return fit_to_budget(args, output, settings.character_limit)
