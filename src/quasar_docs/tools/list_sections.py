"""Tool handler for quasar_list_sections."""

from __future__ import annotations

from typing import TYPE_CHECKING

from quasar_docs.formatting import (
    render,
    section_not_found_markdown,
    section_pages_markdown,
    sections_markdown,
)
from quasar_docs.models.tools import (
    ListSectionsInput,
    ListSectionsOutput,
    PageSummary,
    SectionNotFoundOutput,
    SectionPagesOutput,
    SectionSummary,
)
from quasar_docs.search import filter_by_section

if TYPE_CHECKING:
    from quasar_docs.state import AppState


async def handle(args: ListSectionsInput, state: AppState) -> str:
    index = await state.index_cache.get_index()

    if not args.section:
        output = ListSectionsOutput(
            total=len(index.sections),
            sections=[
                SectionSummary(
                    name=s.name,
                    title=s.title,
                    path=s.path,
                    description=s.description,
                    page_count=index.page_count(s.name),
                )
                for s in index.sections
            ],
        )
        return render(output, args.response_format, sections_markdown)

    pages = filter_by_section(index, args.section)
    if not pages:
        missing = SectionNotFoundOutput(
            section=args.section,
            message=f"Section '{args.section}' not found.",
            available_sections=index.section_names(),
        )
        return render(missing, args.response_format, section_not_found_markdown)

    wanted = args.section.lower()
    exact = next((s for s in index.sections if s.name.lower() == wanted), None)
    output = SectionPagesOutput(
        section=exact.name if exact else args.section,
        title=exact.title if exact else args.section,
        count=len(pages),
        pages=[PageSummary(title=p.title, path=p.path, url=p.url) for p in pages],
    )
    return render(output, args.response_format, section_pages_markdown)
