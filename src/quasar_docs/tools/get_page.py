"""Tool handler for quasar_get_page."""

from __future__ import annotations

from typing import TYPE_CHECKING

from quasar_docs.components import index_page_path, normalize_page_path
from quasar_docs.errors import ErrorCode, QuasarDocsError
from quasar_docs.formatting import (
    CONTENT_TRUNCATION_MESSAGE,
    page_markdown,
    render,
    truncate_content,
)
from quasar_docs.models.tools import GetPageInput, GetPageOutput

if TYPE_CHECKING:
    from quasar_docs.state import AppState


async def handle(args: GetPageInput, state: AppState) -> str:
    path = normalize_page_path(args.path)
    content = await state.fetcher.fetch_file(path)

    if not content:
        # Directory-style paths such as "start" live at "start/index.md"
        path = index_page_path(path)
        content = await state.fetcher.fetch_file(path)

    if not content:
        raise QuasarDocsError(
            code=ErrorCode.PAGE_NOT_FOUND,
            message=f"Page '{args.path}' not found.",
            suggestion=(
                "Use quasar_list_sections to see available sections or "
                "quasar_search_docs to search for specific topics."
            ),
            recoverable=True,
        )

    body, truncated = truncate_content(content, state.settings.search.character_limit)
    output = GetPageOutput(
        requested_path=args.path,
        resolved_path=path,
        url=state.fetcher.build_public_url(path),
        content=body,
        truncated=truncated,
        truncation_message=CONTENT_TRUNCATION_MESSAGE if truncated else None,
    )
    return render(output, args.response_format, page_markdown)
