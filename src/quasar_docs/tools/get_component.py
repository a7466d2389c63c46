"""Tool handler for quasar_get_component."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from quasar_docs.components import component_paths, normalize_component_name
from quasar_docs.errors import ErrorCode, QuasarDocsError
from quasar_docs.formatting import (
    CONTENT_TRUNCATION_MESSAGE,
    component_markdown,
    render,
    truncate_content,
)
from quasar_docs.models.tools import GetComponentInput, GetComponentOutput

if TYPE_CHECKING:
    from quasar_docs.state import AppState

log = structlog.get_logger()


async def handle(args: GetComponentInput, state: AppState) -> str:
    name = normalize_component_name(args.component)
    section = state.settings.docs.components_section

    found_path = None
    content = None
    for path in component_paths(name, section):
        content = await state.fetcher.fetch_file(path)
        if content:
            found_path = path
            break

    if not content or found_path is None:
        raise QuasarDocsError(
            code=ErrorCode.COMPONENT_NOT_FOUND,
            message=f"Component '{args.component}' not found.",
            suggestion=(
                "Try quasar_search_docs to find the correct component name, or "
                f"quasar_list_sections with section='{section}' to see all available components."
            ),
            recoverable=True,
        )

    body, truncated = truncate_content(content, state.settings.search.character_limit)
    log.debug("component_resolved", component=args.component, path=found_path)

    output = GetComponentOutput(
        component=args.component,
        normalized_name=name,
        path=found_path,
        url=state.fetcher.build_public_url(found_path),
        content=body,
        truncated=truncated,
        truncation_message=CONTENT_TRUNCATION_MESSAGE if truncated else None,
    )
    return render(output, args.response_format, component_markdown)
