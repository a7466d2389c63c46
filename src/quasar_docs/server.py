"""MCP server entry point.

Registers the four documentation tools on a FastMCP server and runs it over
stdio (default) or streamable HTTP. Domain errors are returned as tool results
with ``isError`` set and a JSON body ``{"error": {...}}``; they never crash the
process. Only startup failures (bad configuration) exit non-zero.
"""

from __future__ import annotations

import json
import sys
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any, TypeVar

import structlog
from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult, TextContent, ToolAnnotations
from pydantic import BaseModel, ValidationError

from quasar_docs import __version__
from quasar_docs.config import Settings
from quasar_docs.errors import ErrorCode, QuasarDocsError
from quasar_docs.logging_config import setup_logging
from quasar_docs.models.tools import (
    GetComponentInput,
    GetPageInput,
    ListSectionsInput,
    SearchDocsInput,
)
from quasar_docs.state import AppState
from quasar_docs.tools import get_component, get_page, list_sections, search_docs

log = structlog.get_logger()

InputT = TypeVar("InputT", bound=BaseModel)

_READ_ONLY = ToolAnnotations(
    readOnlyHint=True,
    destructiveHint=False,
    idempotentHint=True,
    openWorldHint=True,
)


# ---------------------------------------------------------------------------
# Error envelope
# ---------------------------------------------------------------------------


def _error_result(error: QuasarDocsError) -> CallToolResult:
    return CallToolResult(
        content=[TextContent(type="text", text=json.dumps(error.to_payload()))],
        isError=True,
    )


def _validation_message(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(loc) for loc in err["loc"])
        message = err["msg"].removeprefix("Value error, ")
        parts.append(f"{field}: {message}" if field else message)
    return "; ".join(parts)


async def _call(
    ctx: Context,
    tool: str,
    model: type[InputT],
    handler: Callable[[InputT, AppState], Awaitable[str]],
    **arguments: Any,
) -> CallToolResult:
    state: AppState = ctx.request_context.lifespan_context

    try:
        args = model(**arguments)
    except ValidationError as exc:
        log.info("tool_invalid_input", tool=tool, errors=exc.error_count())
        return _error_result(
            QuasarDocsError(
                code=ErrorCode.INVALID_INPUT,
                message=_validation_message(exc),
                suggestion="Check the tool's input constraints and try again.",
                recoverable=False,
            )
        )

    try:
        text = await handler(args, state)
    except QuasarDocsError as exc:
        log.info("tool_error", tool=tool, code=exc.code.value)
        return _error_result(exc)
    except Exception:
        log.error("tool_unexpected_error", tool=tool, exc_info=True)
        return _error_result(
            QuasarDocsError(
                code=ErrorCode.INTERNAL_ERROR,
                message=f"Unexpected error while running {tool}.",
                suggestion="Retry the request; if it keeps failing, check the server logs.",
                recoverable=True,
            )
        )

    return CallToolResult(content=[TextContent(type="text", text=text)])


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------

# Arguments are left untyped so that every value reaches the pydantic input
# model; FastMCP must not reject them before the INVALID_INPUT envelope is built.


async def quasar_get_component(
    ctx: Context,
    component: Any = None,
    response_format: Any = "markdown",
) -> CallToolResult:
    """Get documentation for a specific Quasar UI component.

    Returns the full markdown documentation including API reference, props,
    events, slots, methods and usage examples.

    Args:
        component: Component name (required). Accepts 'q-btn', 'btn', or common aliases
            such as 'button' -> 'btn', 'modal' -> 'dialog', 'dropdown' -> 'select'.
        response_format: 'markdown' (default) or 'json'.
    """
    return await _call(
        ctx,
        "quasar_get_component",
        GetComponentInput,
        get_component.handle,
        component=component,
        response_format=response_format,
    )


async def quasar_get_page(
    ctx: Context,
    path: Any = None,
    response_format: Any = "markdown",
) -> CallToolResult:
    """Get any Quasar documentation page by its path.

    Use this for non-component documentation such as style guides, plugins,
    CLI docs and getting started guides. Directory paths fall back to their
    index page.

    Args:
        path: Page path (required), e.g. 'style/color-palette', 'quasar-plugins/notify',
            'quasar-cli-vite/quasar-config-file'.
        response_format: 'markdown' (default) or 'json'.
    """
    return await _call(
        ctx,
        "quasar_get_page",
        GetPageInput,
        get_page.handle,
        path=path,
        response_format=response_format,
    )


async def quasar_search_docs(
    ctx: Context,
    query: Any = None,
    section: Any = None,
    limit: Any = 10,
    offset: Any = 0,
    include_content: Any = False,
    response_format: Any = "markdown",
) -> CallToolResult:
    """Search the Quasar documentation by keyword.

    Results are ranked by title, path, keyword and section matches and are
    paginated: when more results exist the response carries `has_more` and
    `next_offset`.

    Args:
        query: Search query (required), e.g. 'button', 'form validation', 'dark mode'.
        section: Restrict the search to a section, e.g. 'vue-components', 'style'.
        limit: Maximum results to return (1-50, default 10).
        offset: Number of results to skip, for pagination (default 0).
        include_content: Also search inside page bodies (slower, more thorough).
        response_format: 'markdown' (default) or 'json'.
    """
    return await _call(
        ctx,
        "quasar_search_docs",
        SearchDocsInput,
        search_docs.handle,
        query=query,
        section=section,
        limit=limit,
        offset=offset,
        include_content=include_content,
        response_format=response_format,
    )


async def quasar_list_sections(
    ctx: Context,
    section: Any = None,
    response_format: Any = "markdown",
) -> CallToolResult:
    """List the Quasar documentation sections, or the pages within one section.

    Args:
        section: Optional section name, e.g. 'vue-components', to list its pages.
        response_format: 'markdown' (default) or 'json'.
    """
    return await _call(
        ctx,
        "quasar_list_sections",
        ListSectionsInput,
        list_sections.handle,
        section=section,
        response_format=response_format,
    )


# ---------------------------------------------------------------------------
# Server wiring
# ---------------------------------------------------------------------------


def create_server(settings: Settings) -> FastMCP:
    @asynccontextmanager
    async def lifespan(_server: FastMCP) -> AsyncIterator[AppState]:
        state = AppState.create(settings)
        log.info("server_started", version=__version__, transport=settings.server.transport)
        try:
            yield state
        finally:
            await state.http_client.aclose()
            log.info("server_stopped")

    mcp = FastMCP(
        "quasar-docs-mcp",
        lifespan=lifespan,
        host=settings.server.host,
        port=settings.server.port,
    )
    for fn, title in (
        (quasar_get_component, "Get Quasar Component"),
        (quasar_get_page, "Get Quasar Page"),
        (quasar_search_docs, "Search Quasar Docs"),
        (quasar_list_sections, "List Quasar Sections"),
    ):
        mcp.add_tool(fn, title=title, annotations=_READ_ONLY, structured_output=False)
    return mcp


def main() -> None:
    settings = Settings()
    setup_logging(settings.logging)

    mcp = create_server(settings)
    try:
        if settings.server.transport == "http":
            mcp.run(transport="streamable-http")
        else:
            mcp.run(transport="stdio")
    except KeyboardInterrupt:
        pass
    except Exception:
        log.critical("server_fatal_error", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
