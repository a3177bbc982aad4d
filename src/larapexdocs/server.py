"""MCP server entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Create AppState via the FastMCP lifespan context manager
- Register tools
- Start the stdio transport
"""

from __future__ import annotations

import json
import logging
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult, TextContent

import larapexdocs.tools.get_component as t_get_component
import larapexdocs.tools.get_page as t_get_page
import larapexdocs.tools.list_components as t_list_components
import larapexdocs.tools.search_docs as t_search_docs
from larapexdocs import __version__
from larapexdocs.cache import FileCache
from larapexdocs.catalog import CatalogIndex
from larapexdocs.config import Settings
from larapexdocs.errors import DocsError
from larapexdocs.fetcher import Fetcher, build_http_client
from larapexdocs.pipeline import DocsPipeline
from larapexdocs.state import AppState

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable

    import httpx

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Logs go to stderr; stdout is reserved for the MCP JSON-RPC stream
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


def build_state(settings: Settings, http_client: httpx.AsyncClient) -> AppState:
    """Wire catalog, cache, fetcher, and pipeline around a shared HTTP client."""
    cache = FileCache(settings.cache.dir, settings.cache.ttl_seconds)
    fetcher = Fetcher.from_settings(http_client, settings.docs.base_url, settings.fetcher)
    pipeline = DocsPipeline(
        cache,
        fetcher,
        settings.docs.base_url,
        max_content_size=settings.docs.max_content_size,
        title_suffix=settings.docs.title_suffix,
    )
    return AppState(
        settings=settings,
        catalog=CatalogIndex(),
        pipeline=pipeline,
        http_client=http_client,
    )


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncGenerator[AppState, None]:
    """Create and tear down all shared resources for the server's lifetime."""
    settings = Settings()
    _setup_logging(settings)

    log.info("server_starting", version=__version__, base_url=settings.docs.base_url)

    http_client = build_http_client(settings.fetcher)
    state = build_state(settings, http_client)

    log.info(
        "server_started",
        version=__version__,
        catalog_pages=state.catalog.total,
        cache_dir=settings.cache.dir,
        cache_enabled=settings.cache.enabled,
    )

    try:
        yield state
    finally:
        await http_client.aclose()
        log.info("server_stopping")


# ---------------------------------------------------------------------------
# FastMCP instance and tool registration
# ---------------------------------------------------------------------------

mcp = FastMCP("larapexdocs", lifespan=lifespan)
# FastMCP doesn't expose a version kwarg, so set it on the underlying Server
# so the MCP initialize handshake reports our version, not the SDK's.
mcp._mcp_server.version = __version__  # pyright: ignore[reportPrivateUsage]


def _serialise_tool_error(error: DocsError) -> CallToolResult:
    """Convert a DocsError to the MCP tool error result envelope."""
    return CallToolResult(
        content=[TextContent(type="text", text=json.dumps(error.to_dict(), indent=2))],
        isError=True,
    )


async def _run_tool(tool: str, call: Awaitable[dict]) -> object:
    try:
        return await call
    except DocsError as exc:
        log.warning(
            "tool_error",
            tool=tool,
            code=exc.code,
            message=exc.message,
            recoverable=exc.recoverable,
        )
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool=tool, exc_info=True)
        raise


# Required arguments default to None so a missing argument reaches input
# validation and comes back as a structured INVALID_INPUT error.


@mcp.tool()
async def search_docs(ctx: Context, query: str | None = None) -> object:
    """Search Larapex Charts documentation for chart types or topics.

    Returns a list of matching documentation page paths.
    """
    state: AppState = ctx.request_context.lifespan_context
    return await _run_tool("search_docs", t_search_docs.handle(query, state))


@mcp.tool()
async def get_page(ctx: Context, path: str | None = None) -> object:
    """Get the content of a specific Larapex Charts documentation page.

    Provide the path like 'chart-types/line-chart' or 'getting-started/installation'.
    """
    state: AppState = ctx.request_context.lifespan_context
    return await _run_tool("get_page", t_get_page.handle(path, state))


@mcp.tool()
async def list_components(ctx: Context) -> object:
    """List all available Larapex Charts documentation pages by category.

    Categories include Getting Started, Chart Types, Customization, Advanced and Guides.
    """
    state: AppState = ctx.request_context.lifespan_context
    return await _run_tool("list_components", t_list_components.handle(state))


@mcp.tool()
async def get_component(ctx: Context, component: str | None = None) -> object:
    """Get documentation for a specific chart type or topic.

    Automatically finds the page in the correct section, e.g. 'line-chart',
    'pie-chart' or 'installation'.
    """
    state: AppState = ctx.request_context.lifespan_context
    return await _run_tool("get_component", t_get_component.handle(component, state))


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
