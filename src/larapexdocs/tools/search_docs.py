"""Tool handler for search_docs.

Receives AppState, delegates to the catalog, and returns a structured dict.
No MCP or FastMCP imports; server.py handles the MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from larapexdocs.errors import DocsError, ErrorCode
from larapexdocs.models.tools import SearchDocsInput, SearchDocsOutput

if TYPE_CHECKING:
    from larapexdocs.state import AppState


async def handle(query: str | None, state: AppState) -> dict:
    """Handle a search_docs tool call."""
    log = structlog.get_logger().bind(tool="search_docs", query=query)
    log.info("handler_called")

    try:
        validated = SearchDocsInput(query=query)
    except ValueError as exc:
        raise DocsError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide a search term such as 'bar' or 'tooltips' (max 500 chars).",
            recoverable=False,
        ) from exc

    results = state.catalog.search(validated.query)
    log.info("search_complete", result_count=len(results))

    if results:
        message = f"Found {len(results)} matching pages"
    else:
        message = "No results found. Try a different search term."

    output = SearchDocsOutput(query=validated.query, results=results, message=message)
    return output.model_dump(mode="json")
