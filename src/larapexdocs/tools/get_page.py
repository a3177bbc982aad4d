"""Tool handler for get_page.

Receives AppState, validates the path, and runs it through the fetch
pipeline (cache lookup / network fetch / extraction / cache write).
No MCP or FastMCP imports; server.py handles the MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from larapexdocs.errors import DocsError, ErrorCode
from larapexdocs.models.tools import GetPageInput

if TYPE_CHECKING:
    from larapexdocs.state import AppState


async def handle(path: str | None, state: AppState) -> dict:
    """Handle a get_page tool call."""
    log = structlog.get_logger().bind(tool="get_page", path=path)
    log.info("handler_called")

    try:
        validated = GetPageInput(path=path)
    except ValueError as exc:
        raise DocsError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion=(
                "Provide a documentation path such as 'chart-types/line-chart' "
                "or 'getting-started/installation'."
            ),
            recoverable=False,
        ) from exc

    page = await state.pipeline.get(validated.path)
    log.info("page_ready", title=page.title, content_length=len(page.content))
    return page.model_dump(mode="json")
