"""Tool handler for get_component.

Resolves a bare page name (e.g. ``line-chart``) to its ``section/page`` path
through the catalog, then fetches it like get_page.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from larapexdocs.errors import DocsError, ErrorCode
from larapexdocs.models.tools import GetComponentInput

if TYPE_CHECKING:
    from larapexdocs.state import AppState


async def handle(component: str | None, state: AppState) -> dict:
    """Handle a get_component tool call."""
    log = structlog.get_logger().bind(tool="get_component", component=component)
    log.info("handler_called")

    try:
        validated = GetComponentInput(component=component)
    except ValueError as exc:
        raise DocsError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide a chart type or topic name such as 'line-chart' or 'installation'.",
            recoverable=False,
        ) from exc

    path = state.catalog.resolve(validated.component)
    if path is None:
        similar = state.catalog.suggest(validated.component)
        suggestion = "Call list_components to see every available page."
        if similar:
            suggestion = f"Did you mean: {', '.join(similar)}? " + suggestion
        raise DocsError(
            code=ErrorCode.COMPONENT_NOT_FOUND,
            message=(
                f"Component '{validated.component}' not found. "
                "Use list_components to see available pages."
            ),
            suggestion=suggestion,
            recoverable=False,
        )

    log.info("component_resolved", path=path)
    page = await state.pipeline.get(path)
    return page.model_dump(mode="json")
