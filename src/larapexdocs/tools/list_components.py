"""Tool handler for list_components."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from larapexdocs.models.tools import ListComponentsOutput

if TYPE_CHECKING:
    from larapexdocs.state import AppState


async def handle(state: AppState) -> dict:
    """Handle a list_components tool call."""
    log = structlog.get_logger().bind(tool="list_components")
    log.info("handler_called")

    output = ListComponentsOutput(
        categories=state.catalog.list(),
        total=state.catalog.total,
    )
    return output.model_dump(mode="json")
