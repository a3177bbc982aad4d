"""Application state container.

AppState is created once at server startup (inside the FastMCP lifespan context
manager) and injected into every tool handler via the MCP Context object.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from larapexdocs.catalog import CatalogIndex
    from larapexdocs.config import Settings
    from larapexdocs.pipeline import DocsPipeline


@dataclass
class AppState:
    """Holds all shared runtime state. Passed to every tool handler."""

    settings: Settings
    catalog: CatalogIndex
    pipeline: DocsPipeline
    http_client: httpx.AsyncClient | None = None
