"""Protocol interfaces for swappable components.

The pipeline and AppState reference these protocols, not the concrete
implementations. This allows:
- Tests to use lightweight in-memory implementations
- Other storage backends to be swapped in without changing tool code
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from larapexdocs.models.page import Page


class CacheProtocol(Protocol):
    """Interface for the page cache backend."""

    async def get_page(self, path: str) -> Page | None: ...

    async def set_page(self, path: str, page: Page) -> bool: ...


class FetcherProtocol(Protocol):
    """Interface for the HTTP documentation fetcher."""

    async def fetch(self, url: str) -> str: ...
