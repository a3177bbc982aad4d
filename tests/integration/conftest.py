"""Integration test fixtures.

Provides a fully wired AppState (file cache in a tmp directory, real
httpx client mocked with respx in the tests) plus in-memory stand-ins for
the cache and fetcher protocols.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import httpx
import pytest

from larapexdocs.server import build_state

if TYPE_CHECKING:
    from pathlib import Path

    from larapexdocs.config import Settings
    from larapexdocs.models.page import Page
    from larapexdocs.state import AppState


class MemoryCache:
    """In-memory CacheProtocol that records every call."""

    def __init__(self, *, fail_writes: bool = False) -> None:
        self.pages: dict[str, Page] = {}
        self.reads: list[str] = []
        self.writes: list[str] = []
        self.fail_writes = fail_writes

    async def get_page(self, path: str) -> Page | None:
        self.reads.append(path)
        return self.pages.get(path)

    async def set_page(self, path: str, page: Page) -> bool:
        self.writes.append(path)
        if self.fail_writes:
            return False
        self.pages[path] = page
        return True


class StaticFetcher:
    """FetcherProtocol returning canned HTML and counting requests."""

    def __init__(self, html: str) -> None:
        self.html = html
        self.urls: list[str] = []

    async def fetch(self, url: str) -> str:
        self.urls.append(url)
        return self.html


@pytest.fixture()
def memory_cache() -> MemoryCache:
    return MemoryCache()


@pytest.fixture()
def failing_cache() -> MemoryCache:
    return MemoryCache(fail_writes=True)


@pytest.fixture()
def static_fetcher(sample_html: str) -> StaticFetcher:
    return StaticFetcher(sample_html)


@pytest.fixture()
async def app_state(settings: Settings) -> AppState:
    """AppState wired the same way the server lifespan wires it."""
    async with httpx.AsyncClient() as client:
        yield build_state(settings, client)


@pytest.fixture()
def subprocess_env(tmp_path: Path) -> dict[str, str]:
    """Env for stdio subprocess tests: isolated cache, unreachable docs origin."""
    env = os.environ.copy()
    env["LARAPEXDOCS__CACHE__DIR"] = str(tmp_path / "cache")
    env["LARAPEXDOCS__DOCS__BASE_URL"] = "http://127.0.0.1:1"
    env["LARAPEXDOCS__LOGGING__LEVEL"] = "WARNING"
    return env
