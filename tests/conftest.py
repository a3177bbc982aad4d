"""Shared test fixtures for the larapexdocs test suite."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from larapexdocs.cache import FileCache
from larapexdocs.catalog import CatalogIndex
from larapexdocs.config import CacheSettings, Settings

if TYPE_CHECKING:
    from pathlib import Path

TTL_SECONDS = 3600

_SAMPLE_HTML = """\
<!doctype html>
<html>
  <head>
    <title>Line Chart - Larapex Charts</title>
    <style>.chart { color: red; }</style>
  </head>
  <body>
    <header><a href="/">Larapex Charts</a></header>
    <nav><ul><li>Installation</li><li>Bar Chart</li></ul></nav>
    <main>
      <h1>Line Chart</h1>
      <p>Create a line chart with
         a single call.</p>
      <script>alert(1)</script>
      <pre>LarapexChart::lineChart()</pre>
    </main>
    <footer>Released under the MIT License.</footer>
  </body>
</html>
"""


class FakeClock:
    """Settable wall clock returning epoch seconds."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "cache"


@pytest.fixture()
def cache(cache_dir: Path, clock: FakeClock) -> FileCache:
    """FileCache on a temporary directory with a controllable clock."""
    return FileCache(cache_dir, TTL_SECONDS, clock=clock)


@pytest.fixture()
def catalog() -> CatalogIndex:
    return CatalogIndex()


@pytest.fixture()
def settings(cache_dir: Path) -> Settings:
    return Settings(cache=CacheSettings(dir=str(cache_dir), ttl_seconds=TTL_SECONDS))


@pytest.fixture()
def sample_html() -> str:
    """A docs page with site chrome, a <main> region, and an inline script."""
    return _SAMPLE_HTML
