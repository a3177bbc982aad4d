"""Integration tests for MCP tool handlers.

Tests the full path through each handler: input validation → catalog /
pipeline → output serialisation. Uses a real AppState with a tmp cache dir.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest
import respx

from larapexdocs.errors import DocsError, ErrorCode
from larapexdocs.pipeline import DocsPipeline
from larapexdocs.tools.get_component import handle as get_component_handle
from larapexdocs.tools.get_page import handle as get_page_handle
from larapexdocs.tools.list_components import handle as list_components_handle
from larapexdocs.tools.search_docs import handle as search_handle

if TYPE_CHECKING:
    from conftest import MemoryCache, StaticFetcher

    from larapexdocs.state import AppState

BASE = "https://larapex-charts.netlify.app"
LINE_CHART_URL = f"{BASE}/chart-types/line-chart"


class TestSearchDocsHandler:
    async def test_matches(self, app_state: AppState) -> None:
        result = await search_handle("bar", app_state)
        assert result["query"] == "bar"
        assert "chart-types/bar-chart" in result["results"]
        assert result["message"] == "Found 3 matching pages"

    async def test_section_query(self, app_state: AppState) -> None:
        result = await search_handle("customization", app_state)
        assert len(result["results"]) == 9

    async def test_no_results_message(self, app_state: AppState) -> None:
        result = await search_handle("xyzzy", app_state)
        assert result["results"] == []
        assert result["message"] == "No results found. Try a different search term."

    async def test_empty_query_matches_every_page(self, app_state: AppState) -> None:
        result = await search_handle("", app_state)
        assert result["query"] == ""
        assert len(result["results"]) == 30
        assert result["message"] == "Found 30 matching pages"

    async def test_query_is_not_trimmed(self, app_state: AppState) -> None:
        result = await search_handle("bar ", app_state)
        assert result["query"] == "bar "
        assert result["results"] == []

    async def test_missing_query_raises_invalid_input(self, app_state: AppState) -> None:
        with pytest.raises(DocsError) as exc_info:
            await search_handle(None, app_state)
        assert exc_info.value.code == ErrorCode.INVALID_INPUT
        assert "query is required" in exc_info.value.message

    async def test_oversized_query_raises_invalid_input(self, app_state: AppState) -> None:
        with pytest.raises(DocsError) as exc_info:
            await search_handle("x" * 501, app_state)
        assert exc_info.value.code == ErrorCode.INVALID_INPUT


class TestListComponentsHandler:
    async def test_lists_catalog(self, app_state: AppState) -> None:
        result = await list_components_handle(app_state)
        assert result["total"] == 30
        assert list(result["categories"])[0] == "getting-started"
        assert "line-chart" in result["categories"]["chart-types"]


class TestGetPageHandler:
    @respx.mock
    async def test_cache_miss_fetches_and_returns(
        self, app_state: AppState, sample_html: str
    ) -> None:
        respx.get(LINE_CHART_URL).mock(return_value=httpx.Response(200, text=sample_html))

        result = await get_page_handle("chart-types/line-chart", app_state)

        assert set(result) == {"title", "url", "content"}
        assert result["title"] == "Line Chart"
        assert result["url"] == LINE_CHART_URL
        assert "alert(1)" not in result["content"]
        assert "MIT License" not in result["content"]

    @respx.mock
    async def test_second_call_served_from_cache(
        self, app_state: AppState, sample_html: str
    ) -> None:
        route = respx.get(LINE_CHART_URL).mock(
            return_value=httpx.Response(200, text=sample_html)
        )
        first = await get_page_handle("chart-types/line-chart", app_state)
        second = await get_page_handle("chart-types/line-chart", app_state)
        assert first == second
        assert route.call_count == 1

    @respx.mock
    async def test_missing_page_raises_fetch_error(self, app_state: AppState) -> None:
        respx.get(f"{BASE}/chart-types/nope").mock(return_value=httpx.Response(404))
        with pytest.raises(DocsError) as exc_info:
            await get_page_handle("chart-types/nope", app_state)
        assert exc_info.value.code == ErrorCode.PAGE_NOT_FOUND
        assert f"{BASE}/chart-types/nope" in exc_info.value.message

    @respx.mock
    async def test_network_error_is_recoverable(self, app_state: AppState) -> None:
        respx.get(LINE_CHART_URL).mock(side_effect=httpx.ConnectError("refused"))
        with pytest.raises(DocsError) as exc_info:
            await get_page_handle("chart-types/line-chart", app_state)
        assert exc_info.value.code == ErrorCode.PAGE_FETCH_FAILED
        assert exc_info.value.recoverable is True

    async def test_path_is_passed_through_untrimmed(
        self, app_state: AppState, memory_cache: MemoryCache, static_fetcher: StaticFetcher
    ) -> None:
        app_state.pipeline = DocsPipeline(memory_cache, static_fetcher, BASE)
        result = await get_page_handle(" chart-types/line-chart ", app_state)
        assert memory_cache.reads == [" chart-types/line-chart "]
        assert static_fetcher.urls == [f"{BASE}/ chart-types/line-chart "]
        assert result["url"] == f"{BASE}/ chart-types/line-chart "

    async def test_missing_path_raises_invalid_input(self, app_state: AppState) -> None:
        with pytest.raises(DocsError) as exc_info:
            await get_page_handle(None, app_state)
        assert exc_info.value.code == ErrorCode.INVALID_INPUT
        assert exc_info.value.recoverable is False


class TestGetComponentHandler:
    @respx.mock
    async def test_resolves_and_fetches(self, app_state: AppState, sample_html: str) -> None:
        route = respx.get(LINE_CHART_URL).mock(
            return_value=httpx.Response(200, text=sample_html)
        )
        result = await get_component_handle("Line-Chart", app_state)
        assert result["url"] == LINE_CHART_URL
        assert result["title"] == "Line Chart"
        assert route.call_count == 1

    async def test_unknown_component(self, app_state: AppState) -> None:
        with pytest.raises(DocsError) as exc_info:
            await get_component_handle("not-a-real-page", app_state)
        exc = exc_info.value
        assert exc.code == ErrorCode.COMPONENT_NOT_FOUND
        assert exc.message == (
            "Component 'not-a-real-page' not found. Use list_components to see available pages."
        )
        assert exc.recoverable is False

    async def test_unknown_component_suggests_close_names(self, app_state: AppState) -> None:
        with pytest.raises(DocsError) as exc_info:
            await get_component_handle("line-chrt", app_state)
        assert "Did you mean: line-chart" in exc_info.value.suggestion

    async def test_empty_component_is_not_found(self, app_state: AppState) -> None:
        with pytest.raises(DocsError) as exc_info:
            await get_component_handle("", app_state)
        assert exc_info.value.code == ErrorCode.COMPONENT_NOT_FOUND

    async def test_missing_component_raises_invalid_input(self, app_state: AppState) -> None:
        with pytest.raises(DocsError) as exc_info:
            await get_component_handle(None, app_state)
        assert exc_info.value.code == ErrorCode.INVALID_INPUT
