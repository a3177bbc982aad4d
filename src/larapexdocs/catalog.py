"""Static catalog of known Larapex Charts documentation pages.

Pure business logic: listing, substring search, and bare-name resolution
over a fixed section → pages table. No knowledge of AppState, MCP, or I/O.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from types import MappingProxyType

from rapidfuzz import fuzz, process

KNOWN_SECTIONS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "getting-started": ("installation", "basic-usage", "configuration"),
        "chart-types": (
            "line-chart",
            "area-chart",
            "bar-chart",
            "horizontal-bar-chart",
            "pie-chart",
            "donut-chart",
            "radialbar-chart",
            "heatmap-chart",
            "scatter-chart",
            "polararea-chart",
        ),
        "customization": (
            "colors",
            "labels",
            "title-subtitle",
            "legends",
            "tooltips",
            "grid",
            "stroke",
            "markers",
            "animations",
        ),
        "advanced": (
            "multiple-series",
            "mixed-charts",
            "realtime-updates",
            "events",
            "formatters",
        ),
        "guides": (
            "blade-integration",
            "livewire-integration",
            "sparkline-charts",
        ),
    }
)


class CatalogIndex:
    """Read-only view over a section → pages table, in declaration order."""

    def __init__(self, sections: Mapping[str, Sequence[str]] = KNOWN_SECTIONS) -> None:
        self._sections: dict[str, tuple[str, ...]] = {
            section: tuple(pages) for section, pages in sections.items()
        }

    def list(self) -> dict[str, list[str]]:
        """Return a copy of the catalog, so callers cannot mutate it."""
        return {section: list(pages) for section, pages in self._sections.items()}

    @property
    def total(self) -> int:
        return sum(len(pages) for pages in self._sections.values())

    def search(self, query: str) -> list[str]:
        """Case-insensitive substring match against page or section names.

        Results follow catalog order, one ``section/page`` entry per page.
        """
        needle = query.lower()
        return [
            f"{section}/{page}"
            for section, pages in self._sections.items()
            for page in pages
            if needle in page.lower() or needle in section.lower()
        ]

    def resolve(self, name: str) -> str | None:
        """Map a bare page name to ``section/page``; first section wins."""
        wanted = name.lower()
        for section, pages in self._sections.items():
            for page in pages:
                if page.lower() == wanted:
                    return f"{section}/{page}"
        return None

    def suggest(self, name: str, limit: int = 3, score_cutoff: int = 60) -> list[str]:
        """Return page names that look like ``name``, best match first.

        Only used to make a "not found" error actionable; never affects
        ``resolve``.
        """
        names = list(dict.fromkeys(page for pages in self._sections.values() for page in pages))
        results = process.extract(
            name.lower(),
            names,
            scorer=fuzz.ratio,
            limit=limit,
            score_cutoff=score_cutoff,
        )
        return [term for term, _score, _idx in results]
