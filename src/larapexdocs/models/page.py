from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Page(BaseModel):
    """A documentation page as returned to the agent."""

    model_config = ConfigDict(frozen=True)

    title: str  # May be empty when the page has neither <h1> nor <title>
    url: str  # Absolute source URL the page was fetched from
    content: str  # Cleaned plain text, capped at docs.max_content_size


class CacheRecord(Page):
    """On-disk form of a cached Page.

    Serialised with ``by_alias=True`` so the file carries ``cachedAt``
    (epoch milliseconds) next to the page fields.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    cached_at: int = Field(alias="cachedAt")

    def to_page(self) -> Page:
        return Page(title=self.title, url=self.url, content=self.content)
