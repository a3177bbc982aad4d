"""Cache-backed fetch pipeline.

cache lookup → (miss) remote fetch → HTML extraction → best-effort cache
write. A cache hit never touches the network; a failed fetch never writes
to the cache.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from larapexdocs.config import DEFAULT_MAX_CONTENT_SIZE
from larapexdocs.extractor import extract_page

if TYPE_CHECKING:
    from larapexdocs.models.page import Page
    from larapexdocs.protocols import CacheProtocol, FetcherProtocol

log = structlog.get_logger()


def build_url(base_url: str, path: str) -> str:
    """Join the docs origin and a logical path with exactly one ``/``."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


class DocsPipeline:
    def __init__(
        self,
        cache: CacheProtocol,
        fetcher: FetcherProtocol,
        base_url: str,
        *,
        max_content_size: int = DEFAULT_MAX_CONTENT_SIZE,
        title_suffix: str = " - Larapex Charts",
    ) -> None:
        self.cache = cache
        self.fetcher = fetcher
        self.base_url = base_url
        self.max_content_size = max_content_size
        self.title_suffix = title_suffix

    def build_url(self, path: str) -> str:
        return build_url(self.base_url, path)

    async def get(self, path: str) -> Page:
        """Return the page at ``path``, from cache when fresh.

        Raises FetchError if the page is not cached and the remote fetch fails.
        """
        cached = await self.cache.get_page(path)
        if cached is not None:
            log.info("cache_hit", path=path)
            return cached

        url = self.build_url(path)
        log.info("cache_miss_fetching", path=path, url=url)
        html = await self.fetcher.fetch(url)

        page = extract_page(
            html,
            url,
            max_content_size=self.max_content_size,
            title_suffix=self.title_suffix,
        )

        # Non-fatal on failure, handled inside the cache
        await self.cache.set_page(path, page)
        return page
