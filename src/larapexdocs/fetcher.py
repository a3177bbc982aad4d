"""HTTP fetcher for the remote documentation site.

All network I/O goes through a single Fetcher instance shared across tool
calls. The Fetcher receives an httpx.AsyncClient via constructor injection;
the lifespan owns the client lifecycle.
"""

from __future__ import annotations

import asyncio
import random
from typing import TYPE_CHECKING
from urllib.parse import urljoin, urlparse

import httpx
import structlog

from larapexdocs import __version__
from larapexdocs.errors import ErrorCode, FetchError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from larapexdocs.config import FetcherSettings

log = structlog.get_logger()


def build_http_client(settings: FetcherSettings | None = None) -> httpx.AsyncClient:
    """Create the shared httpx client. Called once at startup."""
    timeout = settings.timeout_seconds if settings is not None else 30.0
    return httpx.AsyncClient(
        follow_redirects=False,
        timeout=httpx.Timeout(timeout),
        headers={"User-Agent": f"larapexdocs/{__version__}"},
        limits=httpx.Limits(
            max_connections=10,
            max_keepalive_connections=5,
        ),
    )


def _status_text(response: httpx.Response) -> str:
    return response.reason_phrase or f"HTTP {response.status_code}"


class Fetcher:
    """Fetches documentation HTML, following redirects only onto allowed hosts."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        *,
        max_attempts: int = 1,
        backoff_seconds: float = 0.5,
        max_redirects: int = 20,
        redirect_hosts: Iterable[str] = (),
    ) -> None:
        self._client = client
        self._host = (urlparse(base_url).hostname or "").lower()
        self._redirect_hosts = {self._host, *(host.lower() for host in redirect_hosts)}
        self._max_attempts = max(1, max_attempts)
        self._backoff_seconds = backoff_seconds
        self._max_redirects = max_redirects

    @classmethod
    def from_settings(
        cls, client: httpx.AsyncClient, base_url: str, settings: FetcherSettings
    ) -> Fetcher:
        return cls(
            client,
            base_url,
            max_attempts=settings.max_attempts,
            backoff_seconds=settings.backoff_seconds,
            max_redirects=settings.max_redirects,
            redirect_hosts=settings.redirect_hosts,
        )

    def is_same_host(self, url: str) -> bool:
        return (urlparse(url).hostname or "").lower() == self._host

    def is_allowed_redirect(self, url: str) -> bool:
        return (urlparse(url).hostname or "").lower() in self._redirect_hosts

    async def fetch(self, url: str) -> str:
        """Fetch ``url`` and return the response body as text.

        Raises FetchError on non-2xx responses, network errors, over-long
        redirect chains and redirects onto a host that is not allowed. Transport errors and 5xx responses
        are retried only when the fetcher was built with ``max_attempts > 1``.
        """
        attempt = 1
        while True:
            try:
                return await self._fetch_once(url)
            except FetchError as exc:
                if not exc.recoverable or attempt >= self._max_attempts:
                    raise
                delay = self._backoff_seconds * (2 ** (attempt - 1)) * random.uniform(0.8, 1.2)
                log.info("fetch_retry", url=url, attempt=attempt, delay_seconds=round(delay, 3))
                await asyncio.sleep(delay)
                attempt += 1

    async def _fetch_once(self, url: str) -> str:
        current_url = url
        try:
            for hop in range(self._max_redirects + 1):
                response = await self._client.get(current_url)

                if response.is_redirect and "location" in response.headers:
                    if hop == self._max_redirects:
                        raise FetchError(
                            url,
                            "too many redirects",
                            suggestion="The documentation URL has an unusually long redirect chain.",
                            recoverable=False,
                        )
                    current_url = urljoin(current_url, response.headers["location"])
                    if not self.is_allowed_redirect(current_url):
                        log.warning("redirect_blocked", url=url, location=current_url)
                        raise FetchError(
                            url,
                            f"redirect to {current_url} leaves the documentation site",
                            suggestion=(
                                "Add the host to fetcher.redirect_hosts if the "
                                "documentation has moved there."
                            ),
                            recoverable=False,
                        )
                    continue

                if not response.is_success:
                    if response.status_code == 404:
                        raise FetchError(
                            url,
                            _status_text(response),
                            code=ErrorCode.PAGE_NOT_FOUND,
                            suggestion=(
                                "The page does not exist. Use search_docs or "
                                "list_components to find a valid path."
                            ),
                            recoverable=False,
                        )
                    raise FetchError(
                        url,
                        _status_text(response),
                        recoverable=response.status_code >= 500,
                    )

                text = response.text
                log.info(
                    "fetch_complete",
                    url=url,
                    status_code=response.status_code,
                    content_length=len(text),
                )
                return text

        except FetchError:
            raise
        except httpx.HTTPError as exc:
            raise FetchError(url, f"network error: {exc}") from exc

        # Unreachable but satisfies the type checker
        raise FetchError(url, "redirect loop", recoverable=False)
