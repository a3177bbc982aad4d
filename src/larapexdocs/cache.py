"""JSON-file page cache with time-based expiry.

One file per logical path: ``<cache_dir>/<md5(path)>.json``. All cache
operations degrade gracefully: read failures return ``None`` (treated as a
cache miss by callers), write failures are logged and ignored (the fetched
page is still returned). Infrastructure errors never cross the FileCache
class boundary.

Stale records are not deleted. They are ignored on read and overwritten by
the next write for the same path.
"""

from __future__ import annotations

import asyncio
import hashlib
import os
import tempfile
import time
from contextlib import suppress
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from larapexdocs.models.page import CacheRecord, Page

if TYPE_CHECKING:
    from collections.abc import Callable

log = structlog.get_logger()

CACHE_FILE_SUFFIX = ".json"


def cache_key(path: str) -> str:
    """Return the storage key for a logical documentation path.

    MD5 is used for filename derivation only, not for security.
    """
    return hashlib.md5(path.encode("utf-8", "surrogatepass"), usedforsecurity=False).hexdigest()


class FileCache:
    """Filesystem-backed page cache implementing CacheProtocol."""

    def __init__(
        self,
        cache_dir: str | Path,
        ttl_seconds: int,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._dir = Path(cache_dir)
        self._ttl_ms = ttl_seconds * 1000
        self._clock = clock

    @property
    def enabled(self) -> bool:
        return self._ttl_ms > 0

    @property
    def cache_dir(self) -> Path:
        return self._dir

    def path_for(self, path: str) -> Path:
        return self._dir / f"{cache_key(path)}{CACHE_FILE_SUFFIX}"

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    async def get_page(self, path: str) -> Page | None:
        """Read a cached page. Returns ``None`` on miss, staleness, or read failure."""
        if not self.enabled:
            return None

        file_path = self.path_for(path)
        try:
            raw = await asyncio.to_thread(file_path.read_text, encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError):
            log.warning("cache_read_error", key=file_path.stem, path=path, exc_info=True)
            return None

        try:
            record = CacheRecord.model_validate_json(raw)
        except ValidationError:
            log.warning("cache_record_corrupt", key=file_path.stem, path=path)
            return None

        age_ms = self._now_ms() - record.cached_at
        if age_ms >= self._ttl_ms:
            log.debug("cache_record_stale", key=file_path.stem, path=path, age_ms=age_ms)
            return None

        return record.to_page()

    async def set_page(self, path: str, page: Page) -> bool:
        """Write a page under the key for ``path``. Non-fatal on failure.

        Returns True if the record was persisted.
        """
        if not self.enabled:
            return False

        file_path = self.path_for(path)
        try:
            record = CacheRecord(
                title=page.title,
                url=page.url,
                content=page.content,
                cached_at=self._now_ms(),
            )
            payload = record.model_dump_json(by_alias=True, indent=2)
            await asyncio.to_thread(self._write_atomic, file_path, payload)
        except (OSError, ValueError):
            log.warning("cache_write_error", key=file_path.stem, path=path, exc_info=True)
            return False
        return True

    def _write_atomic(self, file_path: Path, payload: str) -> None:
        # exist_ok makes concurrent first writes safe
        self._dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._dir, prefix=".tmp-", suffix=CACHE_FILE_SUFFIX)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, file_path)
        except BaseException:
            with suppress(OSError):
                os.unlink(tmp_name)
            raise
