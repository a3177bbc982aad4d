from __future__ import annotations

from larapexdocs.models.page import CacheRecord, Page
from larapexdocs.models.tools import (
    GetComponentInput,
    GetPageInput,
    ListComponentsOutput,
    SearchDocsInput,
    SearchDocsOutput,
)

__all__ = [
    # page
    "Page",
    "CacheRecord",
    # tools
    "SearchDocsInput",
    "SearchDocsOutput",
    "ListComponentsOutput",
    "GetPageInput",
    "GetComponentInput",
]
