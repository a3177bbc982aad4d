"""HTML to plain-text extraction for documentation pages.

Turns a fetched HTML document into a ``Page``: resolves a title, drops site
chrome (navigation, header, footer) and non-text elements, picks the main
content region and collapses its whitespace. Pure function, no I/O; malformed
markup degrades to empty strings rather than raising.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup

from larapexdocs.config import DEFAULT_MAX_CONTENT_SIZE
from larapexdocs.models.page import Page

STRIPPED_TAGS = ("nav", "header", "footer", "script", "style")

# Tried in order; the first region type with non-empty text wins.
CONTENT_REGIONS = ("main", "article", "body")

_WHITESPACE_RE = re.compile(r"\s+")


def extract_page(
    html: str,
    url: str,
    *,
    max_content_size: int = DEFAULT_MAX_CONTENT_SIZE,
    title_suffix: str = " - Larapex Charts",
) -> Page:
    """Parse ``html`` fetched from ``url`` into a Page."""
    soup = BeautifulSoup(html, "html.parser")

    # Title comes first: an <h1> inside <header> still names the page.
    title = extract_title(soup, title_suffix)

    for tag in soup.find_all(STRIPPED_TAGS):
        # extract() rather than decompose(): nested matches are visited after
        # their ancestor has already been detached.
        tag.extract()

    content = normalise_whitespace(_region_text(soup))
    return Page(title=title, url=url, content=content[:max_content_size])


def extract_title(soup: BeautifulSoup, title_suffix: str = "") -> str:
    """Return the first <h1> text, else the <title> text minus the site suffix."""
    h1 = soup.find("h1")
    if h1 is not None:
        heading = h1.get_text().strip()
        if heading:
            return heading

    title_tag = soup.find("title")
    if title_tag is None:
        return ""
    title = title_tag.get_text().strip()
    if title_suffix:
        title = title.removesuffix(title_suffix)
    return title.strip()


def normalise_whitespace(text: str) -> str:
    """Collapse every whitespace run, newlines included, to one space and trim.

    Paragraph and line breaks never survive: extracted content is one line.
    """
    return _WHITESPACE_RE.sub(" ", text).strip()


def _region_text(soup: BeautifulSoup) -> str:
    for name in CONTENT_REGIONS:
        text = "".join(element.get_text() for element in soup.find_all(name))
        if text.strip():
            return text

    # Fragment without a <body>: use whatever is left outside <head>.
    for tag in soup.find_all(["head", "title"]):
        tag.extract()
    return soup.get_text()
