"""Readable-text extraction from raw HTML.

Candidates are tried from most to least specific so that semantically scoped
content wins over navigation and ad boilerplate:

1. paragraphs, headings and list items inside ``<article>``
2. paragraphs and list items inside ``<main>``
3. every paragraph in the document
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from core.errors import NoExtractableContentError

logger = logging.getLogger(__name__)

#: CSS selectors in priority order.
CANDIDATE_SELECTORS: tuple[str, ...] = (
    "article p, article h1, article h2, article li",
    "main p, main li",
    "p",
)


def _candidate_text(soup: BeautifulSoup, selector: str) -> str:
    return "\n".join(node.get_text() for node in soup.select(selector))


def extract_text(html: str) -> str:
    """Return the text of the first non-empty candidate region.

    Args:
        html: Raw HTML document.

    Returns:
        Matched node texts joined by line breaks (not yet normalised).

    Raises:
        NoExtractableContentError: If every candidate is empty.
    """
    soup = BeautifulSoup(html or "", "html.parser")

    for selector in CANDIDATE_SELECTORS:
        text = _candidate_text(soup, selector)
        if text.strip():
            logger.debug("Extracted %d chars using selector %r", len(text), selector)
            return text

    raise NoExtractableContentError("No readable content found on the page.")
