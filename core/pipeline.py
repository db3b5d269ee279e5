"""
Summarisation pipeline for Page Digest.

Flow
────
1. validate_url        → absolute http(s) address
2. fetch_html          → raw page HTML (timeout-bounded)
3. extract_text        → article / main / paragraph text
4. prepare_text        → whitespace collapsed, clamped to the char budget
5. request_summary     → raw completion text from Claude
6. extract_first_json_object + assemble_summary → bounded title + bullets
7. store.insert        → persisted row → SummaryResult

Each stage fails fast with a ``PipelineError`` subclass; nothing is retried.
Runs share no state, so concurrent invocations simply run independently.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from config.settings import Settings
from core import store
from core.extractor import extract_text
from core.fetcher import fetch_html, validate_url
from core.models import SummaryResult
from core.parsing import (
    assemble_summary,
    bullets_from_blob,
    dump_points,
    extract_first_json_object,
)
from core.summarizer import Summarizer
from core.text import prepare_text

logger = logging.getLogger(__name__)


def result_from_row(row: dict) -> SummaryResult:
    """Convert a stored row into the API result shape."""
    return SummaryResult(
        id=row["id"],
        url=row["original_url"],
        title=row["title"],
        bullets=bullets_from_blob(row.get("summary")),
        created_at=datetime.fromisoformat(row["created_at"]),
    )


def summarize_url(
    url: Optional[str],
    settings: Settings,
    summarizer: Optional[Summarizer] = None,
) -> SummaryResult:
    """Fetch *url*, summarise it, persist the result and return it.

    Args:
        url: User-supplied page address.
        settings: Application configuration.
        summarizer: Optional pre-built ``Summarizer`` (one is created from
            *settings* otherwise).

    Returns:
        The persisted ``SummaryResult``.

    Raises:
        PipelineError: Any stage failure (see ``core.errors``).
    """
    target = validate_url(url)
    summarizer = summarizer or Summarizer(settings)

    html = fetch_html(target, timeout=settings.fetch_timeout)
    text = prepare_text(extract_text(html), settings.max_chars)
    logger.info("Summarising %s (%d chars)", target, len(text))

    completion = summarizer.request_summary(text)
    draft = assemble_summary(extract_first_json_object(completion))

    row = store.insert(
        original_url=target,
        title=draft.title,
        summary=dump_points(draft.bullets),
    )
    return result_from_row(row)
