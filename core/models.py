"""
Pydantic models shared across the Page Digest core.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

#: Title used when the model does not supply a usable one.
DEFAULT_TITLE = "Summary"

#: Maximum number of bullet points kept per summary.
MAX_BULLETS = 3


class SummaryDraft(BaseModel):
    """Title and bullet points assembled from the model output, not yet saved."""

    title: str = DEFAULT_TITLE
    bullets: list[str] = Field(default_factory=list, max_length=MAX_BULLETS)


class SummaryResult(BaseModel):
    """A persisted summary, as returned by the API and kept in local history."""

    id: int
    url: str
    title: str
    bullets: list[str] = Field(default_factory=list, max_length=MAX_BULLETS)
    created_at: datetime
