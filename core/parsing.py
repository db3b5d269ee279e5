"""Recovery of the structured summary from free-form model output.

Models asked for "JSON only" still wrap the object in prose now and then
("Here is your summary: {...} Let me know if..."). ``extract_first_json_object``
tolerates that; ``assemble_summary`` then coerces whatever came back into a
bounded ``SummaryDraft`` without ever raising.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from core.errors import StructuredOutputNotFoundError
from core.models import DEFAULT_TITLE, MAX_BULLETS, SummaryDraft

logger = logging.getLogger(__name__)

#: Key under which the model returns its bullet points.
POINTS_KEY = "summary_points"


def extract_first_json_object(text: str) -> dict[str, Any]:
    """Return the first JSON object embedded in *text*.

    A direct parse is tried first. Failing that, braces are depth-counted
    from the first ``{``; every closing brace that brings the depth back to
    zero ends a candidate, and the first candidate that parses wins.

    Args:
        text: Raw completion text.

    Returns:
        The decoded object.

    Raises:
        StructuredOutputNotFoundError: If there is no ``{`` at all or no
            balanced candidate parses.
    """
    try:
        parsed = json.loads(text)
    except (TypeError, ValueError):
        parsed = None
    if isinstance(parsed, dict):
        return parsed

    start = text.find("{")
    if start == -1:
        raise StructuredOutputNotFoundError("No JSON object found in the model response.")

    depth = 0
    for idx in range(start, len(text)):
        ch = text[idx]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                try:
                    candidate = json.loads(text[start : idx + 1])
                except ValueError:
                    continue
                if isinstance(candidate, dict):
                    return candidate

    logger.warning("Could not recover a JSON object from %d chars of output", len(text))
    raise StructuredOutputNotFoundError("Could not extract a valid JSON object from the model response.")


def _coerce_points(raw: Any) -> list[str]:
    if not isinstance(raw, list):
        return []
    return [item if isinstance(item, str) else str(item) for item in raw[:MAX_BULLETS]]


def assemble_summary(parsed: Any) -> SummaryDraft:
    """Build a ``SummaryDraft`` from a recovered object.

    Missing or malformed fields fall back to defaults: a non-string title
    becomes ``DEFAULT_TITLE``, a non-list ``summary_points`` becomes ``[]``,
    and only the first three points are kept.
    """
    data = parsed if isinstance(parsed, dict) else {}

    title = data.get("title")
    if not isinstance(title, str) or not title.strip():
        title = DEFAULT_TITLE

    return SummaryDraft(title=title.strip(), bullets=_coerce_points(data.get(POINTS_KEY)))


def dump_points(bullets: list[str]) -> str:
    """Serialise bullet points into the blob stored alongside a record."""
    return json.dumps({POINTS_KEY: bullets[:MAX_BULLETS]})


def bullets_from_blob(blob: str | None) -> list[str]:
    """Read bullet points back from a stored summary blob; corrupt → ``[]``."""
    try:
        data = json.loads(blob or "{}")
    except ValueError:
        logger.warning("Ignoring corrupt summary blob: %r", (blob or "")[:80])
        return []
    if not isinstance(data, dict):
        return []
    return _coerce_points(data.get(POINTS_KEY))
