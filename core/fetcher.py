"""Target-page retrieval.

Responsibilities:
- Validate the user-supplied address (absolute, http/https only)
- Fetch the raw HTML under a timeout with browser-like headers
- Translate transport failures into ``SourceFetchError`` / ``FetchTimeoutError``
"""

from __future__ import annotations

import logging
import re
import time
from typing import Optional
from urllib.parse import urlparse

import httpx

from core.errors import FetchTimeoutError, InvalidInputError, SourceFetchError

logger = logging.getLogger(__name__)

_ALLOWED_SCHEMES = {"http", "https"}

#: Seconds before an unresponsive page fetch is aborted.
DEFAULT_TIMEOUT = 15.0

#: Sent with every page request; a desktop browser identity is blocked less often.
BROWSER_HEADERS: dict[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}

_BARE_HOST_RE = re.compile(r"^\w+\.\w+")


# ── URL handling ───────────────────────────────────────────────────────────────


def validate_url(value: Optional[str]) -> str:
    """Return *value* as a normalised absolute http(s) URL.

    Args:
        value: Raw user input.

    Raises:
        InvalidInputError: If the value is blank, has no host, or uses a
            scheme other than http/https.
    """
    url = (value or "").strip()
    if not url:
        raise InvalidInputError("url is required")

    try:
        parsed = urlparse(url)
    except ValueError as exc:
        raise InvalidInputError("invalid url") from exc

    if parsed.scheme.lower() not in _ALLOWED_SCHEMES or not parsed.hostname:
        raise InvalidInputError("invalid url")

    return parsed.geturl()


def ensure_protocol(value: str) -> str:
    """Prefix ``https://`` to bare host input such as ``example.com/post``.

    Values that already carry a scheme, or that do not look like a host name,
    are returned unchanged.

    Examples:
        >>> ensure_protocol("example.com")
        'https://example.com'
        >>> ensure_protocol("http://example.com")
        'http://example.com'
    """
    if not value:
        return value
    parsed = urlparse(value)
    if parsed.scheme and parsed.netloc:
        return value
    if _BARE_HOST_RE.match(value):
        return f"https://{value}"
    return value


# ── Fetching ───────────────────────────────────────────────────────────────────


def fetch_html(
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    client: Optional[httpx.Client] = None,
) -> str:
    """Fetch *url* and return the response body as text.

    *timeout* is both the httpx per-phase limit (connect, each read) and a
    deadline on the whole download; a page still trickling in when the
    deadline passes is abandoned and its connection closed. A client created
    here is always closed before returning, on success and on failure.

    Args:
        url: Absolute http(s) URL (see ``validate_url``).
        timeout: Seconds allowed for the request.
        client: Optional pre-configured ``httpx.Client`` (used by tests).

    Returns:
        The decoded response body.

    Raises:
        FetchTimeoutError: If the timeout fires first.
        SourceFetchError: On a non-2xx status or any other transport failure.
    """
    if client is None:
        with httpx.Client(follow_redirects=True) as owned:
            return fetch_html(url, timeout=timeout, client=owned)

    deadline = time.monotonic() + timeout

    try:
        with client.stream("GET", url, headers=BROWSER_HEADERS, timeout=timeout) as response:
            if not response.is_success:
                logger.warning("Fetching %s returned HTTP %d", url, response.status_code)
                raise SourceFetchError(
                    f"Failed to load the page ({response.status_code} {response.reason_phrase})",
                    status=response.status_code,
                )

            chunks: list[str] = []
            for chunk in response.iter_text():
                if time.monotonic() > deadline:
                    # leaving the block closes the stream and drops the connection
                    raise _deadline_exceeded(url, timeout)
                chunks.append(chunk)
            if time.monotonic() > deadline:
                raise _deadline_exceeded(url, timeout)
    except httpx.TimeoutException as exc:
        raise _deadline_exceeded(url, timeout) from exc
    except httpx.HTTPError as exc:
        logger.warning("Transport error fetching %s: %s", url, exc)
        raise SourceFetchError(f"Failed to load the page: {exc}") from exc

    text = "".join(chunks)
    logger.info("Fetched %s (%d chars)", url, len(text))
    return text


def _deadline_exceeded(url: str, timeout: float) -> FetchTimeoutError:
    logger.warning("Timed out after %.1fs fetching %s", timeout, url)
    return FetchTimeoutError(f"Timed out loading the page after {timeout:g}s")
