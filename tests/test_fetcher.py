"""Tests for core/fetcher.py — URL validation and page fetching."""

from __future__ import annotations

import time

import httpx
import pytest

from core.errors import FetchTimeoutError, InvalidInputError, SourceFetchError
from core.fetcher import BROWSER_HEADERS, ensure_protocol, fetch_html, validate_url


def make_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TrickleStream(httpx.SyncByteStream):
    """Response body that arrives one small chunk at a time."""

    def __init__(self, chunks: int, delay: float) -> None:
        self.chunks = chunks
        self.delay = delay
        self.sent = 0
        self.closed = False

    def __iter__(self):
        for _ in range(self.chunks):
            time.sleep(self.delay)
            self.sent += 1
            yield b"x"

    def close(self) -> None:
        self.closed = True


class TestValidateUrl:
    def test_accepts_https(self):
        assert validate_url("https://example.com/a?b=1") == "https://example.com/a?b=1"

    def test_strips_whitespace(self):
        assert validate_url("  http://example.com  ") == "http://example.com"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_url(self, value):
        with pytest.raises(InvalidInputError, match="required"):
            validate_url(value)

    @pytest.mark.parametrize(
        "value",
        [
            "ftp://example.com",
            "file:///etc/passwd",
            "example.com",
            "http://",
            "http://:80",
            "http://user@",
            "https://:443/path",
        ],
    )
    def test_rejects_invalid(self, value):
        with pytest.raises(InvalidInputError, match="invalid"):
            validate_url(value)


class TestEnsureProtocol:
    def test_adds_https_to_bare_host(self):
        assert ensure_protocol("example.com/post") == "https://example.com/post"

    def test_keeps_existing_scheme(self):
        assert ensure_protocol("http://example.com") == "http://example.com"

    def test_leaves_non_host_text(self):
        assert ensure_protocol("hello") == "hello"

    def test_empty(self):
        assert ensure_protocol("") == ""


class TestFetchHtml:
    def test_returns_body_on_success(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["ua"] = request.headers.get("user-agent")
            return httpx.Response(200, text="<p>hi</p>")

        with make_client(handler) as client:
            assert fetch_html("https://example.com", client=client) == "<p>hi</p>"
        assert seen["ua"] == BROWSER_HEADERS["User-Agent"]

    def test_non_2xx_raises_with_status(self):
        with make_client(lambda request: httpx.Response(404)) as client:
            with pytest.raises(SourceFetchError) as exc_info:
                fetch_html("https://example.com/missing", client=client)

        assert exc_info.value.status == 404
        assert "404" in str(exc_info.value)

    def test_timeout_raises_fetch_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with make_client(handler) as client:
            with pytest.raises(FetchTimeoutError) as exc_info:
                fetch_html("https://slow.example.com", timeout=0.5, client=client)

        assert isinstance(exc_info.value, TimeoutError)
        assert isinstance(exc_info.value, SourceFetchError)
        assert exc_info.value.status is None

    def test_connection_error_raises_source_fetch_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with make_client(handler) as client:
            with pytest.raises(SourceFetchError, match="refused"):
                fetch_html("https://down.example.com", client=client)

    def test_slow_body_hits_total_deadline(self):
        # Each chunk arrives well inside the per-read timeout, but the whole
        # body would take 2s.
        stream = TrickleStream(chunks=40, delay=0.05)

        with make_client(lambda request: httpx.Response(200, stream=stream)) as client:
            started = time.monotonic()
            with pytest.raises(FetchTimeoutError):
                fetch_html("https://trickle.example.com", timeout=0.2, client=client)
            elapsed = time.monotonic() - started

        assert elapsed < 1.0
        assert stream.sent < 40
        assert stream.closed is True

    def test_body_within_deadline_is_returned(self):
        stream = TrickleStream(chunks=3, delay=0.01)

        with make_client(lambda request: httpx.Response(200, stream=stream)) as client:
            assert fetch_html("https://example.com", timeout=5.0, client=client) == "xxx"
