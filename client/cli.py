"""Command-line client for a running Page Digest server.

Commands
────────
summarize URL        POST the URL to the server, print the summary, record it
history              Print the local history, most recent first
forget ID URL        Remove one entry from the local history

Local history lives in ``$HISTORY_DIR`` (default ``~/.page-digest``) and is
independent of the records kept by the server.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

import httpx
from dotenv import load_dotenv
from pydantic import ValidationError

from config.settings import Settings
from core.fetcher import ensure_protocol
from core.history import FileStorage, HistoryStore
from core.models import DEFAULT_TITLE, SummaryResult

logger = logging.getLogger(__name__)


class SummarizeRequestError(Exception):
    """The server did not return a summary."""


def post_summarize(
    server_url: str,
    url: str,
    client: Optional[httpx.Client] = None,
    timeout: float = 120.0,
) -> SummaryResult:
    """Ask the server at *server_url* to summarise *url*.

    Raises:
        SummarizeRequestError: On a transport failure, a non-2xx answer, or
            a reply that is not a summary object.
    """
    if client is None:
        with httpx.Client(base_url=server_url, timeout=timeout) as owned:
            return post_summarize(server_url, url, client=owned, timeout=timeout)

    try:
        response = client.post("/api/summarize", json={"url": url})
    except httpx.HTTPError as exc:
        raise SummarizeRequestError(f"Could not reach the server: {exc}") from exc

    if not response.is_success:
        try:
            body = response.json()
        except ValueError:
            body = None
        message = body.get("error") if isinstance(body, dict) else None
        raise SummarizeRequestError(message or "Failed to generate the summary.")

    try:
        payload = response.json()
    except ValueError as exc:
        raise SummarizeRequestError("The server returned an unreadable summary.") from exc
    if not isinstance(payload, dict):
        raise SummarizeRequestError("The server returned an unreadable summary.")

    if not isinstance(payload.get("title"), str):
        payload["title"] = DEFAULT_TITLE
    if not isinstance(payload.get("bullets"), list):
        payload["bullets"] = []
    try:
        return SummaryResult.model_validate(payload)
    except ValidationError as exc:
        raise SummarizeRequestError(f"The server returned an invalid summary: {exc}") from exc


def _print_entry(entry: SummaryResult) -> None:
    print(f"[{entry.id}] {entry.title}")
    print(f"    {entry.url}")
    for bullet in entry.bullets:
        print(f"    - {bullet}")


# ── Commands ───────────────────────────────────────────────────────────────


def cmd_summarize(args: argparse.Namespace, settings: Settings, history: HistoryStore) -> int:
    url = ensure_protocol(args.url.strip())
    try:
        result = post_summarize(args.server or settings.server_url, url)
    except SummarizeRequestError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    _print_entry(result)
    history.record(result)
    return 0


def cmd_history(args: argparse.Namespace, settings: Settings, history: HistoryStore) -> int:
    entries = history.load()
    if not entries:
        print("No history yet.")
    for entry in entries:
        _print_entry(entry)
    return 0


def cmd_forget(args: argparse.Namespace, settings: Settings, history: HistoryStore) -> int:
    before = history.load()
    after = history.forget(argparse.Namespace(id=args.id, url=args.url))
    if len(after) == len(before):
        print("No matching history entry.", file=sys.stderr)
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    p = argparse.ArgumentParser(prog="page-digest", description="Page Digest client")
    p.add_argument("--server", help="server base URL (default: $SERVER_URL)")
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("summarize", help="summarise a web page")
    s.add_argument("url")
    s.set_defaults(func=cmd_summarize)

    h = sub.add_parser("history", help="show local history")
    h.set_defaults(func=cmd_history)

    f = sub.add_parser("forget", help="remove an entry from local history")
    f.add_argument("id", type=int)
    f.add_argument("url")
    f.set_defaults(func=cmd_forget)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    load_dotenv()
    logging.basicConfig(level=logging.WARNING)

    args = build_parser().parse_args(argv)
    settings = Settings()
    history = HistoryStore(FileStorage(settings.history_dir))
    return args.func(args, settings, history)


if __name__ == "__main__":
    sys.exit(main())
