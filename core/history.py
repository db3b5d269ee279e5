"""
Client-local recency history of summaries.

The history is an ordered list of ``SummaryResult`` objects, most recent
first, holding at most one entry per URL. It is a convenience cache, not a
record of truth, so storage access is best effort:

* ``HistoryStore.load()`` never raises; absent, unreadable or corrupt storage
  yields an empty list.
* ``HistoryStore.save()`` swallows write failures and reports them as
  ``False``.

``upsert`` and ``remove`` are pure functions over the list. The
load → mutate → save sequence in ``record``/``forget`` is not atomic across
processes; the last writer wins.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Protocol

from pydantic import ValidationError

from core.models import SummaryResult

logger = logging.getLogger(__name__)

#: Name of the storage slot holding the serialised list.
DEFAULT_KEY = "sws_history_v1"


class HistoryKey(Protocol):
    """Anything with the ``id`` and ``url`` of a history entry."""

    id: int
    url: str


# ── Pure list operations ───────────────────────────────────────────────────


def upsert(entries: list[SummaryResult], entry: SummaryResult) -> list[SummaryResult]:
    """Return a new list with *entry* first and no other entry for its URL."""
    return [entry] + [e for e in entries if e.url != entry.url]


def remove(entries: list[SummaryResult], key: HistoryKey) -> list[SummaryResult]:
    """Return a new list without entries matching both ``key.id`` and ``key.url``."""
    return [e for e in entries if not (e.id == key.id and e.url == key.url)]


# ── Storage backends ───────────────────────────────────────────────────────


class Storage(Protocol):
    """Named text slots, in the manner of browser ``localStorage``."""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """In-process storage, used by tests."""

    def __init__(self, items: Optional[dict[str, str]] = None) -> None:
        self.items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value


class FileStorage:
    """One ``<key>.json`` file per slot inside *directory*."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(value, encoding="utf-8")


# ── History store ──────────────────────────────────────────────────────────


class HistoryStore:
    """Loads and saves the history list through an injected ``Storage``."""

    def __init__(self, storage: Storage, key: str = DEFAULT_KEY) -> None:
        self.storage = storage
        self.key = key

    def load(self) -> list[SummaryResult]:
        """Return the stored list, or ``[]`` if it is absent or unreadable."""
        try:
            raw = self.storage.get_item(self.key)
            data = json.loads(raw) if raw else []
        except Exception as exc:
            logger.warning("Ignoring unreadable history slot %r: %s", self.key, exc)
            return []

        if not isinstance(data, list):
            logger.warning("Ignoring history slot %r: not a list", self.key)
            return []

        entries: list[SummaryResult] = []
        for item in data:
            try:
                entries.append(SummaryResult.model_validate(item))
            except ValidationError as exc:
                logger.warning("Skipping corrupt history entry: %s", exc)
        return entries

    def save(self, entries: list[SummaryResult]) -> bool:
        """Write *entries*; returns False instead of raising on failure."""
        try:
            payload = json.dumps([e.model_dump(mode="json") for e in entries])
            self.storage.set_item(self.key, payload)
        except Exception as exc:
            logger.warning("Could not save history slot %r: %s", self.key, exc)
            return False
        return True

    def record(self, entry: SummaryResult) -> list[SummaryResult]:
        """Upsert *entry* into the stored list, save, and return the new list."""
        entries = upsert(self.load(), entry)
        self.save(entries)
        return entries

    def forget(self, key: HistoryKey) -> list[SummaryResult]:
        """Remove the entry matching *key*, save, and return the new list."""
        entries = remove(self.load(), key)
        self.save(entries)
        return entries
