"""
SQLite-backed summary records for Page Digest.

Schema
──────
table: summaries
  id           INTEGER PRIMARY KEY AUTOINCREMENT
  original_url TEXT NOT NULL
  title        TEXT NOT NULL
  summary      TEXT NOT NULL  ({"summary_points": [...]} serialised as JSON)
  created_at   TEXT NOT NULL  (ISO-8601 UTC)
"""

from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from core.errors import PersistenceError

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path(__file__).parent.parent / "data" / "summaries.db"

_COLUMNS = "id, original_url, title, summary, created_at"


def _db_path() -> Path:
    """Return the database file path, honouring a DB_PATH env var if set."""
    env = os.getenv("DB_PATH")
    return Path(env) if env else DEFAULT_DB_PATH


@contextmanager
def _connect():
    """Yield a connected sqlite3.Connection, creating the file/dir if needed.

    Any sqlite3 failure surfaces as ``PersistenceError``.
    """
    path = _db_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(path))
    except (OSError, sqlite3.Error) as exc:
        raise PersistenceError(f"Could not open the summary database: {exc}") from exc

    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    except sqlite3.Error as exc:
        conn.rollback()
        raise PersistenceError(f"Summary database error: {exc}") from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db() -> None:
    """Create the summaries table if it doesn't exist yet."""
    with _connect() as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS summaries (
                id           INTEGER PRIMARY KEY AUTOINCREMENT,
                original_url TEXT NOT NULL,
                title        TEXT NOT NULL,
                summary      TEXT NOT NULL,
                created_at   TEXT NOT NULL
            )
            """
        )
    logger.info("Summary DB initialised at %s", _db_path())


def insert(original_url: str, title: str, summary: str) -> dict[str, Any]:
    """Persist a summary and return the stored row.

    Args:
        original_url: The summarised page address.
        title: Display title.
        summary: Serialised ``{"summary_points": [...]}`` blob.

    Returns:
        A dict with ``id``, ``original_url``, ``title``, ``summary`` and
        ``created_at`` (ISO-8601 string).

    Raises:
        PersistenceError: If the insert fails.
    """
    now = datetime.now(timezone.utc).isoformat()

    with _connect() as conn:
        cursor = conn.execute(
            "INSERT INTO summaries (original_url, title, summary, created_at) "
            "VALUES (?, ?, ?, ?)",
            (original_url, title, summary, now),
        )
        row = conn.execute(
            f"SELECT {_COLUMNS} FROM summaries WHERE id = ?",
            (cursor.lastrowid,),
        ).fetchone()

    if row is None:
        raise PersistenceError("Inserted summary could not be read back.")

    logger.info("Saved summary id=%d for url=%r", row["id"], original_url)
    return dict(row)


def get_all(limit: int = 50) -> list[dict[str, Any]]:
    """Return the most recent *limit* records (newest first)."""
    with _connect() as conn:
        rows = conn.execute(
            f"SELECT {_COLUMNS} FROM summaries ORDER BY id DESC LIMIT ?",
            (limit,),
        ).fetchall()
    return [dict(row) for row in rows]


def get_by_id(record_id: int) -> dict[str, Any] | None:
    """Fetch a single record by its primary key, or None if not found."""
    with _connect() as conn:
        row = conn.execute(
            f"SELECT {_COLUMNS} FROM summaries WHERE id = ?",
            (record_id,),
        ).fetchone()
    return dict(row) if row is not None else None


def delete(record_id: int) -> bool:
    """Delete a record by ID.

    Returns:
        True if a row was deleted, False if not found.
    """
    with _connect() as conn:
        cursor = conn.execute("DELETE FROM summaries WHERE id = ?", (record_id,))
    deleted = cursor.rowcount > 0
    if deleted:
        logger.info("Deleted summary id=%d", record_id)
    return deleted
