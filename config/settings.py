"""Application settings — all configuration loaded from environment variables.

Usage:
    from config.settings import Settings
    settings = Settings()
    settings.validate()   # raises MissingCredentialError if ANTHROPIC_API_KEY is missing
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from core.errors import MissingCredentialError


@dataclass
class Settings:
    """Centralised application configuration.

    All values are read from environment variables at instantiation time
    so that tests can override them by patching ``os.environ``.
    """

    # ── API Keys ────────────────────────────────────────────────────────────
    anthropic_api_key: str = field(
        default_factory=lambda: os.environ.get("ANTHROPIC_API_KEY", "")
    )

    # ── Flask ───────────────────────────────────────────────────────────────
    debug: bool = field(
        default_factory=lambda: os.environ.get("FLASK_DEBUG", "0") == "1"
    )
    port: int = field(
        default_factory=lambda: int(os.environ.get("PORT", "5001"))
    )

    # ── Page fetching ───────────────────────────────────────────────────────
    fetch_timeout: float = field(
        default_factory=lambda: float(os.environ.get("FETCH_TIMEOUT", "15"))
    )
    #: Character budget for the article text sent to the model.
    max_chars: int = field(
        default_factory=lambda: int(os.environ.get("MAX_CHARS", "12000"))
    )

    # ── AI Model ────────────────────────────────────────────────────────────
    summary_model: str = field(
        default_factory=lambda: os.environ.get("SUMMARY_MODEL", "claude-haiku-4-5")
    )
    summary_max_tokens: int = 512
    summary_temperature: float = 0.2
    #: Upper bound on a single completion call, in seconds.
    completion_timeout: float = field(
        default_factory=lambda: float(os.environ.get("COMPLETION_TIMEOUT", "60"))
    )

    # ── Client ──────────────────────────────────────────────────────────────
    server_url: str = field(
        default_factory=lambda: os.environ.get("SERVER_URL", "http://127.0.0.1:5001")
    )
    history_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("HISTORY_DIR", "~/.page-digest")
        ).expanduser()
    )

    def validate(self) -> None:
        """Raise ``MissingCredentialError`` if any required setting is missing."""
        if not self.anthropic_api_key:
            raise MissingCredentialError(
                "ANTHROPIC_API_KEY environment variable is not set. "
                "Copy .env.example to .env and add your key."
            )
