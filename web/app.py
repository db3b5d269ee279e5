"""
Flask web server for Page Digest.

Routes
──────
POST   /api/summarize         Summarise a page: {"url": "..."} → SummaryResult JSON
GET    /api/summaries         List recent saved summaries (JSON)
GET    /api/summaries/<id>    Fetch a specific summary (JSON)
DELETE /api/summaries/<id>    Delete a summary (JSON)
"""

from __future__ import annotations

import logging
import os
import sys

from dotenv import load_dotenv
from flask import Flask, jsonify, request

# Allow running as `python web/app.py` from the project root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

load_dotenv()

from config.settings import Settings
from core import store
from core.errors import PipelineError
from core.pipeline import result_from_row, summarize_url

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> Flask:
    """Build the Flask application and initialise the summary database."""
    app = Flask(__name__)
    app.config["SETTINGS"] = settings or Settings()

    store.init_db()

    # ── Error mapping ──────────────────────────────────────────────────────

    @app.errorhandler(PipelineError)
    def handle_pipeline_error(exc: PipelineError):
        logger.warning("%s: %s", type(exc).__name__, exc)
        return jsonify({"error": str(exc)}), exc.status_code

    # ── Summarise ──────────────────────────────────────────────────────────

    @app.route("/api/summarize", methods=["POST"])
    def summarize():
        """Run the full pipeline for the posted URL."""
        body = request.get_json(silent=True)
        url = body.get("url") if isinstance(body, dict) else None
        if url is not None and not isinstance(url, str):
            url = None

        try:
            result = summarize_url(url, app.config["SETTINGS"])
        except PipelineError as exc:
            return handle_pipeline_error(exc)
        except Exception:
            logger.exception("Unexpected failure summarising url=%r", url)
            return jsonify({"error": "Internal server error"}), 500

        return jsonify(result.model_dump(mode="json"))

    # ── Saved summaries API ────────────────────────────────────────────────

    @app.route("/api/summaries")
    def list_summaries():
        """Return the 50 most recent saved summaries as JSON."""
        rows = store.get_all(limit=50)
        return jsonify([result_from_row(r).model_dump(mode="json") for r in rows])

    @app.route("/api/summaries/<int:record_id>")
    def get_summary(record_id: int):
        """Return one saved summary."""
        row = store.get_by_id(record_id)
        if row is None:
            return jsonify({"error": "Not found"}), 404
        return jsonify(result_from_row(row).model_dump(mode="json"))

    @app.route("/api/summaries/<int:record_id>", methods=["DELETE"])
    def delete_summary(record_id: int):
        """Delete a saved summary."""
        if not store.delete(record_id):
            return jsonify({"error": "Not found"}), 404
        return jsonify({"deleted": record_id})

    return app


# ── Entry point ────────────────────────────────────────────────────────────

if __name__ == "__main__":
    settings = Settings()
    create_app(settings).run(debug=settings.debug, host="0.0.0.0", port=settings.port)
