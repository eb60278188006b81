#!/usr/bin/env python3
"""
CATDB - Legacy category import service
======================================

Single-command run:  python main.py

See config.py for all environment-variable tunables.
"""

from __future__ import annotations

import logging

from flask import Flask, jsonify

import config
from db import init_db, get_session, Category
from api import api_bp

logger = logging.getLogger("catdb")


def configure_logging(level: str = config.LOG_LEVEL) -> None:
    logging.basicConfig(level=level, format=config.LOG_FORMAT)


def create_app(db_url: str | None = None) -> Flask:
    """Flask application factory."""

    app = Flask(__name__)

    # ── Initialise database ─────────────────────────────────────────
    init_db(db_url or config.DB_URL)
    logger.info(f"Database: {db_url or config.DB_URL}")

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)

    @app.route("/health")
    def health():
        return jsonify({"ok": True})

    # ── Error handlers ──────────────────────────────────────────────
    @app.errorhandler(404)
    def _404(e):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(500)
    def _500(e):
        return jsonify({"error": "internal server error"}), 500

    return app


def _seed_if_empty():
    """Auto-import the seed JSON when the category table is empty."""
    session = get_session()
    count = session.query(Category).count()
    session.close()

    if count > 0:
        logger.info(f"Database has {count} categories.")
        return

    if not config.SEED_PATH.exists():
        logger.info(f"No seed file at {config.SEED_PATH} - starting empty.")
        return

    logger.info(f"Database empty → auto-importing {config.SEED_PATH.name} …")
    from import_engine import run_import, parse_records

    with open(config.SEED_PATH, "rb") as fh:
        report = run_import(parse_records(fh.read(), "application/json"))

    logger.info(f"Done: {report.imported} imported, "
                f"{report.skipped} skipped / {report.total_rows} records")
    for err in report.errors[:10]:
        logger.warning(f"Record {err['row']}: {err['reason']}")


def main():
    configure_logging()
    app = create_app()
    _seed_if_empty()

    logger.info(f"Listening on http://{config.HOST}:{config.PORT}")
    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
