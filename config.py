"""
CATDB - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.
"""

from __future__ import annotations
import os
from pathlib import Path


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR  = Path(__file__).resolve().parent
SEED_PATH = Path(os.environ.get("CATDB_SEED", BASE_DIR / "categories_seed.json"))

# ── Database ───────────────────────────────────────────────────────────
DB_URL = os.environ.get("CATDB_DB", f"sqlite:///{BASE_DIR / 'catdb.sqlite'}")

# ── Server ─────────────────────────────────────────────────────────────
HOST   = os.environ.get("CATDB_HOST", "0.0.0.0")
PORT   = int(os.environ.get("CATDB_PORT", "5000"))
DEBUG  = os.environ.get("CATDB_DEBUG", "0") == "1"

# ── Logging ────────────────────────────────────────────────────────────
LOG_LEVEL  = os.environ.get("CATDB_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

# ── Import ─────────────────────────────────────────────────────────────
ATTRIBUTE_SLOTS = 6          # s_categories_attributes.attribute1 … attribute6
