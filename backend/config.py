"""
backend/config.py

Runtime settings for the Customer Management API.

Values come from environment variables; a local `.env` file is loaded first
if present so developers don't have to export anything by hand.
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


# ── Database ──────────────────────────────────────────────
# Any SQLAlchemy URL works; Postgres in Docker, SQLite for local dev.
DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./customers.db")
SQL_ECHO: bool = _as_bool(os.getenv("SQL_ECHO", "false"))

# ── Startup ───────────────────────────────────────────────
SEED_ON_STARTUP: bool = _as_bool(os.getenv("SEED_ON_STARTUP", "true"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
