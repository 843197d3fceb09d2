# attendly/config.py
# Settings read from the environment (.env is loaded once, here).

from __future__ import annotations

import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name) or default
    return [item.strip() for item in raw.split(",") if item.strip()]


# --- database ---
DATABASE_URL = os.getenv("DATABASE_URL") or "sqlite:///./attendly.db"

# --- guest links / QR ---
PUBLIC_BASE_URL = (os.getenv("PUBLIC_BASE_URL") or "http://localhost:3000").rstrip("/")

# --- the one event every invitation belongs to (pre-fills the create form) ---
EVENT_DATE = os.getenv("EVENT_DATE") or "2026-05-23T15:00"
EVENT_VENUE = os.getenv("EVENT_VENUE") or "Canary World, Lagos, Nigeria"
MAX_PLUS_ONE = _env_int("MAX_PLUS_ONE", 10)

# --- RSVP ---
# free    - any status may be set from any status (admin override)
# guarded - rescinded is terminal, pending cannot be re-entered
RSVP_TRANSITIONS = (os.getenv("RSVP_TRANSITIONS") or "free").strip().lower()
STATUS_FEED_LIMIT = _env_int("STATUS_FEED_LIMIT", 5)

# --- HTTP ---
CORS_ORIGINS = _env_list("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")

# --- service info / logging ---
APP_ENV = os.getenv("APP_ENV") or "development"
APP_VERSION = os.getenv("APP_VERSION") or "0.1.0"
LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").upper()

# create missing tables on startup (local runs without alembic)
AUTO_CREATE_TABLES = os.getenv("AUTO_CREATE_TABLES") == "1"
