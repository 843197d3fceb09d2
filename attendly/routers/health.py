# attendly/routers/health.py
# Liveness probe for Docker / monitoring. Does not touch the database.

from __future__ import annotations

import time
from datetime import datetime, timezone

from fastapi import APIRouter

from attendly.config import APP_ENV, APP_VERSION

router = APIRouter(tags=["Health"])

_STARTED = time.monotonic()


@router.get("/health")
def health_check():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _STARTED, 3),
        "environment": APP_ENV,
        "version": APP_VERSION,
    }
