# attendly/main.py
# FastAPI entry point for the Attendly backend.

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette import status

from attendly.config import APP_VERSION, AUTO_CREATE_TABLES, CORS_ORIGINS
from attendly.db import Base, engine
from attendly.routers.admin import router as admin_router
from attendly.routers.health import router as health_router
from attendly.routers.invitations import router as invitations_router
from attendly.utils.logging import setup_logging

setup_logging()
log = logging.getLogger(__name__)

app = FastAPI(
    title="Attendly Backend",
    description="Wedding invitations: admin CRUD, RSVP, dashboard metrics and QR links.",
    version=APP_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(invitations_router, prefix="/api")
app.include_router(admin_router, prefix="/api")
app.include_router(health_router, prefix="/api")


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies/params are plain 400s, like the service's own ValidationError."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": {
                "code": "invalid_request",
                "message": "Invalid request",
                "errors": jsonable_encoder(exc.errors()),
            }
        },
    )


@app.get("/")
def root():
    """Service banner."""
    return {"message": "Attendly backend is running", "docs": "/docs"}


@app.on_event("startup")
def _startup():
    # off by default; schema is managed by alembic
    if AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
        log.info("tables ensured (AUTO_CREATE_TABLES=1)")
    log.info("Attendly backend started, version %s", APP_VERSION)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("attendly.main:app", host="0.0.0.0", port=8000, reload=False)
