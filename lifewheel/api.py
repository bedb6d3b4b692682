# -*- coding: utf-8 -*-
"""
Life-balance tracker API

Monthly wheel-of-life scores: eight life areas, one entry per area per month.
"""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .app_db import init_app_db
from .config import settings
from .wheel.api import router as wheel_router

app = FastAPI(
    title="Life Balance Tracker",
    description="Monthly wheel-of-life scores and life-balance summaries",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def _startup_init_db() -> None:
    if settings.storage_backend == "sqlite":
        init_app_db(settings.app_db_path)


# Ensure the app DB exists even when lifespan events are not triggered (e.g. some test clients).
if settings.storage_backend == "sqlite":
    init_app_db(settings.app_db_path)

app.include_router(wheel_router)


@app.get("/api/health")
def health() -> dict:
    return {"ok": True}


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    host = os.environ.get("LIFEWHEEL_HOST") or os.environ.get("HOST") or "127.0.0.1"
    port_raw = os.environ.get("LIFEWHEEL_PORT") or os.environ.get("PORT") or "8000"
    try:
        port = int(port_raw)
    except Exception:
        port = 8000

    uvicorn.run("lifewheel.api:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    run()
