# -*- coding: utf-8 -*-
"""
fitlog API

Daily training and meal log with CSV import/export, statistics and calorie
estimation.
"""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .csvio.api import router as csv_router
from .estimation.api import router as estimation_router
from .logs.api import router as logs_router
from .stats.api import router as stats_router

app = FastAPI(
    title="fitlog",
    description="Daily trainings and meals, statistics and CSV import/export",
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

app.include_router(logs_router)
app.include_router(csv_router)
app.include_router(stats_router)
app.include_router(estimation_router)


@app.get("/api/health")
def health() -> dict:
    return {"ok": True}


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    host = os.environ.get("FITLOG_HOST") or os.environ.get("HOST") or "127.0.0.1"
    port_raw = os.environ.get("FITLOG_PORT") or os.environ.get("PORT") or "8000"
    try:
        port = int(port_raw)
    except ValueError:
        port = 8000

    uvicorn.run("fitlog.api:app", host=host, port=port, reload=False)
