"""FastAPI application wiring for the survey API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from psycopg_pool import ConnectionPool

from .api.factories import build_controllers
from .api.routes import router as api_router
from .config import get_settings
from .infra.repository import (
    AccountRepository,
    LogErrorRepository,
    SurveyRepository,
    ensure_schema,
)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the Postgres pool and wire controllers for the app lifecycle."""
    pool = ConnectionPool(settings.database_url, open=False)
    pool.open()
    ensure_schema(pool)
    app.state.pool = pool
    app.state.controllers = build_controllers(
        settings,
        AccountRepository(pool),
        SurveyRepository(pool),
        LogErrorRepository(pool),
    )
    try:
        yield
    finally:
        pool.close()


app = FastAPI(title=settings.app_name, version=settings.version, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=600,
)


@app.get("/healthz", tags=["health"])
def healthz() -> dict[str, str]:
    """Return a minimal readiness indicator used by orchestration systems."""
    return {"status": "ok"}


@app.get("/metrics")
def metrics() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


app.include_router(api_router)


def run() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.http_host, port=settings.http_port)


if __name__ == "__main__":
    run()
