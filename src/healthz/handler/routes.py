"""FastAPI routes exposing a ``Healthz`` registry.

Endpoints:
  GET  /healthz   — run all checks; 200 when passing, 409 otherwise

The route is a plain ``def`` so FastAPI runs it in its threadpool; the
registry's own lock serialises concurrent passes.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, FastAPI
from fastapi.responses import JSONResponse

from healthz.health.registry import Healthz

logger = logging.getLogger(__name__)

DEFAULT_PATH = "/healthz"


def healthz_router(healthz: Healthz, path: str = DEFAULT_PATH) -> APIRouter:
    """Build a router with a single GET route serving *healthz*."""
    router = APIRouter()

    @router.get(path)
    def get_healthz() -> JSONResponse:
        report = healthz.run_checks()
        logger.debug("Health report %s (%d checks)", report.status.value, len(report.details))
        return JSONResponse(content=report.to_dict(), status_code=report.http_status)

    return router


def create_app(healthz: Healthz, path: str = DEFAULT_PATH) -> FastAPI:
    """Return a FastAPI application serving *healthz* at *path*."""
    app = FastAPI(
        title="healthz",
        version=healthz.config.version,
        description=healthz.config.description,
    )
    app.state.healthz = healthz
    app.include_router(healthz_router(healthz, path))
    return app
