"""HTTP adapter for healthz."""
from __future__ import annotations

from healthz.handler.routes import create_app, healthz_router

__all__ = ["healthz_router", "create_app"]
