#!/usr/bin/env python3
"""Example: Serving /healthz from a FastAPI application

Usage:
    python examples/fastapi_service.py
    curl -i http://127.0.0.1:8080/healthz

or through the CLI::

    cd examples && healthz serve --app fastapi_service:build

Requirements:
    pip install healthz-registry
"""
from __future__ import annotations

import logging
import time

import uvicorn
from fastapi import FastAPI

from healthz import Component, Healthz, HealthzConfig, Status
from healthz.handler import healthz_router

STARTED = time.monotonic()


def warming_up(h: Healthz, c: Component) -> Status:
    return Status.WARNING if time.monotonic() - STARTED < 30 else Status.PASS


def build() -> Healthz:
    hz = Healthz(
        HealthzConfig(version="1.0.0", description="orders service"),
        logger=logging.getLogger("orders.health"),
    )
    hz.set("region", "eu-west-1")
    hz.add_check("runtime", "warm-up", warming_up)
    return hz


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    app = FastAPI(title="orders")
    app.include_router(healthz_router(build()))
    uvicorn.run(app, host="127.0.0.1", port=8080)


if __name__ == "__main__":
    main()
