"""Health package for healthz.

Status values, per-check component records, and the check registry that
aggregates them into a report.
"""
from __future__ import annotations

from healthz.health.component import Component
from healthz.health.registry import (
    HTTP_CONFLICT,
    HTTP_OK,
    SERVICE_ID_KEY,
    CheckOutcome,
    HealthMonitor,
    Healthz,
    HealthzReport,
)
from healthz.health.status import Status, rollup, worst

__all__ = [
    "Status",
    "worst",
    "rollup",
    "Component",
    "CheckOutcome",
    "HealthMonitor",
    "HealthzReport",
    "Healthz",
    "SERVICE_ID_KEY",
    "HTTP_OK",
    "HTTP_CONFLICT",
]
