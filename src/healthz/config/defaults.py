"""Default configuration constants for healthz.

``DEFAULT_CONFIG`` is the starting point used by ``ConfigLoader.load_auto()``
before applying file or environment overrides.
"""
from __future__ import annotations

from healthz.schema.config import DEFAULT_NOTES_COUNT, DEFAULT_SERVICE_FILE, HealthzConfig

DEFAULT_CONFIG: HealthzConfig = HealthzConfig(
    version="0.1.0",
    release="",
    description="",
    service_file=DEFAULT_SERVICE_FILE,
    notes_count=DEFAULT_NOTES_COUNT,
)
"""Baseline ``HealthzConfig`` used when no file or env config is present."""
