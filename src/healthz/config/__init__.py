"""Config package for healthz.

Provides configuration loading, validation, and defaults.
"""
from __future__ import annotations

from healthz.config.defaults import DEFAULT_CONFIG
from healthz.config.loader import ConfigLoader
from healthz.config.schema import HealthzConfig, validate_config

__all__ = [
    "HealthzConfig",
    "validate_config",
    "ConfigLoader",
    "DEFAULT_CONFIG",
]
