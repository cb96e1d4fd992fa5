"""Schema package for healthz.

Holds the configuration model and the error taxonomy shared by every
other subpackage.
"""
from __future__ import annotations

from healthz.schema.config import HealthzConfig
from healthz.schema.errors import (
    CheckRegistrationError,
    ConfigurationError,
    ErrorSeverity,
    HealthzError,
    IdentityError,
)

__all__ = [
    "HealthzConfig",
    "ErrorSeverity",
    "HealthzError",
    "ConfigurationError",
    "IdentityError",
    "CheckRegistrationError",
]
