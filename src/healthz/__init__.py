"""healthz — runtime health-aggregation registry for a service process.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Quick-start
-----------
>>> import healthz
>>> healthz.__version__
'0.1.0'

>>> from healthz import Healthz, Status, StaticIdentityProvider
>>> hz = Healthz(identity_provider=StaticIdentityProvider("api-doc"))
>>> hz.add_check("database", "primary", lambda h, c: Status.PASS)
>>> hz.run_checks().to_dict()["status"]
'pass'
"""
from __future__ import annotations

__version__: str = "0.1.0"

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------
from healthz.schema.config import HealthzConfig
from healthz.schema.errors import (
    CheckRegistrationError,
    ConfigurationError,
    ErrorSeverity,
    HealthzError,
    IdentityError,
    ReentrantCheckError,
)

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------
from healthz.config.defaults import DEFAULT_CONFIG
from healthz.config.loader import ConfigLoader
from healthz.config.schema import validate_config

# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------
from healthz.identity.provider import (
    FileIdentityProvider,
    IdentityProvider,
    StaticIdentityProvider,
    ensure_identity,
)

# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
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
    "__version__",
    # schema
    "HealthzConfig",
    "ErrorSeverity",
    "HealthzError",
    "ConfigurationError",
    "IdentityError",
    "CheckRegistrationError",
    "ReentrantCheckError",
    # config
    "DEFAULT_CONFIG",
    "ConfigLoader",
    "validate_config",
    # identity
    "IdentityProvider",
    "FileIdentityProvider",
    "StaticIdentityProvider",
    "ensure_identity",
    # health
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
