"""Identity package for healthz.

Provides the persistent service identifier assigned to a registry at
construction.
"""
from __future__ import annotations

from healthz.identity.provider import (
    FileIdentityProvider,
    IdentityProvider,
    StaticIdentityProvider,
    ensure_identity,
    new_service_id,
)

__all__ = [
    "IdentityProvider",
    "FileIdentityProvider",
    "StaticIdentityProvider",
    "ensure_identity",
    "new_service_id",
]
