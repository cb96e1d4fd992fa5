"""Persistent service identity for healthz.

A process gets a stable identifier that survives restarts: the first run
generates a random one and stores it in a file, later runs read it back.

Shipped in this module
----------------------
- IdentityProvider         — ABC defining the provider contract
- FileIdentityProvider     — file-backed provider used by default
- StaticIdentityProvider   — fixed identifier, no filesystem access
- ensure_identity()        — one-shot helper around FileIdentityProvider
"""
from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from pathlib import Path

from healthz.schema.errors import ErrorSeverity, IdentityError

DEFAULT_PREFIX = "api"


def new_service_id(prefix: str = DEFAULT_PREFIX) -> str:
    """Return *prefix* followed by a random UUID4 with the dashes removed.

    >>> sid = new_service_id("api")
    >>> sid.startswith("api") and len(sid) == 35
    True
    """
    return f"{prefix}{uuid.uuid4().hex}"


class IdentityProvider(ABC):
    """Strategy that resolves the service identifier once at startup."""

    @abstractmethod
    def ensure_identity(self) -> str:
        """Return the service identifier, creating it if necessary.

        Raises
        ------
        IdentityError
            If the identifier cannot be established.
        """


class FileIdentityProvider(IdentityProvider):
    """Stores the service identifier as the sole content of a text file.

    The file is created (mode ``0o644``) when absent.  An empty file gets a
    freshly generated identifier written to it; a non-empty file *is* the
    identifier, byte for byte, with no parsing or format validation.  Bytes
    that are not valid UTF-8 are kept in the file and show up as U+FFFD in
    the returned string.

    Parameters
    ----------
    path:
        Location of the identity file.
    prefix:
        Fixed prefix of newly generated identifiers.
    logger:
        Logger to report creation and failures on.  Defaults to the module
        logger.

    Examples
    --------
    >>> import tempfile, os
    >>> path = os.path.join(tempfile.mkdtemp(), "service-id")
    >>> provider = FileIdentityProvider(path)
    >>> provider.ensure_identity() == provider.ensure_identity()
    True
    """

    def __init__(
        self,
        path: str | Path,
        prefix: str = DEFAULT_PREFIX,
        logger: logging.Logger | None = None,
    ) -> None:
        self._path = Path(path)
        self._prefix = prefix
        self._logger = logger or logging.getLogger(__name__)

    @property
    def path(self) -> Path:
        return self._path

    def ensure_identity(self) -> str:
        try:
            self._path.touch(mode=0o644, exist_ok=True)
            with self._path.open("r+b") as fh:
                raw = fh.read()
                if raw:
                    service_id = raw.decode("utf-8", errors="replace")
                else:
                    service_id = new_service_id(self._prefix)
                    fh.write(service_id.encode("utf-8"))
                    self._logger.info(
                        "New persistent service-id %s has been generated for HealthMonitor",
                        service_id,
                    )
        except OSError as exc:
            self._logger.critical(
                "Healthz unable to use service-id file %s, %s", self._path, exc
            )
            raise IdentityError(
                f"Unable to establish persistent service-id from {self._path}: {exc}",
                severity=ErrorSeverity.CRITICAL,
                context={"path": str(self._path)},
            ) from exc

        self._logger.info("Use persistent service-id %s for HealthMonitor", service_id)
        return service_id

    def __repr__(self) -> str:
        return f"FileIdentityProvider(path={str(self._path)!r})"


class StaticIdentityProvider(IdentityProvider):
    """Returns a fixed identifier without touching the filesystem."""

    def __init__(self, service_id: str) -> None:
        self._service_id = service_id

    def ensure_identity(self) -> str:
        return self._service_id


def ensure_identity(path: str | Path, prefix: str = DEFAULT_PREFIX) -> str:
    """Read or create the persistent identifier stored at *path*.

    Raises
    ------
    IdentityError
        If the file cannot be opened, read, or written.
    """
    return FileIdentityProvider(path, prefix=prefix).ensure_identity()
