"""Error taxonomy for healthz.

All exceptions raised by healthz derive from ``HealthzError`` so that
callers can catch the entire family with a single ``except HealthzError``
clause while still being able to distinguish individual failure modes.

Failures *inside* a registered check are never raised: the registry
recovers them and reports the check as failing.  A missing metadata key is
not an error either.

Shipped in this module
----------------------
- ErrorSeverity          — ordered severity enum
- HealthzError           — root exception with severity and context payload
- Domain subclasses      — ConfigurationError, IdentityError,
                           CheckRegistrationError, ReentrantCheckError
"""
from __future__ import annotations

from enum import Enum


class ErrorSeverity(str, Enum):
    """Severity levels for ``HealthzError`` instances.

    Severity is advisory metadata only.  It does not change how the
    exception propagates, but logging and alerting can filter on it.
    """

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"


class HealthzError(Exception):
    """Root exception for all healthz failures.

    Parameters
    ----------
    message:
        Human-readable description of what went wrong.
    severity:
        Advisory ``ErrorSeverity`` level.  Defaults to ``HIGH``.
    context:
        Optional dict of structured metadata (file paths, check names, ...).

    Examples
    --------
    >>> try:
    ...     raise HealthzError("something broke", ErrorSeverity.MEDIUM)
    ... except HealthzError as exc:
    ...     print(exc.severity.value)
    medium
    """

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.HIGH,
        context: dict[str, object] | None = None,
    ) -> None:
        super().__init__(message)
        self.severity: ErrorSeverity = severity
        self.context: dict[str, object] = context or {}

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}("
            f"message={str(self)!r}, "
            f"severity={self.severity.value!r})"
        )


class ConfigurationError(HealthzError):
    """Raised when configuration loading or validation fails.

    Examples: negative ``notes_count``, unreadable file, bad YAML.
    """


class IdentityError(HealthzError):
    """Raised when the persistent service identity cannot be established.

    The identity file could not be opened, read, or written.  This is a
    startup failure; the process is not expected to continue.
    """


class CheckRegistrationError(HealthzError):
    """Raised when ``add_check`` is given an empty name or a non-callable."""


class ReentrantCheckError(HealthzError):
    """Raised when a health check calls ``run_checks`` on its own registry.

    The guard around the check reports it as failing instead of letting the
    pass wait on itself.
    """
