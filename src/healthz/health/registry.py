"""Check registry and aggregator for healthz.

``Healthz`` is the long-lived, per-process registry.  Components register
named monitor functions against it at startup; every request then runs one
aggregation pass that invokes all checks, rolls up the overall status and
returns an immutable :class:`HealthzReport`.

A single misbehaving check cannot abort a pass: every monitor runs behind a
guard that turns an exception (or a bogus return value) into a ``FAIL``
result plus an explanatory note.

Shipped in this module
----------------------
- HealthMonitor   — type of a user-supplied check function
- CheckOutcome    — result wrapper produced by the guard around a check
- HealthzReport   — immutable snapshot of one aggregation pass
- Healthz         — registry, metadata store and aggregator

Examples
--------
>>> from healthz.identity.provider import StaticIdentityProvider
>>> hz = Healthz(identity_provider=StaticIdentityProvider("api123"))
>>> hz.add_check("cache", "redis", lambda h, c: Status.WARNING)
>>> report = hz.run_checks()
>>> report.status.value, report.http_status
('warn', 409)
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone

from healthz.health.component import Component
from healthz.health.status import Status, worst
from healthz.identity.provider import FileIdentityProvider, IdentityProvider
from healthz.schema.config import HealthzConfig
from healthz.schema.errors import CheckRegistrationError, ReentrantCheckError

SERVICE_ID_KEY = "service_id"

HTTP_OK = 200
HTTP_CONFLICT = 409

HealthMonitor = Callable[["Healthz", Component], Status]
"""A check: receives the registry and its own component, returns a Status.

A check must not call ``run_checks`` on the registry it receives.  Doing so
raises :class:`~healthz.schema.errors.ReentrantCheckError`, which the guard
records as a failing check.
"""


@dataclass(frozen=True)
class CheckOutcome:
    """What the guard observed when running one check.

    ``error`` is set when the monitor raised or returned something that is
    not a status; ``status`` is then always ``FAIL``.
    """

    status: Status
    error: Exception | None = None

    @property
    def recovered(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class HealthzReport:
    """Snapshot of one aggregation pass.

    Attributes
    ----------
    status:
        Overall status, the most severe individual result.
    metadata:
        Copy of the registry metadata (holds ``service_id``).
    notes:
        Notes generated during the pass, truncated to ``notes_count``.
    details:
        Detached copies of every component keyed by check name.
    """

    status: Status
    metadata: dict[str, str] = field(default_factory=dict)
    notes: list[str] = field(default_factory=list)
    details: dict[str, Component] = field(default_factory=dict)

    @property
    def http_status(self) -> int:
        """``200`` when the overall status is PASS, ``409`` otherwise."""
        return HTTP_OK if self.status is Status.PASS else HTTP_CONFLICT

    def is_healthy(self) -> bool:
        return self.status is Status.PASS

    def to_dict(self) -> dict[str, object]:
        """Serialise to the response body shape."""
        return {
            "status": self.status.value,
            "metadata": dict(self.metadata),
            "notes": list(self.notes),
            "details": {name: comp.to_dict() for name, comp in self.details.items()},
        }


class Healthz:
    """Registry of named health checks for one process.

    Parameters
    ----------
    config:
        Registry configuration.  Defaults to ``HealthzConfig()``.
    identity_provider:
        Resolves the persistent service identifier.  Defaults to a
        :class:`~healthz.identity.provider.FileIdentityProvider` on
        ``config.service_file``.  Called exactly once, here.
    logger:
        Logger for registration and recovery messages.  Defaults to the
        module logger.

    Raises
    ------
    IdentityError
        If the service identifier cannot be established.

    Notes
    -----
    Checks run in registration order.  One aggregation pass holds an
    internal lock from start to finish, so concurrent requests are
    serialised.  A check that calls ``run_checks`` from inside the pass is
    reported as failing.  Registration is expected to finish before serving
    starts.
    """

    def __init__(
        self,
        config: HealthzConfig | None = None,
        *,
        identity_provider: IdentityProvider | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._config = config if config is not None else HealthzConfig()
        self._logger = logger or logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._owner: int | None = None
        self._checks: dict[str, Callable[[], CheckOutcome]] = {}

        self.status: Status = Status.PASS
        self.metadata: dict[str, str] = {}
        self.notes: list[str] = []
        self.details: dict[str, Component] = {}

        provider = identity_provider or FileIdentityProvider(
            self._config.service_file, logger=self._logger
        )
        self.set(SERVICE_ID_KEY, provider.ensure_identity())

    @property
    def config(self) -> HealthzConfig:
        return self._config

    @property
    def service_id(self) -> str:
        return self.get(SERVICE_ID_KEY)

    # ------------------------------------------------------------------
    # Metadata and notes
    # ------------------------------------------------------------------

    def set(self, key: str, value: str) -> None:
        """Store *value* under *key* in the report metadata."""
        self.metadata[key] = value

    def get(self, key: str) -> str:
        """Return the metadata value for *key*, or ``""`` when unset."""
        return self.metadata.get(key, "")

    def note(self, *parts: str) -> None:
        """Append one note, the space-joined *parts*, to the current pass."""
        self.notes.append(" ".join(parts))

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_check(self, type_: str, name: str, monitor: HealthMonitor) -> None:
        """Register *monitor* under *name*.

        A fresh :class:`Component` is created for the check.  Registering
        the same name again replaces both the component and the monitor.

        Parameters
        ----------
        type_:
            Free-form category tag stored on the component.
        name:
            Unique check name.
        monitor:
            ``monitor(healthz, component) -> Status``.

        Raises
        ------
        CheckRegistrationError
            If *name* is empty or *monitor* is not callable.
        """
        if not name:
            raise CheckRegistrationError("Health check name must not be empty.")
        if not callable(monitor):
            raise CheckRegistrationError(
                f"Health check {name!r} is not callable.",
                context={"name": name, "monitor": repr(monitor)},
            )

        component = Component(type=type_, name=name)
        self.details[name] = component
        self._checks[name] = self._guard(monitor, component)
        self._logger.info("%s check has been added to HealthMonitor", name)

    def _guard(self, monitor: HealthMonitor, component: Component) -> Callable[[], CheckOutcome]:
        def run() -> CheckOutcome:
            try:
                status = Status.coerce(monitor(self, component))
            except Exception as exc:
                self._logger.exception(
                    "Recovered from a panic caused by HealthMonitor %s", component.name
                )
                self.note("Recovered from a panic caused by HealthMonitor", component.name)
                outcome = CheckOutcome(Status.FAIL, exc)
            else:
                outcome = CheckOutcome(status)

            component.status = outcome.status.value
            component.last_checked_at = datetime.now(tz=timezone.utc)
            return outcome

        return run

    def check_names(self) -> list[str]:
        """Registered check names in registration order."""
        return list(self._checks)

    def component(self, name: str) -> Component | None:
        return self.details.get(name)

    def __len__(self) -> int:
        return len(self._checks)

    def __contains__(self, name: object) -> bool:
        return name in self._checks

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    def run_checks(self) -> HealthzReport:
        """Run every registered check once and return the report.

        Notes are rebuilt from scratch on every pass and truncated to the
        first ``notes_count`` entries.  Components persist across passes and
        are updated in place.

        Raises
        ------
        ReentrantCheckError
            If called by a check while this thread is already running a pass.
        """
        if self._owner == threading.get_ident():
            raise ReentrantCheckError(
                "run_checks() called from inside a health check.",
                context={"thread": self._owner},
            )

        with self._lock:
            self._owner = threading.get_ident()
            try:
                return self._run_pass()
            finally:
                self._owner = None

    def _run_pass(self) -> HealthzReport:
        self.notes = []
        overall = Status.PASS

        for name, check in list(self._checks.items()):
            outcome = check()
            self.note(name, outcome.status.value)
            overall = worst(overall, outcome.status)

        limit = self._config.notes_count
        if len(self.notes) > limit:
            self._logger.debug(
                "Dropping %d health notes beyond notes_count=%d",
                len(self.notes) - limit,
                limit,
            )
            del self.notes[limit:]

        self.status = overall
        return HealthzReport(
            status=overall,
            metadata=dict(self.metadata),
            notes=list(self.notes),
            details={name: comp.snapshot() for name, comp in self.details.items()},
        )

    def __repr__(self) -> str:
        return f"Healthz(service_id={self.service_id!r}, checks={self.check_names()})"
