"""Health status values and worst-case rollup.

Shipped in this module
----------------------
- Status   — closed enum PASS / WARNING / FAIL with a severity order
- worst()  — the more severe of two statuses
- rollup() — one-pass worst-case fold over many statuses
"""
from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

UNKNOWN = "unknown"


class Status(str, Enum):
    """Outcome of one health check, or of a whole aggregation pass.

    Severity order for rollup is ``FAIL > WARNING > PASS``.  The enum value
    is the display string used on the wire.
    """

    PASS = "pass"
    FAIL = "fail"
    WARNING = "warn"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    def __str__(self) -> str:
        return self.value

    @classmethod
    def display(cls, value: object) -> str:
        """Return the display string of *value*, or ``"unknown"``.

        Anything that is not a ``Status`` member maps to ``"unknown"``.

        >>> Status.display(Status.WARNING)
        'warn'
        >>> Status.display(42)
        'unknown'
        """
        if isinstance(value, Status):
            return value.value
        return UNKNOWN

    @classmethod
    def coerce(cls, value: object) -> "Status":
        """Interpret a check's return value as a ``Status``.

        Accepts a member or its display string.

        Raises
        ------
        ValueError
            If *value* is neither.
        """
        if isinstance(value, Status):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        raise ValueError(f"{value!r} is not a health status")


_SEVERITY: dict[Status, int] = {
    Status.PASS: 0,
    Status.WARNING: 1,
    Status.FAIL: 2,
}


def worst(current: Status, result: Status) -> Status:
    """Fold *result* into *current*.

    FAIL always wins, WARNING wins unless *current* is already FAIL, and
    PASS never changes *current*.
    """
    if result.severity > current.severity:
        return result
    return current


def rollup(statuses: Iterable[Status]) -> Status:
    """Return the most severe status in *statuses*, ``PASS`` when empty."""
    overall = Status.PASS
    for status in statuses:
        overall = worst(overall, status)
    return overall
