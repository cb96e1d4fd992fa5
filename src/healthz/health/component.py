"""Per-check state kept by the registry."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime


@dataclass
class Component:
    """Last observed state of one registered check.

    Attributes
    ----------
    type:
        Free-form category tag, e.g. ``"database"`` or ``"queue"``.
    name:
        Check name; unique within a registry.
    status:
        Display string of the last result.  Empty until the check first runs.
    last_checked_at:
        UTC time of the last run, ``None`` until the check first runs.
    """

    type: str
    name: str
    status: str = ""
    last_checked_at: datetime | None = field(default=None)

    def snapshot(self) -> "Component":
        """Return a detached copy safe to hand out of the registry lock."""
        return replace(self)

    def to_dict(self) -> dict[str, object]:
        return {
            "type": self.type,
            "name": self.name,
            "status": self.status,
            "time": self.last_checked_at.isoformat() if self.last_checked_at else None,
        }
