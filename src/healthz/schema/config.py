"""Registry configuration schema for healthz.

``HealthzConfig`` is a Pydantic v2 model that acts as the validated boundary
object between raw configuration sources (YAML files, environment variables,
in-memory dicts) and the registry.

Shipped in this module
----------------------
- HealthzConfig   — Pydantic v2 model with class-method loaders
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_SERVICE_FILE = Path(".healthz-service-id")
DEFAULT_NOTES_COUNT = 10


class HealthzConfig(BaseModel):
    """Construction-time configuration for a :class:`~healthz.health.registry.Healthz`.

    Parameters
    ----------
    version, release, description:
        Descriptive strings.  They are not used by the aggregation logic.
    service_file:
        Path of the file that stores the persistent service identifier.
    notes_count:
        Maximum number of notes retained in one report.  Must be ``>= 0``.

    Both snake_case names and the camelCase spellings ``serviceFile`` /
    ``notesCount`` are accepted on input.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    version: str = Field(default="0.1.0")
    release: str = Field(default="")
    description: str = Field(default="")
    service_file: Path = Field(default=DEFAULT_SERVICE_FILE, alias="serviceFile")
    notes_count: int = Field(default=DEFAULT_NOTES_COUNT, ge=0, alias="notesCount")

    @model_validator(mode="before")
    @classmethod
    def _drop_none(cls, values: Any) -> Any:  # noqa: ANN401
        """Treat explicit ``null`` entries as "use the default"."""
        if isinstance(values, dict):
            return {k: v for k, v in values.items() if v is not None}
        return values

    # ------------------------------------------------------------------
    # Class-method loaders
    # ------------------------------------------------------------------

    @classmethod
    def from_yaml(cls, path: str | Path) -> "HealthzConfig":
        """Load and validate configuration from a YAML file.

        Raises
        ------
        FileNotFoundError
            If ``path`` does not exist.
        pydantic.ValidationError
            If the parsed data fails validation.
        """
        resolved = Path(path)
        if not resolved.exists():
            raise FileNotFoundError(f"Config file not found: {resolved}")
        with resolved.open(encoding="utf-8") as fh:
            raw: object = yaml.safe_load(fh)
        data: dict[str, object] = dict(raw) if isinstance(raw, dict) else {}
        return cls.model_validate(data)

    @classmethod
    def from_env(cls, prefix: str = "HEALTHZ_") -> "HealthzConfig":
        """Build configuration from environment variables.

        Variables are mapped by stripping ``prefix`` and lower-casing the
        remainder, so ``HEALTHZ_NOTES_COUNT=5`` maps to ``notes_count=5``.
        Unknown keys are ignored.
        """
        known = set(cls.model_fields)
        data: dict[str, object] = {}
        for raw_key, raw_value in os.environ.items():
            if not raw_key.startswith(prefix):
                continue
            key = raw_key[len(prefix):].lower()
            if key in known:
                data[key] = raw_value
        return cls.model_validate(data)

    def merge(self, overrides: "HealthzConfig") -> "HealthzConfig":
        """Return a new config where every field explicitly set on *overrides* wins.

        Fields *overrides* only carries as defaults leave *self* untouched,
        so an override may set a field back to its default value.  Neither
        *self* nor *overrides* is mutated.
        """
        merged = self.model_dump()
        merged.update(overrides.model_dump(exclude_unset=True))
        return HealthzConfig.model_validate(merged)
