"""Config schema re-export and validation helper for healthz.

Re-exports ``HealthzConfig`` so that ``healthz.config`` is a complete import
path for consumers who prefer not to reach into ``healthz.schema``.
"""
from __future__ import annotations

from pydantic import ValidationError

from healthz.schema.config import HealthzConfig
from healthz.schema.errors import ConfigurationError

__all__ = ["HealthzConfig", "validate_config"]


def validate_config(data: dict[str, object]) -> HealthzConfig:
    """Validate a raw dict against the ``HealthzConfig`` schema.

    Parameters
    ----------
    data:
        Unvalidated key/value mapping.

    Returns
    -------
    HealthzConfig

    Raises
    ------
    ConfigurationError
        If the data fails Pydantic validation.  The original
        ``ValidationError`` is attached as the ``__cause__``.

    Examples
    --------
    >>> validate_config({"notesCount": 3}).notes_count
    3
    """
    try:
        return HealthzConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Configuration validation failed: {exc}",
            context={"errors": exc.errors()},
        ) from exc
