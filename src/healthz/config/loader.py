"""Layered configuration loading for healthz.

A registry's configuration is resolved in two layers:

1. a YAML file, either given explicitly or discovered as ``healthz.yaml`` /
   ``healthz.yml`` in a directory;
2. ``HEALTHZ_*`` environment variables, where every variable that is present
   replaces the file's value, even when it restates the default.

When neither layer supplies anything, a copy of ``DEFAULT_CONFIG`` is used.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from healthz.config.defaults import DEFAULT_CONFIG
from healthz.config.schema import validate_config
from healthz.schema.config import HealthzConfig
from healthz.schema.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES: tuple[str, ...] = ("healthz.yaml", "healthz.yml")
ENV_PREFIX = "HEALTHZ_"


def find_config_file(search_dir: str | Path | None = None) -> Path | None:
    """Return the first of ``CONFIG_FILE_NAMES`` present in *search_dir*."""
    base_dir = Path(search_dir) if search_dir is not None else Path.cwd()
    for name in CONFIG_FILE_NAMES:
        candidate = base_dir / name
        if candidate.is_file():
            return candidate
    return None


class ConfigLoader:
    """Resolves a :class:`~healthz.schema.config.HealthzConfig`.

    Parameters
    ----------
    env_prefix:
        Prefix of the environment variables forming the override layer.

    Examples
    --------
    >>> ConfigLoader(env_prefix="HEALTHZ_DOCTEST_").load_env().notes_count
    10
    """

    def __init__(self, env_prefix: str = ENV_PREFIX) -> None:
        self._env_prefix = env_prefix

    def load_yaml(self, path: str | Path) -> HealthzConfig:
        """Read and validate one YAML file.

        An empty file, or one whose top level is not a mapping, yields the
        defaults.

        Raises
        ------
        ConfigurationError
            If the file is missing, unreadable, not YAML, or fails validation.
        """
        resolved = Path(path)
        try:
            text = resolved.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(
                f"Cannot read healthz config {resolved}: {exc}",
                context={"path": str(resolved)},
            ) from exc
        try:
            raw = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigurationError(
                f"Cannot parse healthz config {resolved}: {exc}",
                context={"path": str(resolved)},
            ) from exc

        logger.debug("Read healthz config from %s", resolved)
        return validate_config(dict(raw) if isinstance(raw, dict) else {})

    def load_env(self) -> HealthzConfig:
        """Build the override layer from the environment.

        Only variables that are present count as set; see
        :meth:`HealthzConfig.merge`.

        Raises
        ------
        ConfigurationError
            If a variable holds a value that fails validation.
        """
        try:
            return HealthzConfig.from_env(prefix=self._env_prefix)
        except ValueError as exc:
            raise ConfigurationError(
                f"Invalid {self._env_prefix}* environment configuration: {exc}",
                context={"prefix": self._env_prefix},
            ) from exc

    def load(
        self,
        path: str | Path | None = None,
        search_dir: str | Path | None = None,
    ) -> HealthzConfig:
        """Resolve the file layer, then apply the environment layer.

        Parameters
        ----------
        path:
            Explicit config file.  When omitted, *search_dir* (default: the
            working directory) is searched for ``CONFIG_FILE_NAMES``.
        search_dir:
            Directory searched when *path* is not given.

        Raises
        ------
        ConfigurationError
            If the chosen file or the environment is invalid.  A broken file
            is never skipped in favour of the defaults.
        """
        source = Path(path) if path is not None else find_config_file(search_dir)
        if source is None:
            config = DEFAULT_CONFIG.model_copy()
            logger.debug("No healthz config file found; starting from defaults.")
        else:
            config = self.load_yaml(source)
            logger.info("Loaded healthz config from %s", source)

        if any(key.startswith(self._env_prefix) for key in os.environ):
            config = config.merge(self.load_env())
            logger.debug("Applied %s* environment overrides.", self._env_prefix)
        return config

    def load_auto(self, search_dir: str | Path | None = None) -> HealthzConfig:
        """Discover the config file in *search_dir* and apply the environment."""
        return self.load(search_dir=search_dir)
