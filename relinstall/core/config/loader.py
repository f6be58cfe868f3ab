"""
Configuration loader — reads installer.yml into an InstallerConfig.

A config file is optional and only read when passed explicitly with
``--config``; a plain run uses the built-in defaults.  The file is
YAML validated against the Pydantic model, e.g.::

    package:
      owner: experts-chat
      repo: context
      binary: context
    candidate_dirs:
      - ~/.local/bin
    timeout: 30
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from relinstall.core.models.package import InstallerConfig

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when installer configuration is invalid or missing."""


def load_config(path: Path | None = None) -> InstallerConfig:
    """Load and validate installer configuration.

    Args:
        path: Explicit path to a YAML config. If None, defaults are used.

    Returns:
        Validated InstallerConfig.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    if path is None:
        logger.debug("No config file given, using defaults")
        return InstallerConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading installer config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = InstallerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid installer configuration: {e}") from e

    logger.info("Loaded config for %s (binary '%s')", config.package.slug, config.package.binary)
    return config
