"""
Config check use case — validate an installer.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from relinstall.core.config.loader import ConfigError, load_config
from relinstall.core.models.package import InstallerConfig


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: InstallerConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "package": self.config.package.slug if self.config else None,
            "binary": self.config.package.binary if self.config else None,
            "candidate_dirs": self.config.candidate_dirs if self.config else [],
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate installer configuration.

    Without a path the built-in defaults are checked.
    """
    result = ConfigCheckResult(config_path=config_path)

    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.errors.append(str(e))
        return result
    result.config = config

    for url in (config.api_base, config.download_base):
        if not url.startswith("https://"):
            result.warnings.append(f"Non-HTTPS endpoint: {url}")

    dupes = {d for d in config.candidate_dirs if config.candidate_dirs.count(d) > 1}
    if dupes:
        result.warnings.append(f"Duplicate candidate dirs: {', '.join(sorted(dupes))}")

    if config.timeout is not None and config.timeout <= 0:
        result.errors.append(f"timeout must be positive, got {config.timeout}")

    result.valid = not result.errors
    return result
