"""
Detect use case — report what an install would use, without installing.

Runs the read-only checks (platform, checksum tool, install directory)
and records each one's error instead of stopping at the first.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from relinstall.core.config.loader import ConfigError, load_config
from relinstall.core.models.package import InstallerConfig
from relinstall.core.models.release import InstallLocation, TargetPlatform
from relinstall.core.services.installer import InstallerError
from relinstall.core.services.installer.detection.checksum_tool import select_checksum_tool
from relinstall.core.services.installer.detection.install_dir import choose_install_dir
from relinstall.core.services.installer.detection.platform import resolve_platform


@dataclass
class DetectResult:
    """Outcome of the environment checks."""

    config: InstallerConfig | None = None
    platform: TargetPlatform | None = None
    checksum_tool: str | None = None
    location: InstallLocation | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ready(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            "ready": self.ready,
            "package": self.config.package.slug if self.config else None,
            "binary": self.config.package.binary if self.config else None,
            "platform": str(self.platform) if self.platform else None,
            "checksum_tool": self.checksum_tool,
            "install_dir": str(self.location.path) if self.location else None,
            "install_dir_exists": self.location.exists if self.location else None,
            "errors": self.errors,
        }


def detect_environment(
    config_path: Path | None = None,
    *,
    repo: str | None = None,
    binary: str | None = None,
) -> DetectResult:
    """Run every check and collect results."""
    result = DetectResult()

    try:
        config = load_config(config_path).with_overrides(repo=repo, binary=binary)
    except (ConfigError, ValueError) as e:
        result.errors["config"] = str(e)
        return result
    result.config = config

    try:
        result.platform = resolve_platform()
    except InstallerError as e:
        result.errors["platform"] = str(e)

    try:
        result.checksum_tool = select_checksum_tool().name
    except InstallerError as e:
        result.errors["checksum_tool"] = str(e)

    try:
        result.location = choose_install_dir(config.candidate_dirs)
    except InstallerError as e:
        result.errors["install_dir"] = str(e)

    return result
