"""
Install use case — load config, run the pipeline, capture the outcome.

Fatal installer errors are turned into a result object here so the CLI
(text or ``--json``) decides how to present them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from relinstall.core.config.loader import ConfigError, load_config
from relinstall.core.services.installer import InstallerError, InstallOutcome, run_install
from relinstall.core.services.installer.orchestration.orchestrator import Progress

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    """Result of an install attempt."""

    outcome: InstallOutcome | None = None
    error: str | None = None
    error_code: str | None = None
    details: dict = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "error": self.error,
            "error_code": self.error_code,
            "details": self.details,
            "result": self.outcome.to_dict() if self.outcome else None,
        }


def _error_details(exc: InstallerError) -> dict:
    details: dict = {}
    for attr in ("url", "expected", "actual", "checked"):
        value = getattr(exc, attr, None)
        if value:
            details[attr] = value
    return details


def install_release(
    config_path: Path | None = None,
    *,
    repo: str | None = None,
    binary: str | None = None,
    version: str | None = None,
    install_dir: str | None = None,
    dry_run: bool = False,
    progress: Progress | None = None,
) -> InstallResult:
    """Install the latest (or pinned) release of a package.

    Args:
        config_path: Optional installer.yml.
        repo: ``OWNER/REPO`` override.
        binary: Binary name override.
        version: Release tag to pin.
        install_dir: Directory override.
        dry_run: Plan only.
        progress: Status line callback.

    Returns:
        InstallResult — never raises for expected failures.
    """
    result = InstallResult()

    try:
        config = load_config(config_path)
        config = config.with_overrides(repo=repo, binary=binary)
    except (ConfigError, ValueError) as e:
        result.error = str(e)
        result.error_code = "config_error"
        return result

    try:
        result.outcome = run_install(
            config,
            version=version,
            install_dir=install_dir,
            dry_run=dry_run,
            progress=progress,
        )
    except InstallerError as e:
        logger.debug("Install aborted: %s", e, exc_info=True)
        result.error = str(e)
        result.error_code = e.code
        result.details = _error_details(e)

    return result
