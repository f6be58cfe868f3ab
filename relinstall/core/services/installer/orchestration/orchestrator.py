"""
L5 Orchestration — The install pipeline.

Each step takes what earlier steps produced and returns its own output
(or raises ``InstallerError``).  Order matters: the archive is verified
before anything is extracted, and installation is the only step that
touches the user's directories, so a failed run never leaves a
half-installed binary behind.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from relinstall.core.models.package import InstallerConfig
from relinstall.core.models.release import (
    ArtifactReference,
    InstallLocation,
    ReleaseTag,
    TargetPlatform,
)
from relinstall.core.services.installer.detection.checksum_tool import select_checksum_tool
from relinstall.core.services.installer.detection.install_dir import choose_install_dir
from relinstall.core.services.installer.detection.platform import resolve_platform
from relinstall.core.services.installer.domain.artifact import build_artifact
from relinstall.core.services.installer.domain.path_advisory import path_advisory
from relinstall.core.services.installer.errors import ReleaseLookupFailed
from relinstall.core.services.installer.execution.extract import extract_member
from relinstall.core.services.installer.execution.http import download_file, fetch_latest_tag
from relinstall.core.services.installer.execution.install import install_binary
from relinstall.core.services.installer.execution.verify import load_manifest, verify_archive
from relinstall.core.services.installer.execution.workspace import scoped_workspace

logger = logging.getLogger(__name__)

Progress = Callable[[str], None]


@dataclass
class InstallOutcome:
    """What a (possibly dry) run resolved and did."""

    binary: str
    tag: ReleaseTag
    platform: TargetPlatform
    artifact: ArtifactReference
    location: InstallLocation
    checksum_tool: str
    dry_run: bool = False
    installed_path: Path | None = None
    digest: str | None = None
    warnings: list[str] = field(default_factory=list)
    path_advice: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "binary": self.binary,
            "tag": self.tag.tag,
            "version": self.tag.version,
            "platform": {"os": self.platform.os, "arch": self.platform.arch},
            "archive": self.artifact.archive_name,
            "archive_url": self.artifact.archive_url,
            "manifest_url": self.artifact.manifest_url,
            "install_dir": str(self.location.path),
            "checksum_tool": self.checksum_tool,
            "dry_run": self.dry_run,
            "installed_path": str(self.installed_path) if self.installed_path else None,
            "sha256": self.digest,
            "warnings": self.warnings,
            "on_path": self.path_advice is None,
            "path_advice": self.path_advice,
        }


def _noop(_msg: str) -> None:
    pass


def run_install(
    config: InstallerConfig,
    *,
    version: str | None = None,
    install_dir: str | None = None,
    dry_run: bool = False,
    progress: Progress | None = None,
    path_env: str | None = None,
) -> InstallOutcome:
    """Resolve, fetch, verify, and install the configured binary.

    Args:
        config: Package identity, candidate dirs and endpoints.
        version: Pin a release tag instead of asking for the latest.
        install_dir: Use this directory instead of the candidate list.
        dry_run: Stop after planning — no downloads, no writes.
        progress: Receives human-readable status lines.
        path_env: ``PATH`` value for the advisory (default: environment).

    Raises:
        InstallerError: On the first fatal step; nothing is retried.
    """
    say = progress or _noop
    if install_dir:
        config = config.with_overrides(install_dir=install_dir)
    package = config.package

    # 1–3. Environment, checksum tool, release
    target = resolve_platform()
    tool = select_checksum_tool()
    if version:
        try:
            tag = ReleaseTag(tag=version)
        except ValueError as e:
            raise ReleaseLookupFailed(f"Invalid release tag: {version!r}") from e
        logger.info("Using pinned release %s", tag)
    else:
        tag = fetch_latest_tag(package, config.api_base, timeout=config.timeout)

    # 4–5. Where it goes, what to fetch
    location = choose_install_dir(config.candidate_dirs)
    artifact = build_artifact(package, tag, target, config.download_base)

    outcome = InstallOutcome(
        binary=package.binary,
        tag=tag,
        platform=target,
        artifact=artifact,
        location=location,
        checksum_tool=tool.name,
        dry_run=dry_run,
    )
    if dry_run:
        logger.info("Dry run: would install %s to %s", artifact.archive_name, location.path)
        return outcome

    # 6–10. Everything touching the network or disk happens in the workspace
    with scoped_workspace(package.binary) as workspace:
        archive_path = workspace / artifact.archive_name
        manifest_path = workspace / artifact.manifest_name

        say(f"Downloading {package.binary} {tag} for {target}...")
        download_file(artifact.archive_url, archive_path, timeout=config.timeout)
        download_file(artifact.manifest_url, manifest_path, timeout=config.timeout)

        manifest = load_manifest(manifest_path)
        outcome.digest = verify_archive(
            archive_path, manifest, tool, filename=artifact.archive_name,
        )

        extracted = extract_member(archive_path, package.binary, workspace)
        report = install_binary(extracted, location, package.binary)

    outcome.installed_path = report.path
    outcome.warnings.extend(report.warnings)

    # 11. Advisory only
    env_path = os.environ.get("PATH", "") if path_env is None else path_env
    outcome.path_advice = path_advisory(location.path, env_path)
    if outcome.path_advice:
        logger.info("%s is not on PATH", location.path)

    return outcome
