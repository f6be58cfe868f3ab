"""
L4 Execution — Archive integrity check.

Reads the downloaded manifest, finds the archive's entry, hashes the
archive with the selected tool and compares.  Must succeed before
anything is extracted or installed.
"""

from __future__ import annotations

import logging
from pathlib import Path

from relinstall.core.models.release import ChecksumManifest
from relinstall.core.services.installer.detection.checksum_tool import ChecksumTool, DigestError
from relinstall.core.services.installer.errors import ChecksumEntryMissing, ChecksumMismatch

logger = logging.getLogger(__name__)


def load_manifest(path: Path) -> ChecksumManifest:
    return ChecksumManifest.parse(path.read_text(encoding="utf-8", errors="replace"))


def verify_archive(
    archive: Path,
    manifest: ChecksumManifest,
    tool: ChecksumTool,
    *,
    filename: str | None = None,
) -> str:
    """Check ``archive`` against its manifest entry.

    Args:
        archive: Downloaded archive.
        manifest: Parsed ``checksums.txt``.
        tool: Selected SHA-256 tool.
        filename: Manifest name to look up (default: ``archive.name``).

    Returns:
        The verified hex digest.

    Raises:
        ChecksumEntryMissing: The manifest has no line for the archive.
        ChecksumMismatch: The computed digest differs, or could not be
            computed at all.
    """
    name = filename or archive.name
    expected = manifest.expected_digest(name)
    if not expected:
        raise ChecksumEntryMissing(f"Could not find checksum for '{name}' in checksums.txt")

    try:
        actual = tool.digest(archive)
    except DigestError as e:
        raise ChecksumMismatch(
            f"Could not compute checksum of {name}: {e}", expected=expected,
        ) from e

    if actual != expected.lower():
        raise ChecksumMismatch(
            "Checksum verification failed! "
            f"Expected: {expected} Got: {actual}. "
            "Aborting installation due to checksum mismatch.",
            expected=expected,
            actual=actual,
        )

    logger.info("Checksum OK for %s (%s)", name, tool.name)
    return actual
