"""
L4 Execution — Pull the executable out of the release archive.

Only the member named after the binary is extracted; everything else in
the tarball (README, LICENSE, ...) is left alone.
"""

from __future__ import annotations

import logging
import tarfile
from pathlib import Path

from relinstall.core.services.installer.errors import ExtractionFailed

logger = logging.getLogger(__name__)


def _find_member(tar: tarfile.TarFile, binary: str) -> tarfile.TarInfo | None:
    for name in (binary, f"./{binary}"):
        try:
            return tar.getmember(name)
        except KeyError:
            continue
    return None


def extract_member(archive: Path, binary: str, dest: Path) -> Path:
    """Extract ``binary`` from a ``.tar.gz`` into ``dest``.

    Returns:
        Path to the extracted file.

    Raises:
        ExtractionFailed: Unreadable archive, missing member, or nothing
            on disk after extraction.
    """
    try:
        with tarfile.open(archive, "r:gz") as tar:
            member = _find_member(tar, binary)
            if member is None:
                raise ExtractionFailed(f"Binary '{binary}' not found in {archive.name}.")
            if not member.isfile():
                raise ExtractionFailed(f"Archive member '{member.name}' is not a regular file.")
            tar.extract(member, path=dest, filter="data")
    except (tarfile.TarError, OSError) as e:
        raise ExtractionFailed(f"Extraction failed: {e}") from e

    extracted = dest / binary
    if not extracted.is_file():
        raise ExtractionFailed(f"Binary '{binary}' not found after extraction.")

    logger.debug("Extracted %s → %s", binary, extracted)
    return extracted
