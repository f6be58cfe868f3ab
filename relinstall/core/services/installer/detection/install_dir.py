"""
L3 Detection — Install directory selection.

Walks an ordered list of candidate directories and returns the first
one the binary can be written into.  Read-only: a missing directory is
reported as ``exists=False`` and only created at install time.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path

from relinstall.core.models.release import InstallLocation
from relinstall.core.services.installer.errors import NoWritableLocation

logger = logging.getLogger(__name__)


def _is_writable(path: Path) -> bool:
    return os.access(path, os.W_OK | os.X_OK)


def expand_candidate(raw: str) -> Path:
    """Expand ``~`` (from HOME) in a candidate path."""
    return Path(raw).expanduser()


def choose_install_dir(candidates: Sequence[str]) -> InstallLocation:
    """Select the first existing writable directory, or the first
    missing one whose parent is a writable directory.

    Raises:
        NoWritableLocation: If no candidate qualifies.
    """
    checked: list[str] = []
    for raw in candidates:
        path = expand_candidate(raw)
        checked.append(str(path))

        if path.is_dir():
            if _is_writable(path):
                logger.debug("Install dir: %s (exists)", path)
                return InstallLocation(path=path, exists=True)
            logger.debug("Skipping %s: not writable", path)
            continue

        if path.exists():
            logger.debug("Skipping %s: not a directory", path)
            continue

        parent = path.parent
        if parent.is_dir() and _is_writable(parent):
            logger.debug("Install dir: %s (will be created)", path)
            return InstallLocation(path=path, exists=False)
        logger.debug("Skipping %s: parent %s not writable", path, parent)

    raise NoWritableLocation(
        "Could not find a writable installation location. "
        f"Checked: {' '.join(checked)}. "
        "Please ensure one is writable/creatable or create one and add it to PATH.",
        checked=checked,
    )
