"""
L4 Execution — Place the verified binary.

The last mutating step of a run.  The binary is staged as a hidden temp
file inside the target directory and renamed over ``{dir}/{binary}``, so
the install path only ever holds the old binary or the complete new one.
Failing to create the directory or stage the file is fatal; failing to
set the executable bits is only a warning, since the file may already
be runnable.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from relinstall.core.models.release import InstallLocation
from relinstall.core.services.installer.errors import InstallWriteFailed

logger = logging.getLogger(__name__)

_EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH
_CHUNK = 64 * 1024


@dataclass
class InstallReport:
    """Where the binary ended up and any non-fatal problems."""

    path: Path
    warnings: list[str] = field(default_factory=list)


def _stage_copy(source: Path, target_dir: Path, binary: str) -> Path:
    """Copy ``source`` into a hidden temp file next to the final path."""
    fd, tmp_name = tempfile.mkstemp(dir=target_dir, prefix=f".{binary}.")
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as dst, open(source, "rb") as src:
            shutil.copyfileobj(src, dst, _CHUNK)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    return tmp


def install_binary(source: Path, location: InstallLocation, binary: str) -> InstallReport:
    """Atomically place ``source`` at ``{location.path}/{binary}``.

    Raises:
        InstallWriteFailed: If the directory cannot be created, the target
            is a directory, or the file cannot be staged or renamed.
    """
    target_dir = location.path
    if not target_dir.is_dir():
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise InstallWriteFailed(
                f"Failed to create installation directory: {target_dir} ({e})"
            ) from e
        logger.info("Created %s", target_dir)

    target = target_dir / binary
    if target.is_dir():
        raise InstallWriteFailed(f"Cannot install to {target}: a directory is in the way.")

    try:
        tmp = _stage_copy(source, target_dir, binary)
    except OSError as e:
        raise InstallWriteFailed(f"Failed to move binary to {target}. ({e})") from e

    report = InstallReport(path=target)
    try:
        try:
            mode = stat.S_IMODE(source.stat().st_mode) | stat.S_IRUSR | stat.S_IWUSR
            os.chmod(tmp, mode | _EXEC_BITS)
        except OSError as e:
            msg = f"Could not set execute permission on {target}."
            # The CLI reports outcome warnings itself.
            logger.info("%s (%s)", msg, e)
            report.warnings.append(msg)

        try:
            os.replace(tmp, target)
        except OSError as e:
            raise InstallWriteFailed(f"Failed to move binary to {target}. ({e})") from e
    finally:
        tmp.unlink(missing_ok=True)

    logger.info("Installed %s", target)
    return report
