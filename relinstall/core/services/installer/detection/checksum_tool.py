"""
L3 Detection — SHA-256 checksum utility.

Two interchangeable tools are supported: GNU ``sha256sum`` and Perl
``shasum``.  ``sha256sum`` is preferred; ``shasum`` is only accepted
after a self-test proves it can produce SHA-256 digests.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from relinstall.core.services.installer.errors import NoChecksumTool
from relinstall.core.services.installer.execution.subprocess_runner import run_command

logger = logging.getLogger(__name__)

# SHA-256 of zero bytes, used to self-test shasum.
EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


class DigestError(Exception):
    """The checksum tool could not hash a file."""


@dataclass(frozen=True)
class ChecksumTool:
    """A digest command, e.g. ``("shasum", "-a", "256")``."""

    name: str
    argv: tuple[str, ...]

    def digest(self, path: Path) -> str:
        """Return the lowercase hex SHA-256 of ``path``.

        Raises:
            DigestError: If the tool fails or prints nothing usable.
        """
        result = run_command([*self.argv, str(path)])
        if not result["ok"]:
            raise DigestError(
                f"{self.name} failed on {path.name}: "
                f"{result.get('stderr') or result['error']}"
            )
        return _first_field(result["stdout"], self.name)

    def self_test(self) -> bool:
        """Hash empty stdin and compare against the known digest."""
        result = run_command(list(self.argv), input_text="")
        if not result["ok"]:
            return False
        try:
            return _first_field(result["stdout"], self.name) == EMPTY_SHA256
        except DigestError:
            return False


SHA256SUM = ChecksumTool(name="sha256sum", argv=("sha256sum",))
SHASUM = ChecksumTool(name="shasum", argv=("shasum", "-a", "256"))


def select_checksum_tool() -> ChecksumTool:
    """Pick the first usable SHA-256 tool.

    Raises:
        NoChecksumTool: If neither tool is installed, or ``shasum`` is
            present but fails its SHA-256 self-test.
    """
    if shutil.which(SHA256SUM.name):
        logger.debug("Using sha256sum")
        return SHA256SUM

    if shutil.which(SHASUM.name):
        if SHASUM.self_test():
            logger.debug("sha256sum missing, using shasum -a 256")
            return SHASUM
        raise NoChecksumTool("Found 'shasum' but it doesn't support SHA-256.")

    raise NoChecksumTool("Checksum tool ('sha256sum' or 'shasum') not found. Please install.")


def _first_field(stdout: str, tool_name: str) -> str:
    fields = stdout.split()
    if not fields:
        raise DigestError(f"{tool_name} produced no output")
    return fields[0].lower()
