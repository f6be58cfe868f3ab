"""
L3 Detection — Host platform.

Maps the kernel name and machine architecture onto the closed set of
tokens release artifacts are published for.
"""

from __future__ import annotations

import logging
import platform

from relinstall.core.models.release import TargetPlatform
from relinstall.core.services.installer.errors import UnsupportedPlatform

logger = logging.getLogger(__name__)

_OS_MAP = {
    "Linux": "linux",
    "Darwin": "darwin",
}

_ARCH_MAP = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "arm64": "arm64",
    "aarch64": "arm64",
}


def map_platform(kernel: str, machine: str) -> TargetPlatform:
    """Translate raw ``uname -s`` / ``uname -m`` values.

    Raises:
        UnsupportedPlatform: For any OS other than Linux/macOS or any
            arch other than amd64/arm64.
    """
    os_name = _OS_MAP.get(kernel)
    if os_name is None:
        raise UnsupportedPlatform(f"Unsupported OS: {kernel or '?'} (Linux/macOS only).")
    arch = _ARCH_MAP.get(machine.lower())
    if arch is None:
        raise UnsupportedPlatform(f"Unsupported Arch: {machine or '?'} (amd64/arm64 only).")
    return TargetPlatform(os=os_name, arch=arch)


def resolve_platform(system: str | None = None, machine: str | None = None) -> TargetPlatform:
    """Detect the running machine's platform."""
    kernel = platform.system() if system is None else system
    mach = platform.machine() if machine is None else machine
    target = map_platform(kernel, mach)
    logger.debug("Platform %s/%s → %s", kernel, mach, target)
    return target
