"""
Release installer service — package re-exports.

Layers, innermost first::

    domain        pure naming and advisory helpers
    detection     read-only host checks (platform, checksum tool, dirs)
    execution     network, subprocess and filesystem side effects
    orchestration the ordered install pipeline

    from relinstall.core.services.installer import run_install
"""

from relinstall.core.services.installer.errors import (  # noqa: F401
    ChecksumEntryMissing,
    ChecksumMismatch,
    DownloadFailed,
    ExtractionFailed,
    InstallerError,
    InstallWriteFailed,
    NoChecksumTool,
    NoWritableLocation,
    ReleaseLookupFailed,
    UnsupportedPlatform,
)
from relinstall.core.services.installer.orchestration.orchestrator import (  # noqa: F401
    InstallOutcome,
    run_install,
)
