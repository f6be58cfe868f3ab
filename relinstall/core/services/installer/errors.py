"""
Installer error taxonomy.

Every fatal step raises a subclass of ``InstallerError``.  Each class
carries a stable ``code`` so the use-case layer and ``--json`` output
can report failures without string matching.  None of them is retried.
"""

from __future__ import annotations


class InstallerError(Exception):
    """Base class for fatal install failures."""

    code = "installer_error"


class UnsupportedPlatform(InstallerError):
    code = "unsupported_platform"


class NoChecksumTool(InstallerError):
    code = "no_checksum_tool"


class ReleaseLookupFailed(InstallerError):
    code = "release_lookup_failed"


class NoWritableLocation(InstallerError):
    code = "no_writable_location"

    def __init__(self, message: str, checked: list[str] | None = None) -> None:
        super().__init__(message)
        self.checked = checked or []


class DownloadFailed(InstallerError):
    code = "download_failed"

    def __init__(self, message: str, url: str = "") -> None:
        super().__init__(message)
        self.url = url


class ChecksumEntryMissing(InstallerError):
    code = "checksum_entry_missing"


class ChecksumMismatch(InstallerError):
    code = "checksum_mismatch"

    def __init__(self, message: str, expected: str = "", actual: str = "") -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class ExtractionFailed(InstallerError):
    code = "extraction_failed"


class InstallWriteFailed(InstallerError):
    code = "install_write_failed"
