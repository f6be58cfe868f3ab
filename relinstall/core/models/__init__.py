"""
Domain models — Pydantic types for the installer.

All models are re-exported here for convenient access:

    from relinstall.core.models import InstallerConfig, TargetPlatform, ArtifactReference
"""

from relinstall.core.models.package import (
    DEFAULT_CANDIDATE_DIRS,
    InstallerConfig,
    PackageIdentity,
)
from relinstall.core.models.release import (
    ArtifactReference,
    ChecksumManifest,
    InstallLocation,
    ReleaseTag,
    TargetPlatform,
)

__all__ = [
    # package.py
    "DEFAULT_CANDIDATE_DIRS",
    "InstallerConfig",
    "PackageIdentity",
    # release.py
    "ArtifactReference",
    "ChecksumManifest",
    "InstallLocation",
    "ReleaseTag",
    "TargetPlatform",
]
