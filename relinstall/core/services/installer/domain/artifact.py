"""
L1 Domain — Artifact naming (pure).

Release archives follow a fixed template::

    {binary}_{version}_{os}_{arch}.tar.gz

published next to a ``checksums.txt`` under
``{download_base}/{owner}/{repo}/releases/download/{tag}/``.
No I/O.
"""

from __future__ import annotations

from relinstall.core.models.package import PackageIdentity
from relinstall.core.models.release import ArtifactReference, ReleaseTag, TargetPlatform

MANIFEST_NAME = "checksums.txt"


def archive_filename(binary: str, tag: ReleaseTag, target: TargetPlatform) -> str:
    """``context`` + ``v1.4.0`` + linux/amd64 → ``context_1.4.0_linux_amd64.tar.gz``."""
    return f"{binary}_{tag.version}_{target.os}_{target.arch}.tar.gz"


def release_download_base(package: PackageIdentity, tag: ReleaseTag, download_base: str) -> str:
    # The URL keeps the tag verbatim (leading "v" included).
    return f"{download_base.rstrip('/')}/{package.owner}/{package.repo}/releases/download/{tag.tag}"


def build_artifact(
    package: PackageIdentity,
    tag: ReleaseTag,
    target: TargetPlatform,
    download_base: str,
) -> ArtifactReference:
    """Derive archive/manifest names and URLs for one platform."""
    base = release_download_base(package, tag, download_base)
    archive = archive_filename(package.binary, tag, target)
    return ArtifactReference(
        archive_name=archive,
        archive_url=f"{base}/{archive}",
        manifest_name=MANIFEST_NAME,
        manifest_url=f"{base}/{MANIFEST_NAME}",
    )
