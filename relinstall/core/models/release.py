"""
Release models — the values threaded through one install run.

Nothing here outlives a single invocation: tags are fetched fresh,
manifests are parsed and dropped once the archive is verified.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

OsName = Literal["linux", "darwin"]
ArchName = Literal["amd64", "arm64"]

# Tags end up in URL paths and file names.
_TAG_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._+-]*$")


class ReleaseTag(BaseModel):
    """Version identifier of a published release, e.g. ``v1.4.0``."""

    model_config = ConfigDict(frozen=True)

    tag: str

    @field_validator("tag")
    @classmethod
    def _check_tag(cls, v: str) -> str:
        if not _TAG_RE.fullmatch(v):
            raise ValueError(f"invalid release tag: {v!r}")
        return v

    @property
    def version(self) -> str:
        """The tag with a single leading ``v`` removed."""
        return self.tag[1:] if self.tag.startswith("v") else self.tag

    def __str__(self) -> str:
        return self.tag


class TargetPlatform(BaseModel):
    """(OS family, CPU architecture) tokens used in artifact names."""

    model_config = ConfigDict(frozen=True)

    os: OsName
    arch: ArchName

    def __str__(self) -> str:
        return f"{self.os}/{self.arch}"


class ArtifactReference(BaseModel):
    """File names and URLs for one platform's release archive."""

    model_config = ConfigDict(frozen=True)

    archive_name: str
    archive_url: str
    manifest_name: str = "checksums.txt"
    manifest_url: str


class InstallLocation(BaseModel):
    """Directory chosen to receive the binary."""

    model_config = ConfigDict(frozen=True)

    path: Path
    exists: bool = True


class ChecksumManifest(BaseModel):
    """Filename → expected digest, parsed from ``checksums.txt``.

    Accepts the usual ``sha256sum``/``shasum`` output layout::

        <hex digest>  <filename>
        <hex digest> *<filename>      (binary mode marker)

    Blank lines and ``#`` comments are skipped.  When a filename appears
    twice, the first entry wins.
    """

    entries: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def parse(cls, text: str) -> ChecksumManifest:
        entries: dict[str, str] = {}
        for raw in text.splitlines():
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split(None, 1)
            if len(parts) != 2:
                continue
            digest, name = parts
            name = name.strip().removeprefix("*")
            entries.setdefault(name, digest.lower())
        return cls(entries=entries)

    def expected_digest(self, filename: str) -> str | None:
        """Exact filename lookup; ``None`` when there is no entry."""
        return self.entries.get(filename)
