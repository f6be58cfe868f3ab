"""
Package model — which release to install and where to look for it.

Built from defaults, optionally overlaid by an ``installer.yml`` passed
with ``--config``, then by CLI flags.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator

# Ordered preference: system-wide first, then per-user locations.
DEFAULT_CANDIDATE_DIRS: tuple[str, ...] = (
    "/usr/local/bin",
    "~/.local/bin",
    "~/bin",
)

_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


class PackageIdentity(BaseModel):
    """The owner/repo pair hosting releases, and the binary inside them."""

    owner: str = "experts-chat"
    repo: str = "context"
    binary: str = "context"

    @field_validator("owner", "repo", "binary")
    @classmethod
    def _simple_name(cls, v: str) -> str:
        if not _NAME_RE.fullmatch(v):
            raise ValueError(f"invalid name {v!r} (letters, digits, '.', '_', '-')")
        return v

    @property
    def slug(self) -> str:
        """``owner/repo`` form used in URLs and messages."""
        return f"{self.owner}/{self.repo}"

    @classmethod
    def from_slug(cls, slug: str, binary: str | None = None) -> PackageIdentity:
        """Parse ``owner/repo``; the binary defaults to the repo name."""
        owner, sep, repo = slug.partition("/")
        if not sep or not owner or not repo or "/" in repo:
            raise ValueError(f"expected OWNER/REPO, got {slug!r}")
        return cls(owner=owner, repo=repo, binary=binary or repo)


class InstallerConfig(BaseModel):
    """Everything the install pipeline needs besides the host itself."""

    package: PackageIdentity = Field(default_factory=PackageIdentity)
    candidate_dirs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CANDIDATE_DIRS),
    )
    api_base: str = "https://api.github.com"
    download_base: str = "https://github.com"
    timeout: float | None = None      # None = transport default

    @field_validator("candidate_dirs")
    @classmethod
    def _non_empty(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("candidate_dirs must list at least one directory")
        return v

    @field_validator("api_base", "download_base")
    @classmethod
    def _strip_slash(cls, v: str) -> str:
        return v.rstrip("/")

    def with_overrides(
        self,
        *,
        repo: str | None = None,
        binary: str | None = None,
        install_dir: str | None = None,
    ) -> InstallerConfig:
        """Return a copy with CLI overrides applied."""
        package = self.package
        if repo:
            package = PackageIdentity.from_slug(repo, binary=binary)
        elif binary:
            package = PackageIdentity(owner=package.owner, repo=package.repo, binary=binary)
        candidates = [install_dir] if install_dir else list(self.candidate_dirs)
        return self.model_copy(
            update={"package": package, "candidate_dirs": candidates},
        )
