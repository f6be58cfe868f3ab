"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from relinstall.core.models.release import TargetPlatform
from tests.installer.release_fixtures import HashlibTool, ReleaseTree


@pytest.fixture
def fake_tool() -> HashlibTool:
    """A checksum tool that hashes in-process instead of via sha256sum."""
    return HashlibTool(name="sha256sum", argv=("sha256sum",))


@pytest.fixture
def tmp_workspace_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point tempfile at a private dir so leftover workspaces are visible."""
    root = tmp_path / "tmp"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


@pytest.fixture
def linux_host(monkeypatch: pytest.MonkeyPatch, fake_tool: HashlibTool) -> TargetPlatform:
    """Pretend the pipeline runs on linux/amd64 with a working checksum tool."""
    target = TargetPlatform(os="linux", arch="amd64")
    orch = "relinstall.core.services.installer.orchestration.orchestrator"
    monkeypatch.setattr(f"{orch}.resolve_platform", lambda: target)
    monkeypatch.setattr(f"{orch}.select_checksum_tool", lambda: fake_tool)
    return target


@pytest.fixture
def release_tree(tmp_path: Path) -> ReleaseTree:
    """A file:// release index + download tree with one published release."""
    tree = ReleaseTree(tmp_path / "remote", bin_dir=tmp_path / "home" / "bin")
    tree.publish(tag="v1.4.0")
    return tree
