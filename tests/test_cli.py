"""
Tests for CLI commands — install, detect, config check, and global options.
"""

import json
import os
from pathlib import Path

import pytest
from click.testing import CliRunner

from relinstall.core.models.release import TargetPlatform
from relinstall.main import cli
from tests.installer.release_fixtures import BINARY_BODY, ReleaseTree


@pytest.fixture(autouse=True)
def _restore_root_logger():
    import logging

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def config_file(release_tree: ReleaseTree, tmp_path: Path) -> Path:
    return release_tree.write_config_yaml(tmp_path / "installer.yml")


_real_chmod = os.chmod


def _deny_chmod(path, mode, **kwargs):
    """Refuse chmod on the staged install file only."""
    if Path(path).name.startswith(".context."):
        raise PermissionError("read-only filesystem")
    return _real_chmod(path, mode, **kwargs)


class TestCLIGlobal:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "install" in result.output
        assert "detect" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestInstallCommand:
    def test_success_with_path_advisory(
        self, linux_host, tmp_workspace_root, release_tree, config_file, monkeypatch,
    ):
        monkeypatch.setenv("PATH", "/usr/bin:/bin")
        result = CliRunner().invoke(cli, ["--config", str(config_file), "install"])

        assert result.exit_code == 0, result.output
        installed = release_tree.bin_dir / "context"
        assert installed.read_bytes() == BINARY_BODY
        assert "Downloading context v1.4.0 for linux/amd64" in result.output
        assert "Success!" in result.output
        assert "is not in your $PATH" in result.output
        assert f'export PATH="{release_tree.bin_dir}:$PATH"' in result.output

    def test_success_on_path(
        self, linux_host, tmp_workspace_root, release_tree, config_file, monkeypatch,
    ):
        monkeypatch.setenv("PATH", f"/usr/bin:{release_tree.bin_dir}")
        result = CliRunner().invoke(cli, ["--config", str(config_file), "install"])
        assert result.exit_code == 0, result.output
        assert "not in your $PATH" not in result.output

    def test_json(self, linux_host, tmp_workspace_root, release_tree, config_file):
        result = CliRunner().invoke(cli, ["--config", str(config_file), "install", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["result"]["tag"] == "v1.4.0"
        assert data["result"]["archive"] == "context_1.4.0_linux_amd64.tar.gz"

    def test_dry_run(self, linux_host, tmp_workspace_root, release_tree, config_file):
        result = CliRunner().invoke(cli, ["--config", str(config_file), "install", "--dry-run"])
        assert result.exit_code == 0, result.output
        assert "[dry-run]" in result.output
        assert "context_1.4.0_linux_amd64.tar.gz" in result.output
        assert not (release_tree.bin_dir / "context").exists()

    def test_pinned_version(self, linux_host, tmp_workspace_root, release_tree, config_file):
        release_tree.publish("v1.2.0")
        release_tree.set_latest({"tag_name": "v9.9.9"})
        result = CliRunner().invoke(
            cli, ["--config", str(config_file), "install", "--version", "v1.2.0", "--json"],
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["result"]["version"] == "1.2.0"

    def test_checksum_mismatch_exits_1(
        self, linux_host, tmp_workspace_root, release_tree, config_file,
    ):
        archive = release_tree.archive_path()
        release_tree.manifest_path().write_text(f"{'b' * 64}  {archive.name}\n")
        result = CliRunner().invoke(cli, ["--config", str(config_file), "install"])
        assert result.exit_code == 1
        assert "Checksum verification failed" in result.output
        assert not (release_tree.bin_dir / "context").exists()
        assert list(tmp_workspace_root.iterdir()) == []

    def test_failure_json(self, linux_host, tmp_workspace_root, release_tree, config_file):
        release_tree.manifest_path().write_text("")
        result = CliRunner().invoke(cli, ["--config", str(config_file), "install", "--json"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["ok"] is False
        assert data["error_code"] == "checksum_entry_missing"

    def test_unsupported_platform(self, tmp_workspace_root, config_file, monkeypatch):
        from relinstall.core.services.installer.errors import UnsupportedPlatform

        def _boom():
            raise UnsupportedPlatform("Unsupported OS: Windows (Linux/macOS only).")

        monkeypatch.setattr(
            "relinstall.core.services.installer.orchestration.orchestrator.resolve_platform", _boom,
        )
        result = CliRunner().invoke(cli, ["--config", str(config_file), "install"])
        assert result.exit_code == 1
        assert "Unsupported OS" in result.output

    def test_bad_repo_option(self, tmp_workspace_root):
        result = CliRunner().invoke(cli, ["install", "--repo", "nope", "--json"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error_code"] == "config_error"

    def test_missing_config(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ["--config", str(tmp_path / "x.yml"), "install"])
        assert result.exit_code == 1
        assert "Config file not found" in result.output

    def test_invalid_pinned_tag(self, linux_host, tmp_workspace_root, release_tree, config_file):
        result = CliRunner().invoke(
            cli, ["--config", str(config_file), "install", "--version", "../../evil", "--json"],
        )
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["error_code"] == "release_lookup_failed"
        assert "Invalid release tag" in data["error"]
        assert not (release_tree.bin_dir / "context").exists()

    def test_interrupt_exits_130(self, monkeypatch, tmp_workspace_root):
        def _interrupted(**kwargs):
            raise KeyboardInterrupt

        monkeypatch.setattr("relinstall.core.use_cases.install.install_release", _interrupted)
        result = CliRunner().invoke(cli, ["install"])
        assert result.exit_code == 130
        assert "Interrupted" in result.output
        assert "Traceback" not in result.output

    def test_chmod_warning_shown_once(
        self, linux_host, tmp_workspace_root, release_tree, config_file, monkeypatch,
    ):
        from relinstall.core.services.installer.execution import install as install_mod

        monkeypatch.setattr(install_mod.os, "chmod", _deny_chmod)
        result = CliRunner().invoke(cli, ["--config", str(config_file), "install"])
        assert result.exit_code == 0, result.output
        assert result.output.count("Could not set execute permission") == 1


class TestDetectCommand:
    def _pin(self, monkeypatch, fake_tool):
        mod = "relinstall.core.use_cases.detect"
        monkeypatch.setattr(f"{mod}.resolve_platform", lambda: TargetPlatform(os="darwin", arch="arm64"))
        monkeypatch.setattr(f"{mod}.select_checksum_tool", lambda: fake_tool)

    def test_json(self, monkeypatch, fake_tool, release_tree, config_file):
        self._pin(monkeypatch, fake_tool)
        result = CliRunner().invoke(cli, ["--config", str(config_file), "detect", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["ready"] is True
        assert data["platform"] == "darwin/arm64"
        assert data["install_dir"] == str(release_tree.bin_dir)
        assert data["install_dir_exists"] is False

    def test_text(self, monkeypatch, fake_tool, config_file):
        self._pin(monkeypatch, fake_tool)
        result = CliRunner().invoke(cli, ["--config", str(config_file), "detect"])
        assert result.exit_code == 0, result.output
        assert "darwin/arm64" in result.output
        assert "will be created" in result.output

    def test_reports_every_failure(self, monkeypatch, tmp_path: Path):
        from relinstall.core.services.installer.errors import NoChecksumTool, UnsupportedPlatform

        mod = "relinstall.core.use_cases.detect"

        def _no_platform():
            raise UnsupportedPlatform("Unsupported Arch: riscv64 (amd64/arm64 only).")

        def _no_tool():
            raise NoChecksumTool("Checksum tool ('sha256sum' or 'shasum') not found. Please install.")

        monkeypatch.setattr(f"{mod}.resolve_platform", _no_platform)
        monkeypatch.setattr(f"{mod}.select_checksum_tool", _no_tool)
        cfg = tmp_path / "installer.yml"
        cfg.write_text(f"candidate_dirs:\n  - {tmp_path}/a/b/c\n")

        result = CliRunner().invoke(cli, ["--config", str(cfg), "detect", "--json"])
        assert result.exit_code == 1
        errors = json.loads(result.output)["errors"]
        assert set(errors) == {"platform", "checksum_tool", "install_dir"}


class TestConfigCheckCommand:
    def test_defaults(self):
        result = CliRunner().invoke(cli, ["config", "check"])
        assert result.exit_code == 0
        assert "valid" in result.output.lower()
        assert "experts-chat/context" in result.output

    def test_invalid_json(self, tmp_path: Path):
        cfg = tmp_path / "installer.yml"
        cfg.write_text("package: [oops\n")
        result = CliRunner().invoke(cli, ["--config", str(cfg), "config", "check", "--json"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["valid"] is False
        assert data["errors"]
