"""
Tests for host platform detection.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from relinstall.core.models.release import TargetPlatform
from relinstall.core.services.installer.detection.platform import map_platform, resolve_platform
from relinstall.core.services.installer.errors import UnsupportedPlatform


class TestMapPlatform:
    @pytest.mark.parametrize(
        ("kernel", "machine", "os_name", "arch"),
        [
            ("Linux", "x86_64", "linux", "amd64"),
            ("Linux", "amd64", "linux", "amd64"),
            ("Linux", "aarch64", "linux", "arm64"),
            ("Linux", "arm64", "linux", "arm64"),
            ("Darwin", "x86_64", "darwin", "amd64"),
            ("Darwin", "arm64", "darwin", "arm64"),
        ],
    )
    def test_supported(self, kernel, machine, os_name, arch):
        assert map_platform(kernel, machine) == TargetPlatform(os=os_name, arch=arch)

    @pytest.mark.parametrize("kernel", ["Windows", "FreeBSD", "SunOS", ""])
    def test_unsupported_os(self, kernel):
        with pytest.raises(UnsupportedPlatform, match="Unsupported OS"):
            map_platform(kernel, "x86_64")

    @pytest.mark.parametrize("machine", ["i686", "armv7l", "ppc64le", "riscv64"])
    def test_unsupported_arch(self, machine):
        with pytest.raises(UnsupportedPlatform, match="Unsupported Arch"):
            map_platform("Linux", machine)

    def test_machine_case_insensitive(self):
        assert map_platform("Darwin", "X86_64").arch == "amd64"

    def test_str(self):
        assert str(TargetPlatform(os="darwin", arch="arm64")) == "darwin/arm64"


class TestResolvePlatform:
    def test_explicit_values(self):
        assert resolve_platform("Linux", "aarch64") == TargetPlatform(os="linux", arch="arm64")

    def test_reads_host(self):
        mod = "relinstall.core.services.installer.detection.platform.platform"
        with patch(f"{mod}.system", return_value="Darwin"), \
             patch(f"{mod}.machine", return_value="arm64"):
            assert resolve_platform() == TargetPlatform(os="darwin", arch="arm64")

    def test_host_unsupported(self):
        mod = "relinstall.core.services.installer.detection.platform.platform"
        with patch(f"{mod}.system", return_value="Windows"), \
             patch(f"{mod}.machine", return_value="AMD64"):
            with pytest.raises(UnsupportedPlatform):
                resolve_platform()

    def test_error_code(self):
        with pytest.raises(UnsupportedPlatform) as exc:
            map_platform("Plan9", "x86_64")
        assert exc.value.code == "unsupported_platform"
