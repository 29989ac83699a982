"""Tests for the native package backends."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from base_tooling.core.errors import UnsupportedPlatformError
from base_tooling.core.invocation import Platform
from base_tooling.integrations.packages.abc import BackendKind, VendorRepository
from base_tooling.integrations.packages.apt import AptBackend, render_source_line
from base_tooling.integrations.packages.brew import BrewBackend
from base_tooling.integrations.packages.detect import detect_backend
from base_tooling.integrations.packages.dnf import DnfBackend
from base_tooling.integrations.packages.unsupported import UnsupportedBackend
from tests.fakes.privilege import FakePrivilegeGate
from tests.fakes.shell import FakeShell

REPO = VendorRepository(
    name="vendor",
    key_url="https://example.com/Release.key",
    deb_url="https://example.com/deb/",
    rpm_repo_url="https://example.com/rpm/vendor.repo",
)


@pytest.mark.parametrize(
    ("platform", "tools", "expected"),
    [
        (Platform.MACOS, {}, BackendKind.BREW),
        (Platform.LINUX, {"apt-get": "/usr/bin/apt-get", "dnf": "/usr/bin/dnf"}, BackendKind.APT),
        (Platform.LINUX, {"dnf": "/usr/bin/dnf"}, BackendKind.DNF),
        (Platform.LINUX, {}, BackendKind.UNSUPPORTED),
    ],
)
def test_detect_backend(platform: Platform, tools: dict[str, str], expected: BackendKind) -> None:
    backend = detect_backend(platform, FakeShell(installed_tools=tools), FakePrivilegeGate())

    assert backend.kind is expected


def test_apt_install_refreshes_index_once(tmp_path: Path) -> None:
    shell = FakeShell()
    privilege = FakePrivilegeGate()
    backend = AptBackend(shell, privilege, sources_dir=tmp_path)

    backend.install(["git", "curl"])
    backend.install(["zsh"])

    assert shell.commands == [
        "sudo env DEBIAN_FRONTEND=noninteractive apt-get update -y",
        "sudo env DEBIAN_FRONTEND=noninteractive apt-get install -y git curl",
        "sudo env DEBIAN_FRONTEND=noninteractive apt-get install -y zsh",
    ]
    assert privilege.elevation_calls == 2


def test_apt_as_root_has_no_sudo_prefix(tmp_path: Path) -> None:
    shell = FakeShell()
    backend = AptBackend(shell, FakePrivilegeGate(root=True), sources_dir=tmp_path)

    backend.install(["git"])

    assert shell.commands[-1] == "env DEBIAN_FRONTEND=noninteractive apt-get install -y git"


def test_apt_add_repository_writes_key_and_source(tmp_path: Path) -> None:
    shell = FakeShell()
    backend = AptBackend(shell, FakePrivilegeGate(), sources_dir=tmp_path)

    added = backend.add_repository(REPO)

    assert added is True
    assert len(shell.commands) == 2
    assert "gpg --dearmor" in shell.commands[0]
    assert str(tmp_path / "vendor.list") in shell.commands[1]


def test_apt_add_repository_is_skipped_when_source_matches(tmp_path: Path) -> None:
    shell = FakeShell()
    keyring = Path("/usr/share/keyrings/vendor-archive-keyring.gpg")
    (tmp_path / "vendor.list").write_text(render_source_line(REPO, keyring) + "\n")
    backend = AptBackend(shell, FakePrivilegeGate(), sources_dir=tmp_path)

    assert backend.add_repository(REPO) is False
    assert shell.commands == []


def test_apt_query_reads_dpkg_status() -> None:
    backend = AptBackend(FakeShell(), FakePrivilegeGate())
    installed = subprocess.CompletedProcess([], 0, stdout="install ok installed", stderr="")
    with patch("base_tooling.integrations.packages.apt.subprocess.run", return_value=installed):
        assert backend.query("git") is True

    removed = subprocess.CompletedProcess([], 0, stdout="deinstall ok config-files", stderr="")
    with patch("base_tooling.integrations.packages.apt.subprocess.run", return_value=removed):
        assert backend.query("git") is False


def test_apt_supports_deb_files_only() -> None:
    backend = AptBackend(FakeShell(), FakePrivilegeGate())

    assert backend.supports_file("rancher-desktop_1.14.0_amd64.deb")
    assert not backend.supports_file("rancher-desktop-1.14.0.x86_64.rpm")


def test_dnf_add_repository_downloads_repo_file(tmp_path: Path) -> None:
    shell = FakeShell()
    backend = DnfBackend(shell, FakePrivilegeGate(), repos_dir=tmp_path)

    assert backend.add_repository(REPO) is True
    assert shell.commands[0] == "sudo rpm --import https://example.com/Release.key"
    assert str(tmp_path / "vendor.repo") in shell.commands[1]


def test_dnf_add_repository_is_skipped_when_repo_file_exists(tmp_path: Path) -> None:
    shell = FakeShell()
    (tmp_path / "vendor.repo").write_text("[vendor]\n")
    backend = DnfBackend(shell, FakePrivilegeGate(), repos_dir=tmp_path)

    assert backend.add_repository(REPO) is False
    assert shell.commands == []


def test_dnf_install_file(tmp_path: Path) -> None:
    shell = FakeShell()
    backend = DnfBackend(shell, FakePrivilegeGate(), repos_dir=tmp_path)

    backend.install_file(tmp_path / "pkg.rpm")

    assert shell.commands == [f"sudo dnf install -y {tmp_path / 'pkg.rpm'}"]


def test_brew_installs_without_sudo() -> None:
    shell = FakeShell(installed_tools={"brew": "/opt/homebrew/bin/brew"})
    backend = BrewBackend(shell)

    backend.install(["podman"])

    assert shell.commands == ["/opt/homebrew/bin/brew install podman"]


def test_brew_rejects_vendor_repositories() -> None:
    backend = BrewBackend(FakeShell())

    with pytest.raises(UnsupportedPlatformError):
        backend.add_repository(REPO)


def test_unsupported_backend_refuses_installs() -> None:
    backend = UnsupportedBackend("no supported package manager found")

    assert backend.query("git") is False
    with pytest.raises(UnsupportedPlatformError, match="Cannot install git"):
        backend.install(["git"])
