"""Tests for the production Nix integration, driven through a fake shell."""

from pathlib import Path

import pytest

from base_tooling.integrations.nix.real import RealNix, render_profile_add_shim
from tests.fakes.privilege import FakePrivilegeGate
from tests.fakes.shell import FakeShell


def test_locate_prefers_path() -> None:
    shell = FakeShell(installed_tools={"nix": "/usr/bin/nix"})

    assert RealNix(shell, FakePrivilegeGate()).locate(Path("/home/alice")) == Path("/usr/bin/nix")
    assert shell.path_additions == []


def test_locate_finds_user_profile_and_extends_path(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    bin_dir = tmp_path / ".nix-profile" / "bin"
    bin_dir.mkdir(parents=True)
    nix = bin_dir / "nix"
    nix.write_text("#!/bin/sh\n")
    nix.chmod(0o755)
    shell = FakeShell()
    monkeypatch.setattr(
        "base_tooling.integrations.nix.real.nix_bin_dirs",
        lambda home: [home / ".nix-profile" / "bin"],
    )

    found = RealNix(shell, FakePrivilegeGate()).locate(tmp_path)

    assert found == nix
    assert shell.path_additions == [bin_dir]


def test_install_uses_daemon_installer() -> None:
    shell = FakeShell()

    RealNix(shell, FakePrivilegeGate()).install()

    assert shell.commands == [
        "sh -c curl -fsSL https://nixos.org/nix/install | sh -s -- --daemon --yes"
    ]


def test_darwin_build_then_switch_passes_user_through_sudo() -> None:
    shell = FakeShell()
    nix = RealNix(shell, FakePrivilegeGate())
    env = {"BASE_TOOLING_USER": "alice"}
    flake = Path("/Users/alice/.base-tooling")

    result = nix.build_darwin_system(flake, "default", env)
    nix.switch_darwin(result, flake, "default", env)

    build, switch = shell.command_calls
    assert build[0][:3] == ["nix", "build", "--impure"]
    assert f"{flake}#darwinConfigurations.default.system" in build[0]
    assert build[1] == env
    assert switch[0][:3] == ["sudo", "env", "BASE_TOOLING_USER=alice"]
    assert switch[0][3] == str(flake / "result" / "sw" / "bin" / "darwin-rebuild")
    assert switch[0][-2:] == ["--flake", f"{flake}#default"]


def test_home_switch_for_current_user_puts_shim_first_on_path() -> None:
    shell = FakeShell(installed_tools={"nix": "/nix/var/nix/profiles/default/bin/nix"})

    RealNix(shell, FakePrivilegeGate()).switch_home(
        "/home/alice/.base-tooling#alice@linux",
        {"BASE_TOOLING_USER": "alice"},
        run_as=None,
        home_manager_flake="github:nix-community/home-manager",
        backup_extension="before-hm",
    )

    command, env = shell.command_calls[0]
    assert command == [
        "nix",
        "run",
        "github:nix-community/home-manager",
        "--",
        "switch",
        "-b",
        "before-hm",
        "--impure",
        "--flake",
        "/home/alice/.base-tooling#alice@linux",
    ]
    assert env is not None
    assert env["BASE_TOOLING_USER"] == "alice"
    assert "base-tooling-nixshim-" in env["PATH"].split(":")[0]


def test_home_switch_for_other_user_runs_through_sudo() -> None:
    shell = FakeShell()

    RealNix(shell, FakePrivilegeGate()).switch_home(
        "/home/bob/.base-tooling#bob@linux",
        {"BASE_TOOLING_USER": "bob"},
        run_as="bob",
        home_manager_flake="github:nix-community/home-manager",
        backup_extension="before-hm",
    )

    command, env = shell.command_calls[0]
    assert command[:6] == ["sudo", "-u", "bob", "-H", "env", "BASE_TOOLING_USER=bob"]
    assert env is None


def test_profile_add_shim_rewrites_only_profile_add() -> None:
    shim = render_profile_add_shim(Path("/nix/bin/nix"))

    assert 'if [[ "${1:-}" == "profile" && "${2:-}" == "add" ]]; then' in shim
    assert 'exec "/nix/bin/nix" profile install "$@"' in shim
    assert shim.rstrip().endswith('exec "/nix/bin/nix" "$@"')
