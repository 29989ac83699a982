"""Tests for the shell, privilege and dry-run wrappers."""

import os
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from base_tooling.core.errors import MissingDependencyError, PrivilegeError
from base_tooling.integrations.git.dry_run import DryRunGit
from base_tooling.integrations.privilege.dry_run import DryRunPrivilegeGate
from base_tooling.integrations.privilege.real import RealPrivilegeGate
from base_tooling.integrations.shell.dry_run import DryRunShell, format_dry_run
from base_tooling.integrations.shell.real import RealShell
from tests.fakes.git import FakeGit
from tests.fakes.privilege import FakePrivilegeGate
from tests.fakes.shell import FakeShell


def test_format_dry_run_includes_env() -> None:
    assert (
        format_dry_run(["apt-get", "install", "-y", "git"], {"DEBIAN_FRONTEND": "noninteractive"})
        == "[dry-run] would run: DEBIAN_FRONTEND=noninteractive apt-get install -y git"
    )
    assert format_dry_run(["chsh", "-s", "/usr/bin/zsh"]) == (
        "[dry-run] would run: chsh -s /usr/bin/zsh"
    )


def test_dry_run_shell_prints_instead_of_running(capsys) -> None:
    wrapped = FakeShell(installed_tools={"git": "/usr/bin/git"})
    shell = DryRunShell(wrapped)

    shell.run_command(["sudo", "chsh", "-s", "/usr/bin/zsh", "alice"], operation="chsh")

    assert wrapped.commands == []
    assert shell.get_installed_tool_path("git") == "/usr/bin/git"
    assert "would run: sudo chsh -s /usr/bin/zsh alice" in capsys.readouterr().err


def test_dry_run_git_never_clones(tmp_path: Path, capsys) -> None:
    wrapped = FakeGit()

    DryRunGit(wrapped).clone("https://example.com/cfg.git", tmp_path / "cfg")

    assert wrapped.cloned == []
    assert not (tmp_path / "cfg").exists()
    assert "git clone https://example.com/cfg.git" in capsys.readouterr().err


def test_dry_run_privilege_never_prompts() -> None:
    wrapped = FakePrivilegeGate(reject=True)

    DryRunPrivilegeGate(wrapped).ensure_elevated()

    assert wrapped.elevation_calls == 0


def test_privilege_prefixes() -> None:
    gate = FakePrivilegeGate()

    assert gate.command_prefix() == ["sudo"]
    assert gate.env_prefix({"A": "1"}) == ["sudo", "env", "A=1"]
    assert gate.as_user_prefix("bob", {"A": "1"}) == ["sudo", "-u", "bob", "-H", "env", "A=1"]
    assert FakePrivilegeGate(root=True).env_prefix({"A": "1"}) == ["env", "A=1"]


def test_real_privilege_without_sudo_is_missing_dependency() -> None:
    gate = RealPrivilegeGate(FakeShell())

    with patch("base_tooling.integrations.privilege.real.os.geteuid", return_value=1000):
        with pytest.raises(MissingDependencyError):
            gate.ensure_elevated()


def test_real_privilege_prompts_once() -> None:
    gate = RealPrivilegeGate(FakeShell(installed_tools={"sudo": "/usr/bin/sudo"}))
    results = [subprocess.CompletedProcess([], 1), subprocess.CompletedProcess([], 0)]

    with (
        patch("base_tooling.integrations.privilege.real.os.geteuid", return_value=1000),
        patch(
            "base_tooling.integrations.privilege.real.subprocess.run", side_effect=results
        ) as mock_run,
    ):
        gate.ensure_elevated()
        gate.ensure_elevated()

    assert [c.args[0] for c in mock_run.call_args_list] == [
        ["sudo", "-n", "true"],
        ["sudo", "-v"],
    ]


def test_real_privilege_rejected_prompt() -> None:
    gate = RealPrivilegeGate(FakeShell(installed_tools={"sudo": "/usr/bin/sudo"}))

    with (
        patch("base_tooling.integrations.privilege.real.os.geteuid", return_value=1000),
        patch(
            "base_tooling.integrations.privilege.real.subprocess.run",
            return_value=subprocess.CompletedProcess([], 1),
        ),
    ):
        with pytest.raises(PrivilegeError):
            gate.ensure_elevated()


def test_real_shell_add_to_path_prepends_once(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PATH", "/usr/bin:/bin")
    shell = RealShell()

    shell.add_to_path(Path("/opt/homebrew/bin"))
    shell.add_to_path(Path("/opt/homebrew/bin"))

    assert os.environ["PATH"] == "/opt/homebrew/bin:/usr/bin:/bin"


def test_real_shell_run_command_layers_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", "/home/alice")

    with patch("base_tooling.integrations.shell.real.run_subprocess_with_context") as mock_run:
        RealShell().run_command(["true"], operation="run true", env={"NONINTERACTIVE": "1"})

    kwargs = mock_run.call_args.kwargs
    assert kwargs["capture_output"] is False
    assert kwargs["env"]["NONINTERACTIVE"] == "1"
    assert kwargs["env"]["HOME"] == "/home/alice"
