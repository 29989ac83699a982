"""Production Nix implementation."""

import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path

from base_tooling.integrations.nix.abc import NIX_INSTALLER_URL, Nix, nix_bin_dirs
from base_tooling.integrations.privilege.abc import PrivilegeGate
from base_tooling.integrations.shell.abc import Shell

logger = logging.getLogger(__name__)

# Newer home-manager calls `nix profile add`, which older Nix only knows as
# `nix profile install`.
PROFILE_ADD_SHIM = """#!/usr/bin/env bash
set -euo pipefail

if [[ "${{1:-}}" == "profile" && "${{2:-}}" == "add" ]]; then
  shift 2
  exec "{real_nix}" profile install "$@"
fi

exec "{real_nix}" "$@"
"""


def render_profile_add_shim(real_nix: Path) -> str:
    return PROFILE_ADD_SHIM.format(real_nix=real_nix)


class RealNix(Nix):
    """Runs nix through the Shell integration so output streams to the terminal."""

    def __init__(self, shell: Shell, privilege: PrivilegeGate) -> None:
        self._shell = shell
        self._privilege = privilege

    def locate(self, home: Path) -> Path | None:
        on_path = self._shell.get_installed_tool_path("nix")
        if on_path is not None:
            return Path(on_path)
        for bin_dir in nix_bin_dirs(home):
            candidate = bin_dir / "nix"
            if candidate.exists() and os.access(candidate, os.X_OK):
                logger.debug("Found nix outside PATH at %s", candidate)
                self._shell.add_to_path(bin_dir)
                return candidate
        return None

    def install(self) -> None:
        self._shell.run_command(
            ["sh", "-c", f"curl -fsSL {NIX_INSTALLER_URL} | sh -s -- --daemon --yes"],
            operation="install Nix",
        )

    def build_darwin_system(self, flake_dir: Path, target: str, env: Mapping[str, str]) -> Path:
        result = flake_dir / "result"
        self._shell.run_command(
            [
                "nix",
                "build",
                "--impure",
                f"{flake_dir}#darwinConfigurations.{target}.system",
                "--out-link",
                str(result),
                "-L",
            ],
            operation=f"build darwin configuration '{target}'",
            env=env,
        )
        return result

    def switch_darwin(
        self, result: Path, flake_dir: Path, target: str, env: Mapping[str, str]
    ) -> None:
        self._shell.run_command(
            [
                *self._privilege.env_prefix(env),
                str(result / "sw" / "bin" / "darwin-rebuild"),
                "switch",
                "--impure",
                "--flake",
                f"{flake_dir}#{target}",
            ],
            operation=f"activate darwin configuration '{target}'",
        )

    def switch_home(
        self,
        flake_ref: str,
        env: Mapping[str, str],
        *,
        run_as: str | None,
        home_manager_flake: str,
        backup_extension: str,
    ) -> None:
        real_nix = self._shell.get_installed_tool_path("nix")
        command = [
            "nix",
            "run",
            home_manager_flake,
            "--",
            "switch",
            "-b",
            backup_extension,
            "--impure",
            "--flake",
            flake_ref,
        ]

        with tempfile.TemporaryDirectory(prefix="base-tooling-nixshim-") as tmp:
            run_env = dict(env)
            if real_nix is not None:
                shim_dir = Path(tmp)
                shim = shim_dir / "nix"
                shim.write_text(render_profile_add_shim(Path(real_nix)), encoding="utf-8")
                shim.chmod(0o755)
                # the target user must be able to traverse into the shim directory
                shim_dir.chmod(0o755)
                run_env["PATH"] = f"{shim_dir}{os.pathsep}{os.environ.get('PATH', '')}"

            if run_as is not None:
                self._shell.run_command(
                    [*self._privilege.as_user_prefix(run_as, run_env), *command],
                    operation=f"activate home configuration {flake_ref}",
                )
            else:
                self._shell.run_command(
                    command,
                    operation=f"activate home configuration {flake_ref}",
                    env=run_env,
                )
