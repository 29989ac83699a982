"""Production Shell implementation."""

import os
import shutil
from collections.abc import Mapping
from pathlib import Path

from base_tooling.core.subprocess import run_subprocess_with_context
from base_tooling.integrations.shell.abc import Shell

ETC_SHELLS = Path("/etc/shells")


class RealShell(Shell):
    """Shell operations against the live host."""

    def get_installed_tool_path(self, tool_name: str) -> str | None:
        return shutil.which(tool_name)

    def add_to_path(self, directory: Path) -> None:
        current = os.environ.get("PATH", "")
        entries = current.split(os.pathsep) if current else []
        if str(directory) in entries:
            return
        os.environ["PATH"] = os.pathsep.join([str(directory), *entries])

    def list_login_shells(self) -> list[str]:
        if not ETC_SHELLS.exists():
            return []
        shells: list[str] = []
        for line in ETC_SHELLS.read_text(encoding="utf-8").splitlines():
            stripped = line.strip()
            if stripped and not stripped.startswith("#"):
                shells.append(stripped)
        return shells

    def run_command(
        self,
        command: list[str],
        *,
        operation: str,
        env: Mapping[str, str] | None = None,
        cwd: Path | None = None,
    ) -> None:
        full_env = None
        if env is not None:
            full_env = {**os.environ, **env}
        run_subprocess_with_context(
            command,
            operation_context=operation,
            cwd=cwd,
            capture_output=False,
            env=full_env,
        )
