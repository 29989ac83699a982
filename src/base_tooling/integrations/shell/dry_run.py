"""No-op wrapper for shell operations."""

from collections.abc import Mapping
from pathlib import Path

from base_tooling.cli.output import user_output
from base_tooling.integrations.shell.abc import Shell


def format_dry_run(command: list[str], env: Mapping[str, str] | None = None) -> str:
    """Render a command the way a dry run reports it."""
    prefix = " ".join(f"{key}={value}" for key, value in (env or {}).items())
    rendered = " ".join(command)
    return f"[dry-run] would run: {prefix + ' ' if prefix else ''}{rendered}"


class DryRunShell(Shell):
    """No-op wrapper for shell operations.

    Read operations are delegated to the wrapped implementation.
    Commands are printed instead of executed.
    """

    def __init__(self, wrapped: Shell) -> None:
        self._wrapped = wrapped

    def get_installed_tool_path(self, tool_name: str) -> str | None:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.get_installed_tool_path(tool_name)

    def add_to_path(self, directory: Path) -> None:
        """Delegate: only affects this process."""
        self._wrapped.add_to_path(directory)

    def list_login_shells(self) -> list[str]:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.list_login_shells()

    def run_command(
        self,
        command: list[str],
        *,
        operation: str,
        env: Mapping[str, str] | None = None,
        cwd: Path | None = None,
    ) -> None:
        """Print the command instead of running it."""
        user_output(format_dry_run(command, env))
