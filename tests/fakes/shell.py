"""Fake implementation of Shell for testing.

This fake enables testing PATH probing and interactive commands without
touching the host: tools exist only if they were configured, and commands are
recorded instead of executed.
"""

from collections.abc import Mapping
from pathlib import Path

from base_tooling.integrations.shell.abc import Shell


class FakeShell(Shell):
    """In-memory fake implementation of shell operations.

    Examples:
        # Test with git and curl installed
        >>> shell = FakeShell(installed_tools={"git": "/usr/bin/git", "curl": "/usr/bin/curl"})
        >>> shell.get_installed_tool_path("git")
        '/usr/bin/git'

        # Make every command containing "darwin-rebuild" fail
        >>> shell = FakeShell(fail_on="darwin-rebuild")
    """

    def __init__(
        self,
        *,
        installed_tools: dict[str, str] | None = None,
        login_shells: list[str] | None = None,
        fail_on: str | None = None,
    ) -> None:
        """Initialize fake with predetermined tool availability.

        Args:
            installed_tools: Mapping of tool name to executable path. Tools not in
                this mapping will return None from get_installed_tool_path()
            login_shells: Contents of /etc/shells
            fail_on: run_command() raises RuntimeError for any command whose
                joined text contains this substring
        """
        self._installed_tools = dict(installed_tools or {})
        self._login_shells = list(login_shells or [])
        self._fail_on = fail_on
        self._command_calls: list[tuple[list[str], dict[str, str] | None]] = []
        self._path_additions: list[Path] = []

    def get_installed_tool_path(self, tool_name: str) -> str | None:
        return self._installed_tools.get(tool_name)

    def add_to_path(self, directory: Path) -> None:
        self._path_additions.append(directory)

    def list_login_shells(self) -> list[str]:
        return list(self._login_shells)

    def run_command(
        self,
        command: list[str],
        *,
        operation: str,
        env: Mapping[str, str] | None = None,
        cwd: Path | None = None,
    ) -> None:
        self._command_calls.append((list(command), dict(env) if env is not None else None))
        if self._fail_on is not None and self._fail_on in " ".join(command):
            raise RuntimeError(f"Failed to {operation}\nCommand: {' '.join(command)}\nExit code: 1")

    def register_tool(self, tool_name: str, path: str) -> None:
        """Make a tool appear on PATH (used by fakes that 'install' things)."""
        self._installed_tools[tool_name] = path

    @property
    def command_calls(self) -> list[tuple[list[str], dict[str, str] | None]]:
        """Get the list of run_command() calls that were made.

        Returns list of (command, env) tuples.

        This property is for test assertions only.
        """
        return self._command_calls.copy()

    @property
    def commands(self) -> list[str]:
        """run_command() calls rendered as single strings."""
        return [" ".join(command) for command, _ in self._command_calls]

    @property
    def path_additions(self) -> list[Path]:
        return self._path_additions.copy()
