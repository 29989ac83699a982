"""Shell / PATH operations interface.

Covers the small set of host interactions that are not owned by a more
specific integration: probing PATH for tools, extending PATH for the rest of
the run, reading /etc/shells and running interactive commands (installers,
chsh) whose output goes straight to the terminal.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path


class Shell(ABC):
    """Abstract interface for shell and PATH operations."""

    @abstractmethod
    def get_installed_tool_path(self, tool_name: str) -> str | None:
        """Return the absolute path of a tool on PATH, or None if absent."""
        ...

    @abstractmethod
    def add_to_path(self, directory: Path) -> None:
        """Prepend a directory to PATH for this process and its children."""
        ...

    @abstractmethod
    def list_login_shells(self) -> list[str]:
        """Return the shells listed in /etc/shells (comments stripped)."""
        ...

    @abstractmethod
    def run_command(
        self,
        command: list[str],
        *,
        operation: str,
        env: Mapping[str, str] | None = None,
        cwd: Path | None = None,
    ) -> None:
        """Run an interactive command, streaming its output.

        Args:
            command: Command and arguments
            operation: Human-readable description used in error messages
            env: Extra environment variables layered over the current environment
            cwd: Working directory

        Raises:
            RuntimeError: If the command fails or is not found
        """
        ...
