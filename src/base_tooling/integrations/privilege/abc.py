"""Privilege gate interface.

One PrivilegeGate lives in the application context and is shared by every
step that needs root. ensure_elevated() establishes cached sudo credentials
the first time it is called and is a no-op afterwards, so a run prompts at
most once.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping


class PrivilegeGate(ABC):
    """Abstract interface for obtaining and using elevated privileges."""

    @abstractmethod
    def is_root(self) -> bool:
        """Return True if the process already runs with uid 0."""
        ...

    @abstractmethod
    def ensure_elevated(self) -> None:
        """Make sure elevated commands can run without further prompts.

        Raises:
            MissingDependencyError: If no elevation mechanism (sudo) exists
            PrivilegeError: If the credential prompt fails
        """
        ...

    def command_prefix(self) -> list[str]:
        """Prefix that runs a command as root."""
        if self.is_root():
            return []
        return ["sudo"]

    def env_prefix(self, env: Mapping[str, str]) -> list[str]:
        """Prefix that runs a command as root with `env` passed through explicitly.

        sudo does not forward arbitrary variables, so they are set on the far
        side of the elevation with env(1).
        """
        assignments = [f"{key}={value}" for key, value in env.items()]
        return [*self.command_prefix(), "env", *assignments]

    def as_user_prefix(self, username: str, env: Mapping[str, str]) -> list[str]:
        """Prefix that runs a command as `username` with `env` passed through."""
        assignments = [f"{key}={value}" for key, value in env.items()]
        return ["sudo", "-u", username, "-H", "env", *assignments]
