"""Account database lookups.

Resolving the target user's home directory, uid/gid and login shell is the one
place the resolver touches the operating system's account database. Keeping it
behind an interface lets tests resolve invented users without /etc/passwd.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Account:
    """A local user account."""

    name: str
    uid: int
    gid: int
    home: Path
    shell: str


class Accounts(ABC):
    """Abstract interface for account database operations."""

    @abstractmethod
    def lookup(self, username: str) -> Account | None:
        """Look up an account by name.

        Returns:
            The account, or None if no such account exists
        """
        ...

    @abstractmethod
    def current(self) -> Account:
        """Return the account of the invoking (effective) user."""
        ...
