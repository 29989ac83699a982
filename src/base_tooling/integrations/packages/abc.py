"""Native package manager backends.

The host's package manager is resolved once at startup into one of a closed
set of backends (apt, dnf, brew, or the unsupported placeholder) and every
later step dispatches through the same small capability interface instead of
probing for package managers again.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import ClassVar


class BackendKind(StrEnum):
    APT = "apt"
    DNF = "dnf"
    BREW = "brew"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class VendorRepository:
    """A third-party package repository (signing key plus source entry).

    Attributes:
        name: File stem used for the keyring / source list / repo file
        key_url: URL of the ASCII-armoured signing key
        deb_url: Base URL of the apt repository (flat layout, `./` suite)
        rpm_repo_url: URL of a ready-made `.repo` file for dnf
    """

    name: str
    key_url: str
    deb_url: str
    rpm_repo_url: str


class PackageBackend(ABC):
    """Abstract interface for a native package manager.

    Implementations route mutating commands through the Shell integration so
    that a dry run prints them instead of executing them.
    """

    kind: ClassVar[BackendKind]
    file_suffixes: ClassVar[tuple[str, ...]] = ()

    @abstractmethod
    def query(self, package: str) -> bool:
        """Return True if `package` is installed."""
        ...

    @abstractmethod
    def install(self, packages: list[str]) -> None:
        """Install packages (no-op for already installed ones).

        Raises:
            UnsupportedPlatformError: If this backend cannot install anything
            RuntimeError: If the package manager fails
        """
        ...

    @abstractmethod
    def add_repository(self, repository: VendorRepository) -> bool:
        """Register a vendor repository.

        Returns:
            True if the repository was added, False if it was already present
        """
        ...

    @abstractmethod
    def install_file(self, path: Path) -> None:
        """Install a downloaded package file (.deb / .rpm)."""
        ...

    def supports_file(self, filename: str) -> bool:
        """Return True if install_file() accepts files named like `filename`."""
        return filename.endswith(self.file_suffixes) if self.file_suffixes else False
