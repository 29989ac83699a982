"""Placeholder backend for hosts without a supported package manager."""

from pathlib import Path

from base_tooling.core.errors import UnsupportedPlatformError
from base_tooling.integrations.packages.abc import BackendKind, PackageBackend, VendorRepository


class UnsupportedBackend(PackageBackend):
    """Reports nothing installed and refuses every install.

    Resolving to this backend is not an error by itself: a host that already
    has every dependency never needs to install anything.
    """

    kind = BackendKind.UNSUPPORTED

    def __init__(self, reason: str) -> None:
        self._reason = reason

    def query(self, package: str) -> bool:
        return False

    def install(self, packages: list[str]) -> None:
        raise UnsupportedPlatformError(
            f"Cannot install {', '.join(packages)}: {self._reason}",
            hint="Install the packages manually (apt-get or dnf are supported) and re-run.",
        )

    def add_repository(self, repository: VendorRepository) -> bool:
        raise UnsupportedPlatformError(
            f"Cannot add repository '{repository.name}': {self._reason}"
        )

    def install_file(self, path: Path) -> None:
        raise UnsupportedPlatformError(f"Cannot install {path.name}: {self._reason}")
