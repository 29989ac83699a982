"""Homebrew backend (macOS)."""

import subprocess
from pathlib import Path

from base_tooling.core.errors import PrerequisiteError, UnsupportedPlatformError
from base_tooling.integrations.packages.abc import BackendKind, PackageBackend, VendorRepository
from base_tooling.integrations.shell.abc import Shell

# Apple Silicon prefix first, then Intel
BREW_LOCATIONS = (Path("/opt/homebrew/bin/brew"), Path("/usr/local/bin/brew"))


def find_brew(shell: Shell) -> Path | None:
    """Locate the brew binary on PATH or in its standard prefixes."""
    on_path = shell.get_installed_tool_path("brew")
    if on_path is not None:
        return Path(on_path)
    for candidate in BREW_LOCATIONS:
        if candidate.exists():
            return candidate
    return None


class BrewBackend(PackageBackend):
    """Installs through brew as the invoking user (never through sudo).

    brew may not exist yet when the backend is resolved on a fresh machine, so
    the binary is located on every call.
    """

    kind = BackendKind.BREW

    def __init__(self, shell: Shell) -> None:
        self._shell = shell

    def query(self, package: str) -> bool:
        brew = find_brew(self._shell)
        if brew is None:
            return False
        result = subprocess.run([str(brew), "list", package], capture_output=True, check=False)
        return result.returncode == 0

    def install(self, packages: list[str]) -> None:
        brew = find_brew(self._shell)
        if brew is None:
            raise PrerequisiteError("Homebrew is not installed")
        self._shell.run_command(
            [str(brew), "install", *packages],
            operation=f"install {', '.join(packages)} with brew",
        )

    def add_repository(self, repository: VendorRepository) -> bool:
        raise UnsupportedPlatformError(
            f"Vendor repository '{repository.name}' cannot be added to Homebrew"
        )

    def install_file(self, path: Path) -> None:
        raise UnsupportedPlatformError(f"Homebrew cannot install package file {path.name}")
