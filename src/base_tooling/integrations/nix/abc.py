"""Nix operations interface.

Nix is an external collaborator: this interface only covers locating and
installing it and invoking the two activation paths (nix-darwin system
switch, home-manager switch). Whatever the flake builds is opaque here.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path

NIX_INSTALLER_URL = "https://nixos.org/nix/install"
DEFAULT_HOME_MANAGER_FLAKE = "github:nix-community/home-manager"


def nix_bin_dirs(home: Path) -> list[Path]:
    """Directories a Nix installation puts its binaries in, in lookup order."""
    return [
        Path("/nix/var/nix/profiles/default/bin"),
        home / ".nix-profile" / "bin",
        Path("/run/current-system/sw/bin"),
    ]


class Nix(ABC):
    """Abstract interface for Nix operations."""

    @abstractmethod
    def locate(self, home: Path) -> Path | None:
        """Find the nix binary on PATH or in the standard profile locations.

        When found outside PATH its directory is added to PATH for the rest of
        the run, the way sourcing nix-daemon.sh would.
        """
        ...

    @abstractmethod
    def install(self) -> None:
        """Run the official multi-user (daemon) installer."""
        ...

    @abstractmethod
    def build_darwin_system(self, flake_dir: Path, target: str, env: Mapping[str, str]) -> Path:
        """Build `darwinConfigurations.<target>.system` as the invoking user.

        Returns:
            Path of the `result` out-link

        Raises:
            RuntimeError: If the build fails
        """
        ...

    @abstractmethod
    def switch_darwin(
        self, result: Path, flake_dir: Path, target: str, env: Mapping[str, str]
    ) -> None:
        """Run `darwin-rebuild switch` from a built result as root.

        `env` is passed through the elevation explicitly.

        Raises:
            RuntimeError: If activation fails
        """
        ...

    @abstractmethod
    def switch_home(
        self,
        flake_ref: str,
        env: Mapping[str, str],
        *,
        run_as: str | None,
        home_manager_flake: str,
        backup_extension: str,
    ) -> None:
        """Run `home-manager switch` for a flake output.

        Args:
            flake_ref: `<dir>#<user>@linux`
            env: Variables the flake evaluation needs (BASE_TOOLING_USER)
            run_as: Run as this user through sudo, or None for the invoking user
            home_manager_flake: Flake providing the home-manager CLI
            backup_extension: Suffix for pre-existing unmanaged files

        Raises:
            RuntimeError: If activation fails
        """
        ...
