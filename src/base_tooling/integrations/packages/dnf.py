"""dnf backend (Fedora, RHEL and derivatives)."""

import shlex
import subprocess
from pathlib import Path

from base_tooling.integrations.packages.abc import BackendKind, PackageBackend, VendorRepository
from base_tooling.integrations.privilege.abc import PrivilegeGate
from base_tooling.integrations.shell.abc import Shell

REPOS_DIR = Path("/etc/yum.repos.d")


class DnfBackend(PackageBackend):
    """Installs through dnf; queries through rpm."""

    kind = BackendKind.DNF
    file_suffixes = (".rpm",)

    def __init__(
        self, shell: Shell, privilege: PrivilegeGate, *, repos_dir: Path = REPOS_DIR
    ) -> None:
        self._shell = shell
        self._privilege = privilege
        self._repos_dir = repos_dir

    def query(self, package: str) -> bool:
        result = subprocess.run(["rpm", "-q", package], capture_output=True, check=False)
        return result.returncode == 0

    def install(self, packages: list[str]) -> None:
        self._privilege.ensure_elevated()
        self._shell.run_command(
            [*self._privilege.command_prefix(), "dnf", "install", "-y", *packages],
            operation=f"install {', '.join(packages)} with dnf",
        )

    def add_repository(self, repository: VendorRepository) -> bool:
        # dnf4 and dnf5 disagree on config-manager syntax; a .repo file works for both
        repo_file = self._repos_dir / f"{repository.name}.repo"
        if repo_file.exists():
            return False

        self._privilege.ensure_elevated()
        prefix = self._privilege.command_prefix()
        self._shell.run_command(
            [*prefix, "rpm", "--import", repository.key_url],
            operation=f"import signing key for {repository.name}",
        )
        self._shell.run_command(
            [
                *prefix,
                "sh",
                "-c",
                f"curl -fsSL {shlex.quote(repository.rpm_repo_url)}"
                f" -o {shlex.quote(str(repo_file))}",
            ],
            operation=f"write dnf repository for {repository.name}",
        )
        return True

    def install_file(self, path: Path) -> None:
        self._privilege.ensure_elevated()
        self._shell.run_command(
            [*self._privilege.command_prefix(), "dnf", "install", "-y", str(path)],
            operation=f"install {path.name} with dnf",
        )
