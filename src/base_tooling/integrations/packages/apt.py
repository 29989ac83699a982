"""apt backend (Debian, Ubuntu and derivatives)."""

import shlex
import subprocess
from pathlib import Path

from base_tooling.integrations.packages.abc import BackendKind, PackageBackend, VendorRepository
from base_tooling.integrations.privilege.abc import PrivilegeGate
from base_tooling.integrations.shell.abc import Shell

KEYRING_DIR = Path("/usr/share/keyrings")
SOURCES_DIR = Path("/etc/apt/sources.list.d")

_NONINTERACTIVE = {"DEBIAN_FRONTEND": "noninteractive"}


def render_source_line(repository: VendorRepository, keyring: Path) -> str:
    """Render the one-line source entry for a flat vendor repository."""
    return f"deb [signed-by={keyring}] {repository.deb_url} ./"


class AptBackend(PackageBackend):
    """Installs through apt-get; queries through dpkg-query."""

    kind = BackendKind.APT
    file_suffixes = (".deb",)

    def __init__(
        self, shell: Shell, privilege: PrivilegeGate, *, sources_dir: Path = SOURCES_DIR
    ) -> None:
        self._shell = shell
        self._privilege = privilege
        self._sources_dir = sources_dir
        self._index_fresh = False

    def query(self, package: str) -> bool:
        result = subprocess.run(
            ["dpkg-query", "-W", "-f=${Status}", package],
            capture_output=True,
            text=True,
            check=False,
        )
        return result.returncode == 0 and "install ok installed" in result.stdout

    def install(self, packages: list[str]) -> None:
        self._privilege.ensure_elevated()
        self._refresh_index()
        self._shell.run_command(
            [*self._privilege.env_prefix(_NONINTERACTIVE), "apt-get", "install", "-y", *packages],
            operation=f"install {', '.join(packages)} with apt-get",
        )

    def add_repository(self, repository: VendorRepository) -> bool:
        keyring = KEYRING_DIR / f"{repository.name}-archive-keyring.gpg"
        source_file = self._sources_dir / f"{repository.name}.list"
        line = render_source_line(repository, keyring)

        if source_file.exists() and source_file.read_text(encoding="utf-8").strip() == line:
            return False

        self._privilege.ensure_elevated()
        prefix = self._privilege.command_prefix()
        self._shell.run_command(
            [
                *prefix,
                "sh",
                "-c",
                f"curl -fsSL {shlex.quote(repository.key_url)}"
                f" | gpg --dearmor --yes -o {shlex.quote(str(keyring))}",
            ],
            operation=f"import signing key for {repository.name}",
        )
        self._shell.run_command(
            [*prefix, "sh", "-c", f"echo {shlex.quote(line)} > {shlex.quote(str(source_file))}"],
            operation=f"write apt source for {repository.name}",
        )
        self._index_fresh = False
        return True

    def install_file(self, path: Path) -> None:
        self._privilege.ensure_elevated()
        self._refresh_index()
        self._shell.run_command(
            [*self._privilege.env_prefix(_NONINTERACTIVE), "apt-get", "install", "-y", str(path)],
            operation=f"install {path.name} with apt-get",
        )

    def _refresh_index(self) -> None:
        if self._index_fresh:
            return
        self._shell.run_command(
            [*self._privilege.env_prefix(_NONINTERACTIVE), "apt-get", "update", "-y"],
            operation="refresh apt package index",
        )
        self._index_fresh = True
