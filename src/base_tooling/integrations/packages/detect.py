"""Resolve the host's package backend once at startup."""

from base_tooling.core.invocation import Platform
from base_tooling.integrations.packages.abc import PackageBackend
from base_tooling.integrations.packages.apt import AptBackend
from base_tooling.integrations.packages.brew import BrewBackend
from base_tooling.integrations.packages.dnf import DnfBackend
from base_tooling.integrations.packages.unsupported import UnsupportedBackend
from base_tooling.integrations.privilege.abc import PrivilegeGate
from base_tooling.integrations.shell.abc import Shell


def detect_backend(platform: Platform, shell: Shell, privilege: PrivilegeGate) -> PackageBackend:
    """Pick the package backend for this host.

    macOS always gets Homebrew (installed later by the dependency step if it
    is missing). On Linux apt-get wins over dnf; a host with neither resolves
    to UnsupportedBackend, which only fails once something must be installed.
    """
    if platform is Platform.MACOS:
        return BrewBackend(shell)

    if shell.get_installed_tool_path("apt-get") is not None:
        return AptBackend(shell, privilege)
    if shell.get_installed_tool_path("dnf") is not None:
        return DnfBackend(shell, privilege)
    return UnsupportedBackend("no supported package manager found (need apt-get or dnf)")
