"""Application context with dependency injection."""

import os
import platform
from collections.abc import Mapping
from dataclasses import dataclass

from base_tooling.core.config_store import ConfigStore, FilesystemConfigStore
from base_tooling.core.invocation import detect_platform
from base_tooling.core.user_feedback import InteractiveFeedback, SuppressedFeedback, UserFeedback
from base_tooling.integrations.accounts.abc import Accounts
from base_tooling.integrations.accounts.real import RealAccounts
from base_tooling.integrations.git.abc import Git
from base_tooling.integrations.git.dry_run import DryRunGit
from base_tooling.integrations.git.real import RealGit
from base_tooling.integrations.nix.abc import Nix
from base_tooling.integrations.nix.real import RealNix
from base_tooling.integrations.packages.abc import PackageBackend
from base_tooling.integrations.packages.detect import detect_backend
from base_tooling.integrations.packages.unsupported import UnsupportedBackend
from base_tooling.integrations.privilege.abc import PrivilegeGate
from base_tooling.integrations.privilege.dry_run import DryRunPrivilegeGate
from base_tooling.integrations.privilege.real import RealPrivilegeGate
from base_tooling.integrations.releases.abc import Releases
from base_tooling.integrations.releases.dry_run import DryRunReleases
from base_tooling.integrations.releases.real import RealReleases
from base_tooling.integrations.shell.abc import Shell
from base_tooling.integrations.shell.dry_run import DryRunShell
from base_tooling.integrations.shell.real import RealShell


@dataclass(frozen=True)
class BootstrapContext:
    """Immutable context holding all dependencies for bootstrap operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.

    `system` and `machine` are the raw `platform.system()` /
    `platform.machine()` strings; the resolver turns them into a Platform and
    Architecture (and rejects unsupported systems).
    """

    git: Git
    nix: Nix
    packages: PackageBackend
    privilege: PrivilegeGate
    shell: Shell
    releases: Releases
    accounts: Accounts
    config_store: ConfigStore
    feedback: UserFeedback
    system: str
    machine: str
    environ: Mapping[str, str]
    dry_run: bool

    @staticmethod
    def for_test(
        git: Git | None = None,
        nix: Nix | None = None,
        packages: PackageBackend | None = None,
        privilege: PrivilegeGate | None = None,
        shell: Shell | None = None,
        releases: Releases | None = None,
        accounts: Accounts | None = None,
        config_store: ConfigStore | None = None,
        feedback: UserFeedback | None = None,
        system: str = "Linux",
        machine: str = "x86_64",
        environ: Mapping[str, str] | None = None,
        dry_run: bool = False,
    ) -> "BootstrapContext":
        """Create test context with optional pre-configured integration classes.

        Any integration left as None gets an empty fake. The environment
        defaults to an empty mapping so BASE_TOOLING_* variables from the
        developer's shell never leak into tests.

        Example:
            >>> git = FakeGit(checkouts={Path("/home/alice/.base-tooling")})
            >>> ctx = BootstrapContext.for_test(git=git, accounts=FakeAccounts.with_user(...))
        """
        from tests.fakes.accounts import FakeAccounts
        from tests.fakes.feedback import FakeUserFeedback
        from tests.fakes.git import FakeGit
        from tests.fakes.nix import FakeNix
        from tests.fakes.packages import FakePackageBackend
        from tests.fakes.privilege import FakePrivilegeGate
        from tests.fakes.releases import FakeReleases
        from tests.fakes.shell import FakeShell

        from base_tooling.core.config_store import InMemoryConfigStore

        if git is None:
            git = FakeGit()

        if nix is None:
            nix = FakeNix()

        if packages is None:
            packages = FakePackageBackend()

        if privilege is None:
            privilege = FakePrivilegeGate()

        if shell is None:
            shell = FakeShell()

        if releases is None:
            releases = FakeReleases()

        if accounts is None:
            accounts = FakeAccounts()

        if config_store is None:
            config_store = InMemoryConfigStore()

        if feedback is None:
            feedback = FakeUserFeedback()

        return BootstrapContext(
            git=git,
            nix=nix,
            packages=packages,
            privilege=privilege,
            shell=shell,
            releases=releases,
            accounts=accounts,
            config_store=config_store,
            feedback=feedback,
            system=system,
            machine=machine,
            environ=environ if environ is not None else {},
            dry_run=dry_run,
        )


def create_context(*, dry_run: bool, json_mode: bool = False) -> BootstrapContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the entire
    command execution.

    Args:
        dry_run: If True, wrap mutating integrations with dry-run wrappers
                 that print intended actions without executing them
        json_mode: If True, use SuppressedFeedback so stdout/stderr carry only
                   the JSON document and warnings

    Returns:
        BootstrapContext with real implementations, wrapped in dry-run
        wrappers if dry_run=True
    """
    system = platform.system()
    machine = platform.machine()

    shell: Shell = RealShell()
    if dry_run:
        shell = DryRunShell(shell)

    privilege: PrivilegeGate = RealPrivilegeGate(shell)
    git: Git = RealGit()
    releases: Releases = RealReleases()
    if dry_run:
        privilege = DryRunPrivilegeGate(privilege)
        git = DryRunGit(git)
        releases = DryRunReleases(releases)

    # Backends and nix run every mutation through `shell`, so the dry-run
    # shell above already covers them.
    packages: PackageBackend
    if system in ("Darwin", "Linux"):
        packages = detect_backend(detect_platform(system), shell, privilege)
    else:
        packages = UnsupportedBackend(f"unsupported OS: {system}")

    feedback: UserFeedback = SuppressedFeedback() if json_mode else InteractiveFeedback()

    return BootstrapContext(
        git=git,
        nix=RealNix(shell, privilege),
        packages=packages,
        privilege=privilege,
        shell=shell,
        releases=releases,
        accounts=RealAccounts(),
        config_store=FilesystemConfigStore(),
        feedback=feedback,
        system=system,
        machine=machine,
        environ=dict(os.environ),
        dry_run=dry_run,
    )
