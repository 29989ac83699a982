"""Optional Component Installer: Rancher Desktop.

Best effort by construction: the step runs with WARN_AND_CONTINUE, so any
failure in here ends up as a warning in the run summary. The strategy depends
on platform and architecture:

- macOS: the nix-darwin configuration installs the Homebrew cask; this step
  only makes sure Homebrew is there for it.
- Linux x86_64: vendor repository plus the native package.
- Linux on anything else: the newest upstream release asset for this
  architecture (native package or AppImage), else podman as a stand-in.
"""

import logging
import tempfile
from pathlib import Path

from base_tooling.core.errors import OptionalComponentWarning
from base_tooling.core.invocation import Architecture, Platform
from base_tooling.core.reconcile.files import ensure_parent_dirs, hand_over
from base_tooling.integrations.packages.abc import BackendKind, PackageBackend, VendorRepository
from base_tooling.integrations.packages.brew import find_brew
from base_tooling.integrations.releases.abc import ReleaseAsset
from base_tooling.pipeline.step import (
    StepContext,
    StepResult,
    StepStatus,
    changed,
    skipped,
    unchanged,
)

logger = logging.getLogger(__name__)

PACKAGE_NAME = "rancher-desktop"
FALLBACK_PACKAGE = "podman"
RELEASES_REPO = "rancher-sandbox/rancher-desktop"
APPIMAGE_SUFFIX = ".AppImage"

_OBS_ROOT = "https://download.opensuse.org/repositories/isv:/Rancher:/stable"
RANCHER_REPOSITORY = VendorRepository(
    name="isv-rancher-stable",
    key_url=f"{_OBS_ROOT}/deb/Release.key",
    deb_url=f"{_OBS_ROOT}/deb/",
    rpm_repo_url=f"{_OBS_ROOT}/rpm/isv:Rancher:stable.repo",
)

_ARCH_TOKENS: dict[str, tuple[str, ...]] = {
    Architecture.X86_64: ("x86_64", "amd64"),
    Architecture.AARCH64: ("aarch64", "arm64"),
}


def appimage_path(home: Path) -> Path:
    return home / ".local" / "bin" / f"{PACKAGE_NAME}{APPIMAGE_SUFFIX}"


def arch_tokens(arch: Architecture | str) -> tuple[str, ...]:
    """Substrings that identify `arch` in a release asset name."""
    return _ARCH_TOKENS.get(arch, (str(arch).lower(),))


def select_asset(
    assets: tuple[ReleaseAsset, ...], arch: Architecture | str, backend: PackageBackend
) -> ReleaseAsset | None:
    """Pick the release asset to install for this host.

    A native package the backend can install wins over an AppImage; assets
    whose name does not carry an architecture token are never picked.
    """
    tokens = arch_tokens(arch)
    for_arch = [a for a in assets if any(token in a.name.lower() for token in tokens)]

    for asset in for_arch:
        if backend.supports_file(asset.name):
            return asset
    for asset in for_arch:
        if asset.name.endswith(APPIMAGE_SUFFIX):
            return asset
    return None


def is_installed(run: StepContext) -> bool:
    if run.ctx.packages.query(PACKAGE_NAME):
        return True
    if run.ctx.shell.get_installed_tool_path(PACKAGE_NAME) is not None:
        return True
    return appimage_path(run.invocation.home).exists()


def _install_macos(run: StepContext) -> StepResult:
    if find_brew(run.ctx.shell) is None:
        raise OptionalComponentWarning(
            "Homebrew not found; the nix-darwin cask cannot install Rancher Desktop"
        )
    return skipped("installed by the nix-darwin Homebrew cask")


def _install_from_vendor_repository(run: StepContext) -> StepResult:
    backend = run.ctx.packages
    added = backend.add_repository(RANCHER_REPOSITORY)
    backend.install([PACKAGE_NAME])
    source = "added vendor repository, " if added else ""
    return changed(f"{source}installed {PACKAGE_NAME}")


def _install_appimage(run: StepContext, asset: ReleaseAsset) -> StepResult:
    destination = appimage_path(run.invocation.home)
    if run.ctx.dry_run:
        run.ctx.releases.download(asset, destination)
        return changed(f"installed {asset.name} to {destination}")

    account = run.invocation.account
    ensure_parent_dirs(destination, account)
    run.ctx.releases.download(asset, destination)
    destination.chmod(0o755)
    hand_over(destination, account)
    return changed(f"installed {asset.name} to {destination}")


def _install_from_release(run: StepContext) -> StepResult:
    backend = run.ctx.packages
    release = run.ctx.releases.latest_release(RELEASES_REPO)
    asset = select_asset(release.assets, run.invocation.arch, backend)

    if asset is not None:
        logger.debug("Selected asset %s from release %s", asset.name, release.tag)
        if asset.name.endswith(APPIMAGE_SUFFIX):
            return _install_appimage(run, asset)
        with tempfile.TemporaryDirectory(prefix="base-tooling-") as tmp:
            package_file = run.ctx.releases.download(asset, Path(tmp) / asset.name)
            backend.install_file(package_file)
        return changed(f"installed {asset.name} ({release.tag})")

    if backend.kind is BackendKind.UNSUPPORTED:
        message = (
            f"No {PACKAGE_NAME} build for {run.invocation.arch} and no package manager "
            f"to install {FALLBACK_PACKAGE}; skipping"
        )
        run.ctx.feedback.warn(message)
        return StepResult(StepStatus.WARNED, message)

    no_build = f"no {PACKAGE_NAME} build for {run.invocation.arch}"
    if backend.query(FALLBACK_PACKAGE):
        return unchanged(f"{no_build}; {FALLBACK_PACKAGE} present")
    backend.install([FALLBACK_PACKAGE])
    return changed(f"{no_build}; installed {FALLBACK_PACKAGE}")


def install_optional_component(run: StepContext) -> StepResult:
    if not run.options.optional_component:
        return skipped("disabled")

    inv = run.invocation
    if inv.platform is Platform.MACOS:
        return _install_macos(run)

    if is_installed(run) and not run.options.refresh_optional:
        return unchanged(f"{PACKAGE_NAME} already installed")

    if inv.arch == Architecture.X86_64:
        return _install_from_vendor_repository(run)
    return _install_from_release(run)
