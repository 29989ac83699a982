"""Dependency Ensurer: git, curl, Homebrew and Nix.

Every tool is probed on each run and only installed when absent. Linux tools
come from the native backend; Nix and Homebrew come from their official
installers. git on macOS is never installed here: it ships with the Xcode
Command Line Tools, whose installer needs the operator.
"""

import logging
import subprocess

from base_tooling.core.errors import PrerequisiteError
from base_tooling.core.invocation import Platform
from base_tooling.integrations.packages.brew import find_brew
from base_tooling.pipeline.step import StepContext, StepResult, changed, unchanged

logger = logging.getLogger(__name__)

LINUX_TOOLS = ("git", "curl")
HOMEBREW_INSTALLER_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"


def _trigger_xcode_tools_install() -> None:
    # The installer opens a GUI dialog; its exit status says nothing useful.
    try:
        subprocess.run(["xcode-select", "--install"], capture_output=True, check=False)
    except FileNotFoundError:
        logger.debug("xcode-select not available")


def _ensure_git_macos(run: StepContext) -> None:
    if run.ctx.shell.get_installed_tool_path("git") is not None:
        return
    _trigger_xcode_tools_install()
    raise PrerequisiteError(
        "git not found",
        hint="Finish installing the Xcode Command Line Tools (xcode-select --install) and re-run.",
    )


def _ensure_homebrew(run: StepContext) -> bool:
    shell = run.ctx.shell
    existing = find_brew(shell)
    if existing is not None:
        shell.add_to_path(existing.parent)
        return False

    shell.run_command(
        ["/bin/bash", "-c", f'/bin/bash -c "$(curl -fsSL {HOMEBREW_INSTALLER_URL})"'],
        operation="install Homebrew",
        env={"NONINTERACTIVE": "1"},
    )
    brew = find_brew(shell)
    if brew is not None:
        shell.add_to_path(brew.parent)
    elif not run.ctx.dry_run:
        raise PrerequisiteError("Homebrew installer finished but brew cannot be found")
    return True


def _ensure_linux_tools(run: StepContext) -> list[str]:
    missing = [tool for tool in LINUX_TOOLS if run.ctx.shell.get_installed_tool_path(tool) is None]
    if not missing:
        return []
    # UnsupportedBackend raises UnsupportedPlatformError here
    run.ctx.packages.install(missing)
    return missing


def _ensure_nix(run: StepContext) -> bool:
    nix = run.ctx.nix
    home = run.invocation.home
    if nix.locate(home) is not None:
        return False

    run.ctx.privilege.ensure_elevated()
    nix.install()
    if nix.locate(home) is None and not run.ctx.dry_run:
        raise PrerequisiteError(
            "Nix was installed but cannot be found",
            hint="Open a new terminal (or source the Nix profile) and re-run.",
        )
    return True


def ensure_dependencies(run: StepContext) -> StepResult:
    installed: list[str] = []

    if run.invocation.platform is Platform.MACOS:
        _ensure_git_macos(run)
        if _ensure_homebrew(run):
            installed.append("homebrew")
    else:
        installed.extend(_ensure_linux_tools(run))

    if _ensure_nix(run):
        installed.append("nix")

    if installed:
        return changed(f"installed {', '.join(installed)}")
    return unchanged("git, nix present")
