"""Shell Integration Patcher: managed blocks in the target user's rc files."""

from pathlib import Path

from base_tooling.core.invocation import Platform
from base_tooling.core.reconcile.files import reconcile_file
from base_tooling.core.reconcile.managed_block import ManagedBlock, apply_managed_block
from base_tooling.pipeline.step import StepContext, StepResult, changed, unchanged

ENV_BLOCK = ManagedBlock(
    name="env",
    body="""\
# Nix (daemon) environment
if [ -r /nix/var/nix/profiles/default/etc/profile.d/nix-daemon.sh ]; then
  . /nix/var/nix/profiles/default/etc/profile.d/nix-daemon.sh
elif [ -r "$HOME/.nix-profile/etc/profile.d/nix.sh" ]; then
  . "$HOME/.nix-profile/etc/profile.d/nix.sh"
fi

# Home Manager session variables
if [ -r "$HOME/.nix-profile/etc/profile.d/hm-session-vars.sh" ]; then
  . "$HOME/.nix-profile/etc/profile.d/hm-session-vars.sh"
fi""",
)

ZPROFILE_BLOCK = ManagedBlock(
    name="zprofile",
    body='[ -r "$HOME/.profile" ] && . "$HOME/.profile"',
)

BREW_BLOCK = ManagedBlock(
    name="brew",
    body="""\
if [ -x /opt/homebrew/bin/brew ]; then
  eval "$(/opt/homebrew/bin/brew shellenv)"
elif [ -x /usr/local/bin/brew ]; then
  eval "$(/usr/local/bin/brew shellenv)"
fi""",
)


def blocks_for(platform: Platform, home: Path) -> list[tuple[Path, ManagedBlock]]:
    """The (file, block) pairs a platform manages, in the order they are applied."""
    if platform is Platform.MACOS:
        return [(home / ".zprofile", BREW_BLOCK)]
    return [
        (home / ".bashrc", ENV_BLOCK),
        (home / ".profile", ENV_BLOCK),
        (home / ".zprofile", ZPROFILE_BLOCK),
    ]


def patch_shell_files(run: StepContext) -> StepResult:
    inv = run.invocation
    touched: list[str] = []
    for path, block in blocks_for(inv.platform, inv.home):
        if reconcile_file(
            path,
            lambda content, block=block: apply_managed_block(content, block),
            owner=inv.account,
            dry_run=run.ctx.dry_run,
        ):
            touched.append(path.name)

    if touched:
        return changed(f"updated {', '.join(touched)}")
    return unchanged("managed blocks up to date")
