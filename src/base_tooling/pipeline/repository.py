"""Repository Synchronizer: bring the configuration checkout up to date.

A checkout with local modifications to tracked files is never pulled, and a
diverged history is never force-corrected: both stop the run before anything
in the checkout changes.
"""

import logging

from base_tooling.core.errors import (
    DirtyRepositoryError,
    DivergedHistoryError,
    PrerequisiteError,
    ResolutionError,
)
from base_tooling.core.invocation import PullMode
from base_tooling.pipeline.step import StepContext, StepResult, changed, skipped, unchanged

logger = logging.getLogger(__name__)


def _short(commit: str | None) -> str:
    return commit[:8] if commit else "unknown"


def sync_repository(run: StepContext) -> StepResult:
    git = run.ctx.git
    inv = run.invocation
    install_dir = inv.install_dir

    if not install_dir.exists():
        if run.options.require_checkout:
            raise PrerequisiteError(
                f"Configuration checkout not found at {install_dir}",
                hint="Run `base-tooling install` first.",
            )
        git.clone(inv.repo_url, install_dir)
        return changed(f"cloned {inv.repo_url} into {install_dir}")

    if not git.is_checkout(install_dir):
        raise ResolutionError(
            f"{install_dir} exists but is not a git checkout",
            hint="Move it aside or pass a different --dir.",
        )

    if inv.pull_mode is PullMode.NO_PULL:
        return skipped("pull disabled")

    if not git.is_worktree_clean(install_dir):
        raise DirtyRepositoryError(
            f"Local changes in {install_dir}",
            hint="Commit or stash them, or re-run with --no-pull.",
        )

    before = git.get_head_commit(install_dir)
    git.fetch(install_dir)
    if not git.fast_forward(install_dir):
        raise DivergedHistoryError(
            f"{install_dir} has diverged from its upstream and cannot be fast-forwarded",
            hint="Reconcile the branch by hand, or re-run with --no-pull.",
        )
    after = git.get_head_commit(install_dir)

    logger.debug("Checkout %s: %s -> %s", install_dir, before, after)
    if before == after:
        return unchanged(f"already at {_short(after)}")
    return changed(f"{_short(before)} -> {_short(after)}")
