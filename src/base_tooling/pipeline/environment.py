"""Environment Enabler: turn on the Nix features the configuration needs."""

from pathlib import Path

from base_tooling.core.reconcile.files import reconcile_file
from base_tooling.core.reconcile.nix_conf import REQUIRED_FEATURES, ensure_experimental_features
from base_tooling.pipeline.step import StepContext, StepResult, changed, unchanged


def nix_conf_path(home: Path) -> Path:
    return home / ".config" / "nix" / "nix.conf"


def enable_nix_features(run: StepContext) -> StepResult:
    path = nix_conf_path(run.invocation.home)
    did_change = reconcile_file(
        path,
        ensure_experimental_features,
        owner=run.invocation.account,
        dry_run=run.ctx.dry_run,
    )
    features = " ".join(REQUIRED_FEATURES)
    if did_change:
        return changed(f"enabled {features} in {path}")
    return unchanged(f"{features} already enabled")
