"""Configuration Activator: hand the checkout to nix-darwin or home-manager.

Whatever the declarative configuration does is opaque here. The only inputs
passed through are the flake reference and BASE_TOOLING_USER. Activation is
not rolled back on failure; the previous generation stays available through
the tools' own rollback commands.
"""

from base_tooling.core.errors import ActivationError, PrerequisiteError
from base_tooling.core.invocation import Platform
from base_tooling.pipeline.step import StepContext, StepResult, changed


def activate_configuration(run: StepContext) -> StepResult:
    ctx = run.ctx
    inv = run.invocation

    if ctx.nix.locate(inv.home) is None and not ctx.dry_run:
        raise PrerequisiteError(
            "Nix not found in PATH",
            hint="Install Nix (or open a new terminal so its profile is loaded) and re-run.",
        )

    env = inv.activation_env()
    if inv.platform is Platform.MACOS:
        ctx.privilege.ensure_elevated()
        try:
            result = ctx.nix.build_darwin_system(inv.install_dir, inv.darwin_target, env)
            ctx.nix.switch_darwin(result, inv.install_dir, inv.darwin_target, env)
        except RuntimeError as e:
            raise ActivationError(str(e)) from e
        return changed(f"switched nix-darwin configuration '{inv.darwin_target}'")

    run_as = inv.user if inv.runs_as_other_user else None
    if run_as is not None:
        ctx.privilege.ensure_elevated()
    flake_ref = f"{inv.install_dir}#{inv.home_target}"
    try:
        ctx.nix.switch_home(
            flake_ref,
            env,
            run_as=run_as,
            home_manager_flake=inv.home_manager_flake,
            backup_extension=inv.backup_extension,
        )
    except RuntimeError as e:
        raise ActivationError(str(e)) from e
    return changed(f"switched home-manager configuration {inv.home_target}")
