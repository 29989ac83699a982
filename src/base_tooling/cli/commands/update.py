from pathlib import Path

import click

from base_tooling.cli.bootstrap import for_format, resolve, run_and_report
from base_tooling.cli.error_boundary import cli_error_boundary
from base_tooling.cli.options import target_options
from base_tooling.core.context import BootstrapContext
from base_tooling.core.invocation import PullMode
from base_tooling.pipeline.step import RunOptions


@click.command("update")
@target_options
@click.option("--no-pull", is_flag=True, help="Do not pull (useful on a local branch)")
@click.option(
    "--update-rancher",
    is_flag=True,
    help="Install or refresh Rancher Desktop",
)
@click.option(
    "--set-login-shell",
    is_flag=True,
    help="Also make the configured shell the login shell (Linux)",
)
@click.pass_obj
@cli_error_boundary
def update_cmd(
    ctx: BootstrapContext,
    user: str | None,
    directory: Path | None,
    darwin_target: str | None,
    format: str,
    no_pull: bool,
    update_rancher: bool,
    set_login_shell: bool,
) -> None:
    """Pull the configuration repository and re-apply it (Day-2).

    Requires an existing checkout. Lockfile updates (`nix flake update`) are
    not done here; they belong in the configuration repository.
    """
    ctx = for_format(ctx, format)
    config = ctx.config_store.load()
    invocation = resolve(
        ctx,
        config,
        user=user,
        directory=directory,
        pull_mode=PullMode.NO_PULL if no_pull else PullMode.PULL,
        darwin_target=darwin_target,
        repo=None,
    )
    options = RunOptions(
        command="update",
        optional_component=update_rancher,
        refresh_optional=update_rancher,
        set_login_shell=set_login_shell,
        require_checkout=True,
    )
    run_and_report(ctx, invocation, options, format=format)
