from pathlib import Path

import click

from base_tooling.cli.bootstrap import for_format, resolve, run_and_report
from base_tooling.cli.error_boundary import cli_error_boundary
from base_tooling.cli.options import target_options
from base_tooling.core.context import BootstrapContext
from base_tooling.core.invocation import PullMode
from base_tooling.pipeline.step import RunOptions


@click.command("install")
@target_options
@click.option(
    "--no-pull",
    "--no-clone",
    "no_pull",
    is_flag=True,
    help="Leave an existing checkout alone (an absent one is still cloned)",
)
@click.option("--repo", metavar="URL", help="Configuration repository to clone")
@click.option("--skip-optional", is_flag=True, help="Do not install Rancher Desktop")
@click.option("--no-login-shell", is_flag=True, help="Do not change the login shell (Linux)")
@click.pass_obj
@cli_error_boundary
def install_cmd(
    ctx: BootstrapContext,
    user: str | None,
    directory: Path | None,
    darwin_target: str | None,
    format: str,
    no_pull: bool,
    repo: str | None,
    skip_optional: bool,
    no_login_shell: bool,
) -> None:
    """Bootstrap a workstation (Day-0).

    Installs missing prerequisites and Nix, clones the configuration
    repository and activates it with nix-darwin (macOS) or home-manager
    (Linux). Safe to re-run: every step checks current state first.
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
        repo=repo,
    )
    options = RunOptions(
        command="install",
        optional_component=config.optional_component and not skip_optional,
        refresh_optional=False,
        set_login_shell=not no_login_shell,
        require_checkout=False,
    )
    run_and_report(ctx, invocation, options, format=format)
