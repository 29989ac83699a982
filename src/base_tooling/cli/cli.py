import logging

import click

from base_tooling.cli.commands.config import config_group
from base_tooling.cli.commands.install import install_cmd
from base_tooling.cli.commands.update import update_cmd
from base_tooling.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="base-tooling")
@click.option("--dry-run", is_flag=True, help="Print what would change without changing anything.")
@click.option("--debug", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def cli(ctx: click.Context, dry_run: bool, debug: bool) -> None:
    """Bootstrap and update a Nix-managed developer workstation."""
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(dry_run=dry_run)


cli.add_command(install_cmd)
cli.add_command(update_cmd)
cli.add_command(config_group)


def main() -> None:
    """CLI entry point used by the `base-tooling` console script."""
    cli()
