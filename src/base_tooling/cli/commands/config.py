import click

from base_tooling.cli.error_boundary import cli_error_boundary
from base_tooling.cli.output import machine_output, user_output
from base_tooling.core.config_store import CONFIG_KEYS, ToolConfig
from base_tooling.core.context import BootstrapContext


def _format_value(value: object) -> str:
    if value is None:
        return "(unset)"
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


@click.group("config")
def config_group() -> None:
    """Manage base-tooling configuration."""


@config_group.command("show")
@click.pass_obj
@cli_error_boundary
def config_show(ctx: BootstrapContext) -> None:
    """Print the effective configuration values."""
    config: ToolConfig = ctx.config_store.load()
    if not ctx.config_store.exists():
        note = f"(no config file at {ctx.config_store.path()}; showing defaults)"
        user_output(click.style(note, dim=True))
    for key in CONFIG_KEYS:
        machine_output(f"{key}={_format_value(getattr(config, key))}")


@config_group.command("path")
@click.pass_obj
def config_path(ctx: BootstrapContext) -> None:
    """Print the location of the configuration file."""
    machine_output(str(ctx.config_store.path()))


@config_group.command("set")
@click.argument("key", metavar="KEY", type=click.Choice(CONFIG_KEYS))
@click.argument("value", metavar="VALUE")
@click.pass_obj
@cli_error_boundary
def config_set(ctx: BootstrapContext, key: str, value: str) -> None:
    """Update configuration with a value for the given key.

    An empty VALUE clears install_dir.
    """
    config = ctx.config_store.set(key, value)
    user_output(f"Set {key}={_format_value(getattr(config, key))}")
