"""Options shared by `install` and `update`."""

from collections.abc import Callable
from pathlib import Path

import click


def target_options[**P, T](f: Callable[P, T]) -> Callable[P, T]:
    """Shared options selecting the account, checkout and output format."""
    f = click.option(
        "--format",
        type=click.Choice(["text", "json"]),
        default="text",
        show_default=True,
        help="Output format",
    )(f)
    f = click.option(
        "--darwin-target",
        metavar="NAME",
        help="nix-darwin configuration to activate on macOS (default: default)",
    )(f)
    f = click.option(
        "--dir",
        "directory",
        type=click.Path(file_okay=False, path_type=Path),
        help="Configuration checkout directory (default: ~/.base-tooling of the target user)",
    )(f)
    f = click.option(
        "--user",
        metavar="NAME",
        help="Local account to bootstrap (required)",
    )(f)
    return f
