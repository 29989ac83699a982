"""Output utilities for CLI commands with clear intent.

user_output() is for humans and goes to stderr; machine_output() is for
programs and goes to stdout. Keeping the two streams apart means
`--format json` output can be piped without progress lines mixed in.
"""

from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from base_tooling.pipeline.step import StepOutcome


def user_output(message: str = "", *, nl: bool = True) -> None:
    """Write a human-facing message to stderr."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: str, *, nl: bool = True) -> None:
    """Write machine-readable output to stdout."""
    click.echo(message, nl=nl)


def format_duration(seconds: float) -> str:
    """Format a duration as `1m 23s` / `4s`."""
    total = int(round(seconds))
    minutes, secs = divmod(total, 60)
    if minutes:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


_STATUS_STYLES = {
    "changed": "green",
    "unchanged": "dim",
    "skipped": "dim",
    "warned": "yellow",
}


def format_run_summary(outcomes: "list[StepOutcome]", title: str) -> Table:
    """Format the end-of-run step summary.

    Args:
        outcomes: Outcomes recorded by the step executor, in execution order
        title: Table title (e.g. "install: alice@linux")

    Returns:
        Rich Table with one row per executed step
    """
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Step")
    table.add_column("Status")
    table.add_column("Detail", overflow="fold")

    for outcome in outcomes:
        status = outcome.status.value
        style = _STATUS_STYLES.get(status, "")
        cell = f"[{style}]{status}[/{style}]" if style else status
        table.add_row(outcome.name, cell, outcome.detail)

    return table


def print_run_summary(outcomes: "list[StepOutcome]", title: str) -> None:
    """Render the step summary table to stderr."""
    console = Console(stderr=True)
    console.print(format_run_summary(outcomes, title))
