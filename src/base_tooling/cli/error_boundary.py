"""Error boundary handling for CLI commands.

Bootstrap errors, subprocess failures and OS errors are turned into a single
`ERROR:` line (plus detail lines) on stderr, or into an ErrorResponse
document when the command runs with `--format json`, and the process exits
with the code the error class carries. Anything else bubbles up with a full
stack trace.
"""

import functools
import logging
from collections.abc import Callable
from typing import Any

import click

from base_tooling.cli.json_output import emit_json_error
from base_tooling.cli.output import user_output
from base_tooling.core.errors import BootstrapError, UsageError

logger = logging.getLogger(__name__)


def _report_text(message: str, details: list[str]) -> None:
    user_output(click.style("ERROR: ", fg="red", bold=True) + message)
    for line in details:
        user_output(f"  {line}")


def _report_usage() -> None:
    click_ctx = click.get_current_context(silent=True)
    if click_ctx is not None:
        user_output()
        user_output(click_ctx.get_usage())


def _split(error: BaseException) -> tuple[str, list[str]]:
    lines = str(error).strip().splitlines() or [type(error).__name__]
    return lines[0], lines[1:]


def cli_error_boundary[T: Callable[..., Any]](func: T) -> T:
    """Decorator that maps well-known exceptions to clean output and exit codes.

    Catches:
        - BootstrapError: exits with the error's exit_code, shows its hint
          (and the command usage for UsageError)
        - ValueError: invalid configuration values (exit 1)
        - RuntimeError: failed external commands (exit 1)
        - OSError: filesystem / permission problems (exit 1)

    JSON mode is detected from the command's `format` keyword argument.

    Example:
        @click.command()
        @click.option("--format", type=click.Choice(["text", "json"]), default="text")
        @cli_error_boundary
        def my_command(format: str) -> None:
            ...
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        json_mode = kwargs.get("format") == "json"
        try:
            return func(*args, **kwargs)
        except BootstrapError as e:
            logger.debug("Run aborted", exc_info=True)
            if json_mode:
                emit_json_error(e.message, type(e).__name__, exit_code=e.exit_code)
            details = [e.hint] if e.hint else []
            _report_text(e.message, details)
            if isinstance(e, UsageError):
                _report_usage()
            raise SystemExit(e.exit_code) from None
        except (ValueError, RuntimeError, OSError) as e:
            logger.debug("Run failed", exc_info=True)
            message, details = _split(e)
            if json_mode:
                emit_json_error(str(e).strip() or message, type(e).__name__, exit_code=1)
            _report_text(message, details)
            raise SystemExit(1) from None

    return wrapper  # type: ignore[return-value]
