"""Shared plumbing for the `install` and `update` commands."""

import time
from dataclasses import replace
from pathlib import Path

from base_tooling.cli.json_output import build_run_report, emit_json
from base_tooling.cli.output import format_duration, print_run_summary
from base_tooling.core.config_store import ToolConfig
from base_tooling.core.context import BootstrapContext
from base_tooling.core.invocation import (
    InvocationContext,
    Platform,
    PullMode,
    resolve_invocation,
)
from base_tooling.core.user_feedback import SuppressedFeedback
from base_tooling.pipeline.runner import execute_run
from base_tooling.pipeline.step import RunOptions


def for_format(ctx: BootstrapContext, format: str) -> BootstrapContext:
    """Silence progress output when the command prints JSON."""
    if format == "json" and not isinstance(ctx.feedback, SuppressedFeedback):
        return replace(ctx, feedback=SuppressedFeedback())
    return ctx


def resolve(
    ctx: BootstrapContext,
    config: ToolConfig,
    *,
    user: str | None,
    directory: Path | None,
    pull_mode: PullMode,
    darwin_target: str | None,
    repo: str | None,
) -> InvocationContext:
    return resolve_invocation(
        username=user,
        dir_override=directory,
        pull_mode=pull_mode,
        darwin_target=darwin_target,
        repo_override=repo,
        system=ctx.system,
        machine=ctx.machine,
        accounts=ctx.accounts,
        config=config,
        environ=ctx.environ,
        feedback=ctx.feedback,
    )


def run_and_report(
    ctx: BootstrapContext,
    invocation: InvocationContext,
    options: RunOptions,
    *,
    format: str,
) -> None:
    feedback = ctx.feedback
    feedback.info(f"Base tooling {options.command} starting...")
    feedback.info(f"Detected OS: {ctx.system} ({ctx.machine})")
    feedback.info(f"Using user: {invocation.user}")
    feedback.info(f"Repo dir: {invocation.install_dir}")

    started = time.monotonic()
    outcomes = execute_run(ctx, invocation, options)
    duration = time.monotonic() - started

    if format == "json":
        report = build_run_report(
            options.command,
            invocation,
            outcomes,
            dry_run=ctx.dry_run,
            duration_seconds=duration,
        )
        emit_json(report.model_dump(mode="json"))
        return

    print_run_summary(outcomes, f"{options.command}: {invocation.user}@{invocation.platform.value}")
    feedback.success(f"Done in {format_duration(duration)}.")
    if invocation.platform is Platform.LINUX:
        feedback.info(
            "Open a NEW terminal (or run: source ~/.profile) so PATH updates take effect."
        )
