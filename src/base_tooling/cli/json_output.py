"""JSON output utilities for `--format json` runs."""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from base_tooling.cli.output import machine_output
from base_tooling.core.invocation import InvocationContext
from base_tooling.pipeline.step import StepOutcome


class ErrorResponse(BaseModel):
    """Pydantic model for error JSON responses.

    Attributes:
        error: Error message
        error_type: Error class name (e.g., "DirtyRepositoryError")
        exit_code: Exit code for the process
    """

    model_config = ConfigDict(strict=True)

    error: str
    error_type: str
    exit_code: int = Field(default=1, ge=0, le=255)


class StepReport(BaseModel):
    model_config = ConfigDict(strict=True)

    name: str
    status: str
    detail: str


class RunReport(BaseModel):
    """Pydantic model for the document a successful run prints."""

    model_config = ConfigDict(strict=True)

    command: str
    user: str
    platform: str
    arch: str
    install_dir: str
    dry_run: bool
    steps: list[StepReport]
    duration_seconds: float = Field(ge=0)


def build_run_report(
    command: str,
    invocation: InvocationContext,
    outcomes: list[StepOutcome],
    *,
    dry_run: bool,
    duration_seconds: float,
) -> RunReport:
    return RunReport(
        command=command,
        user=invocation.user,
        platform=invocation.platform.value,
        arch=str(invocation.arch),
        install_dir=str(invocation.install_dir),
        dry_run=dry_run,
        steps=[
            StepReport(name=o.name, status=o.status.value, detail=o.detail) for o in outcomes
        ],
        duration_seconds=round(duration_seconds, 3),
    )


def emit_json(data: dict[str, Any]) -> None:
    """Output JSON data to stdout for machine consumption.

    For Pydantic models, call model.model_dump(mode='json') before
    passing to this function.
    """
    machine_output(json.dumps(data, indent=2))


def emit_json_error(error: str, error_type: str, exit_code: int = 1) -> None:
    """Output error as JSON and exit.

    Raises:
        SystemExit: Always raises to terminate with specified exit code
    """
    error_response = ErrorResponse(
        error=error,
        error_type=error_type,
        exit_code=exit_code,
    )
    emit_json(error_response.model_dump(mode="json"))
    raise SystemExit(exit_code)
