"""Step model and executor for the reconciliation pipeline.

A run is an ordered list of Steps. Each step declares whether it is safe to
repeat blindly or has to probe current state first, and whether a failure
aborts the run or is only reported. run_pipeline() walks the list top to
bottom and applies those policies uniformly, so individual steps never
decide on their own whether to swallow an error.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from base_tooling.core.context import BootstrapContext
from base_tooling.core.errors import BootstrapError, OptionalComponentWarning
from base_tooling.core.invocation import InvocationContext

logger = logging.getLogger(__name__)


class Idempotence(Enum):
    SAFE_TO_REPEAT = "safe-to-repeat"
    REQUIRES_PRECONDITION_CHECK = "requires-precondition-check"


class FailurePolicy(Enum):
    FATAL = "fatal"
    WARN_AND_CONTINUE = "warn-and-continue"


class StepStatus(Enum):
    CHANGED = "changed"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"
    WARNED = "warned"


@dataclass(frozen=True)
class StepResult:
    """What a step action reports back to the executor."""

    status: StepStatus
    detail: str = ""


@dataclass(frozen=True)
class StepOutcome:
    """Executor record of one finished step."""

    name: str
    status: StepStatus
    detail: str


@dataclass(frozen=True)
class RunOptions:
    """Per-command switches that are not part of the resolved invocation.

    Attributes:
        command: "install" or "update"
        optional_component: Run the optional component step at all
        refresh_optional: Reinstall the optional component even if present
        set_login_shell: Run the login shell step
        require_checkout: Fail instead of cloning when the checkout is absent
    """

    command: str
    optional_component: bool
    refresh_optional: bool
    set_login_shell: bool
    require_checkout: bool


@dataclass(frozen=True)
class StepContext:
    """Everything a step action may use."""

    ctx: BootstrapContext
    invocation: InvocationContext
    options: RunOptions


StepAction = Callable[[StepContext], StepResult]


@dataclass(frozen=True)
class Step:
    name: str
    description: str
    action: StepAction
    idempotence: Idempotence
    failure_policy: FailurePolicy = FailurePolicy.FATAL


def changed(detail: str = "") -> StepResult:
    return StepResult(StepStatus.CHANGED, detail)


def unchanged(detail: str = "") -> StepResult:
    return StepResult(StepStatus.UNCHANGED, detail)


def skipped(detail: str = "") -> StepResult:
    return StepResult(StepStatus.SKIPPED, detail)


def _summarize(error: Exception) -> str:
    """First line of an error message (subprocess errors carry the full command below it)."""
    if isinstance(error, BootstrapError):
        return error.message
    lines = str(error).strip().splitlines()
    return lines[0] if lines else type(error).__name__


def run_pipeline(steps: list[Step], run: StepContext) -> list[StepOutcome]:
    """Execute steps in order.

    FATAL steps propagate their error and stop the run. WARN_AND_CONTINUE
    steps have bootstrap, subprocess and OS errors converted into an
    OptionalComponentWarning that is logged, shown and recorded as WARNED.

    Returns:
        One outcome per executed step, in order
    """
    outcomes: list[StepOutcome] = []
    for step in steps:
        run.ctx.feedback.info(step.description)
        logger.debug(
            "Step %s (%s, %s)", step.name, step.idempotence.value, step.failure_policy.value
        )
        try:
            result = step.action(run)
        except (BootstrapError, RuntimeError, OSError) as e:
            if step.failure_policy is FailurePolicy.FATAL:
                raise
            if isinstance(e, OptionalComponentWarning):
                warning = e
            else:
                warning = OptionalComponentWarning(_summarize(e))
            logger.warning("Step %s failed, continuing: %s", step.name, e)
            run.ctx.feedback.warn(f"{step.description} failed: {warning.message}")
            outcomes.append(StepOutcome(step.name, StepStatus.WARNED, warning.message))
            continue

        logger.debug("Step %s -> %s %s", step.name, result.status.value, result.detail)
        outcomes.append(StepOutcome(step.name, result.status, result.detail))
    return outcomes
