"""Run the bootstrap pipeline under the advisory lock."""

import logging

from base_tooling.core.context import BootstrapContext
from base_tooling.core.invocation import InvocationContext
from base_tooling.core.lock import lock_path_for, run_lock
from base_tooling.pipeline.plans import bootstrap_steps
from base_tooling.pipeline.step import RunOptions, Step, StepContext, StepOutcome, run_pipeline

logger = logging.getLogger(__name__)


def execute_run(
    ctx: BootstrapContext,
    invocation: InvocationContext,
    options: RunOptions,
    steps: list[Step] | None = None,
) -> list[StepOutcome]:
    """Execute the pipeline for one resolved invocation.

    Dry runs never take the lock: they change nothing another run could trip over.

    Raises:
        LockHeldError: If another run for the same account is in progress
        BootstrapError: Whatever a fatal step raised
    """
    run = StepContext(ctx=ctx, invocation=invocation, options=options)
    plan = steps if steps is not None else bootstrap_steps()

    if ctx.dry_run:
        return run_pipeline(plan, run)

    with run_lock(lock_path_for(invocation.home), owner=invocation.account):
        return run_pipeline(plan, run)
