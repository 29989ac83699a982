"""Shell Default Setter (Linux): make the configured shell the login shell."""

import shlex
from pathlib import Path

from base_tooling.core.errors import PrerequisiteError
from base_tooling.core.invocation import Platform
from base_tooling.integrations.shell.real import ETC_SHELLS
from base_tooling.pipeline.step import StepContext, StepResult, changed, skipped, unchanged

DEFAULT_BIN_DIR = Path("/usr/bin")


def set_login_shell(run: StepContext) -> StepResult:
    inv = run.invocation
    if not run.options.set_login_shell:
        return skipped("not requested")
    if inv.platform is Platform.MACOS:
        return skipped("managed by nix-darwin")

    ctx = run.ctx
    name = inv.login_shell
    actions: list[str] = []

    shell_path = ctx.shell.get_installed_tool_path(name)
    if shell_path is None:
        ctx.packages.install([name])
        actions.append(f"installed {name}")
        shell_path = ctx.shell.get_installed_tool_path(name)
        if shell_path is None:
            if not ctx.dry_run:
                raise PrerequisiteError(f"{name} was installed but cannot be found on PATH")
            shell_path = str(DEFAULT_BIN_DIR / name)

    if shell_path not in ctx.shell.list_login_shells():
        ctx.privilege.ensure_elevated()
        ctx.shell.run_command(
            [
                *ctx.privilege.command_prefix(),
                "sh",
                "-c",
                f"echo {shlex.quote(shell_path)} >> {ETC_SHELLS}",
            ],
            operation=f"register {shell_path} in {ETC_SHELLS}",
        )
        actions.append(f"registered {shell_path}")

    if inv.account.shell != shell_path:
        ctx.privilege.ensure_elevated()
        ctx.shell.run_command(
            [*ctx.privilege.command_prefix(), "chsh", "-s", shell_path, inv.user],
            operation=f"set login shell of {inv.user} to {shell_path}",
        )
        actions.append(f"login shell set to {shell_path}")

    if actions:
        return changed(", ".join(actions))
    return unchanged(f"login shell already {shell_path}")
