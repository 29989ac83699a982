"""The ordered step list shared by `install` and `update`.

Both commands run the same pipeline; RunOptions decide which of the
switchable steps actually do anything.
"""

from base_tooling.pipeline.activation import activate_configuration
from base_tooling.pipeline.dependencies import ensure_dependencies
from base_tooling.pipeline.environment import enable_nix_features
from base_tooling.pipeline.login_shell import set_login_shell
from base_tooling.pipeline.optional_component import install_optional_component
from base_tooling.pipeline.repository import sync_repository
from base_tooling.pipeline.shell_integration import patch_shell_files
from base_tooling.pipeline.step import FailurePolicy, Idempotence, Step


def bootstrap_steps() -> list[Step]:
    return [
        Step(
            name="dependencies",
            description="Ensuring git and Nix are installed",
            action=ensure_dependencies,
            idempotence=Idempotence.REQUIRES_PRECONDITION_CHECK,
        ),
        Step(
            name="nix-features",
            description="Enabling Nix flakes",
            action=enable_nix_features,
            idempotence=Idempotence.SAFE_TO_REPEAT,
        ),
        Step(
            name="repository",
            description="Synchronizing configuration repository",
            action=sync_repository,
            idempotence=Idempotence.REQUIRES_PRECONDITION_CHECK,
        ),
        Step(
            name="rancher-desktop",
            description="Installing Rancher Desktop",
            action=install_optional_component,
            idempotence=Idempotence.REQUIRES_PRECONDITION_CHECK,
            failure_policy=FailurePolicy.WARN_AND_CONTINUE,
        ),
        Step(
            name="shell-integration",
            description="Ensuring shells load the Nix environment",
            action=patch_shell_files,
            idempotence=Idempotence.SAFE_TO_REPEAT,
        ),
        Step(
            name="activation",
            description="Applying declarative configuration",
            action=activate_configuration,
            idempotence=Idempotence.SAFE_TO_REPEAT,
        ),
        Step(
            name="login-shell",
            description="Setting default login shell",
            action=set_login_shell,
            idempotence=Idempotence.REQUIRES_PRECONDITION_CHECK,
        ),
    ]
