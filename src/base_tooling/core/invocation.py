"""Argument and environment resolution.

Everything later pipeline steps need to know about the run (target account,
install directory, platform, architecture, pull mode, activation target) is
resolved here exactly once and frozen into an InvocationContext. Resolution
never touches the filesystem or network beyond reading the account database,
so a resolution failure leaves the machine untouched.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, StrEnum
from pathlib import Path

from base_tooling.core.config_store import ToolConfig
from base_tooling.core.errors import ResolutionError, UnsupportedPlatformError, UsageError
from base_tooling.core.user_feedback import UserFeedback
from base_tooling.integrations.accounts.abc import Account, Accounts

logger = logging.getLogger(__name__)

DIR_ENV_VAR = "BASE_TOOLING_DIR"
REPO_ENV_VAR = "BASE_TOOLING_REPO"
USER_ENV_VAR = "BASE_TOOLING_USER"
DEFAULT_INSTALL_DIR_NAME = ".base-tooling"


class Platform(Enum):
    MACOS = "macos"
    LINUX = "linux"


class Architecture(StrEnum):
    X86_64 = "x86_64"
    AARCH64 = "aarch64"


class PullMode(Enum):
    PULL = "pull"
    NO_PULL = "no-pull"


_ARCH_ALIASES = {
    "x86_64": Architecture.X86_64,
    "amd64": Architecture.X86_64,
    "aarch64": Architecture.AARCH64,
    "arm64": Architecture.AARCH64,
}


def detect_platform(system: str) -> Platform:
    """Map `platform.system()` output to a supported Platform.

    Raises:
        UnsupportedPlatformError: For anything other than Darwin or Linux
    """
    if system == "Darwin":
        return Platform.MACOS
    if system == "Linux":
        return Platform.LINUX
    raise UnsupportedPlatformError(f"Unsupported OS: {system or 'unknown'}")


def normalize_architecture(machine: str) -> Architecture | str:
    """Normalize `platform.machine()` output.

    Unknown values are returned verbatim; only steps that fetch
    architecture-specific artifacts care about an exact match.
    """
    return _ARCH_ALIASES.get(machine.strip().lower(), machine)


@dataclass(frozen=True)
class InvocationContext:
    """Resolved, immutable description of one bootstrap run."""

    user: str
    account: Account
    install_dir: Path
    platform: Platform
    arch: Architecture | str
    pull_mode: PullMode
    darwin_target: str
    repo_url: str
    home_manager_flake: str
    backup_extension: str
    login_shell: str
    invoking_user: str

    @property
    def home(self) -> Path:
        return self.account.home

    @property
    def home_target(self) -> str:
        """home-manager configuration name for this user."""
        return f"{self.user}@linux"

    @property
    def runs_as_other_user(self) -> bool:
        return self.invoking_user != self.user

    def activation_env(self) -> dict[str, str]:
        """Variables the declarative configuration reads during evaluation."""
        return {USER_ENV_VAR: self.user}


def resolve_invocation(
    *,
    username: str | None,
    dir_override: Path | None,
    pull_mode: PullMode,
    darwin_target: str | None,
    repo_override: str | None,
    system: str,
    machine: str,
    accounts: Accounts,
    config: ToolConfig,
    environ: Mapping[str, str],
    feedback: UserFeedback,
) -> InvocationContext:
    """Resolve command-line flags, environment, config and host facts.

    Precedence (highest first):
        install dir: --dir, $BASE_TOOLING_DIR, config install_dir, <home>/.base-tooling
        repository:  --repo, $BASE_TOOLING_REPO, config repo_url
        darwin target: --darwin-target, config darwin_target

    Raises:
        UsageError: If no target user was given
        UnsupportedPlatformError: If the OS is neither macOS nor Linux
        ResolutionError: If the target account does not exist and no install
            directory override was given
    """
    if username is None or not username.strip():
        raise UsageError(
            "--user is required", hint="Pass the account to bootstrap, e.g. --user alice"
        )
    username = username.strip()

    platform = detect_platform(system)

    arch = normalize_architecture(machine)
    if not isinstance(arch, Architecture):
        feedback.warn(
            f"Unrecognised CPU architecture '{machine}'; "
            "architecture-specific downloads may be skipped"
        )

    env_dir = environ.get(DIR_ENV_VAR) or None
    explicit_dir: Path | None = None
    if dir_override is not None:
        explicit_dir = dir_override
    elif env_dir is not None:
        explicit_dir = Path(env_dir)

    invoking = accounts.current()
    account = accounts.lookup(username)
    if account is None:
        if explicit_dir is None:
            raise ResolutionError(
                f"Cannot resolve home directory for user '{username}'",
                hint="Check the user name or pass --dir explicitly.",
            )
        feedback.warn(
            f"User '{username}' not found in the account database; "
            f"using {invoking.home} as home directory"
        )
        account = Account(
            name=username,
            uid=invoking.uid,
            gid=invoking.gid,
            home=invoking.home,
            shell=invoking.shell,
        )

    if explicit_dir is not None:
        install_dir = explicit_dir
    elif config.install_dir is not None:
        install_dir = config.install_dir
    else:
        install_dir = account.home / DEFAULT_INSTALL_DIR_NAME
    install_dir = install_dir.expanduser()

    repo_url = repo_override or environ.get(REPO_ENV_VAR) or config.repo_url
    target = darwin_target or config.darwin_target

    logger.debug(
        "Resolved user=%s home=%s dir=%s platform=%s arch=%s",
        username,
        account.home,
        install_dir,
        platform.value,
        arch,
    )

    return InvocationContext(
        user=username,
        account=account,
        install_dir=install_dir,
        platform=platform,
        arch=arch,
        pull_mode=pull_mode,
        darwin_target=target,
        repo_url=repo_url,
        home_manager_flake=config.home_manager_flake,
        backup_extension=config.backup_extension,
        login_shell=config.login_shell,
        invoking_user=invoking.name,
    )
