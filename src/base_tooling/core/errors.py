"""Error taxonomy for bootstrap runs.

Every error that can abort a run derives from BootstrapError and carries the
exit code the CLI reports for it. The error boundary in
base_tooling.cli.error_boundary turns these into a single `ERROR:` line (or a
JSON error document) and exits with `exit_code`.

OptionalComponentWarning is the one member that never aborts a run: the step
executor records it and continues.
"""


class BootstrapError(Exception):
    """Base class for fatal bootstrap errors."""

    exit_code: int = 1

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class UsageError(BootstrapError):
    """Required argument missing or malformed. Raised before any side effect."""

    exit_code = 2


class PrerequisiteError(BootstrapError):
    """A required dependency is missing and cannot be installed automatically."""

    exit_code = 3


class MissingDependencyError(PrerequisiteError):
    """A tool the run itself depends on (e.g. sudo) is not available."""


class UnsupportedPlatformError(BootstrapError):
    """No installation strategy exists for this OS / package manager combination."""

    exit_code = 4


class RepositoryError(BootstrapError):
    """Base class for configuration checkout problems."""


class DirtyRepositoryError(RepositoryError):
    """Local modifications would be clobbered by a pull."""

    exit_code = 5


class DivergedHistoryError(RepositoryError):
    """The checkout cannot be fast-forwarded to its upstream."""

    exit_code = 6


class ActivationError(BootstrapError):
    """The declarative build or switch step failed."""

    exit_code = 7


class ResolutionError(BootstrapError):
    """A user account, path or checkout could not be resolved."""

    exit_code = 8


class LockHeldError(BootstrapError):
    """Another run holds the advisory lock for this user."""

    exit_code = 9


class PrivilegeError(BootstrapError):
    """Elevation was required but could not be obtained."""

    exit_code = 10


class ManagedBlockError(BootstrapError):
    """A managed block in a user file is malformed (e.g. missing end marker)."""

    exit_code = 11


class OptionalComponentWarning(BootstrapError):
    """Failure in a non-essential component. Logged, never fatal."""
