"""No-op privilege gate for dry runs."""

from base_tooling.integrations.privilege.abc import PrivilegeGate


class DryRunPrivilegeGate(PrivilegeGate):
    """Never prompts; prefixes are still rendered for printed commands."""

    def __init__(self, wrapped: PrivilegeGate) -> None:
        self._wrapped = wrapped

    def is_root(self) -> bool:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.is_root()

    def ensure_elevated(self) -> None:
        """No-op in dry-run mode."""
        pass
