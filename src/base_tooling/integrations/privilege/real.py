"""Production privilege gate backed by sudo."""

import logging
import os
import subprocess

from base_tooling.cli.output import user_output
from base_tooling.core.errors import MissingDependencyError, PrivilegeError
from base_tooling.integrations.privilege.abc import PrivilegeGate
from base_tooling.integrations.shell.abc import Shell

logger = logging.getLogger(__name__)


class RealPrivilegeGate(PrivilegeGate):
    """Elevates with sudo, prompting at most once per process."""

    def __init__(self, shell: Shell) -> None:
        self._shell = shell
        self._validated = False

    def is_root(self) -> bool:
        return os.geteuid() == 0

    def ensure_elevated(self) -> None:
        if self._validated or self.is_root():
            return

        if self._shell.get_installed_tool_path("sudo") is None:
            raise MissingDependencyError(
                "sudo is required but was not found on PATH",
                hint="Install sudo or re-run as root.",
            )

        cached = subprocess.run(["sudo", "-n", "true"], capture_output=True, check=False)
        if cached.returncode != 0:
            logger.debug("No cached sudo credential, prompting")
            user_output("Sudo privileges required. You may be prompted for your password.")
            prompt = subprocess.run(["sudo", "-v"], check=False)
            if prompt.returncode != 0:
                raise PrivilegeError("Could not obtain sudo privileges")

        self._validated = True
