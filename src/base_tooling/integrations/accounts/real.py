"""Production account lookups backed by the pwd module."""

import os
import pwd
from pathlib import Path

from base_tooling.integrations.accounts.abc import Account, Accounts


def _from_passwd(entry: pwd.struct_passwd) -> Account:
    return Account(
        name=entry.pw_name,
        uid=entry.pw_uid,
        gid=entry.pw_gid,
        home=Path(entry.pw_dir),
        shell=entry.pw_shell,
    )


class RealAccounts(Accounts):
    """Reads the system account database (works on Linux and macOS)."""

    def lookup(self, username: str) -> Account | None:
        try:
            return _from_passwd(pwd.getpwnam(username))
        except KeyError:
            return None

    def current(self) -> Account:
        return _from_passwd(pwd.getpwuid(os.geteuid()))
