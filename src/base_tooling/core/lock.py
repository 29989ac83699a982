"""Advisory single-run lock."""

import fcntl
import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from base_tooling.core.errors import LockHeldError
from base_tooling.core.reconcile.files import ensure_parent_dirs, hand_over
from base_tooling.integrations.accounts.abc import Account

logger = logging.getLogger(__name__)


def lock_path_for(home: Path) -> Path:
    """Lock file location for runs targeting the account with this home."""
    return home / ".local" / "state" / "base-tooling" / "run.lock"


@contextmanager
def run_lock(path: Path, owner: Account | None = None) -> Iterator[None]:
    """Hold an exclusive, non-blocking flock on `path` for the duration of the block.

    Missing state directories and the lock file itself belong to `owner`, so a
    root run on behalf of another account leaves nothing root-owned in that home.

    The lock is released when the file descriptor closes, so it is dropped on
    every exit path, including a crash of the whole process.

    Raises:
        LockHeldError: If another process already holds the lock
    """
    ensure_parent_dirs(path, owner)
    fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o644)
    hand_over(path, owner)
    try:
        try:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError as e:
            raise LockHeldError(
                f"Another base-tooling run holds {path}",
                hint="Wait for it to finish and re-run.",
            ) from e
        logger.debug("Acquired run lock %s", path)
        os.ftruncate(fd, 0)
        os.write(fd, f"{os.getpid()}\n".encode())
        yield
    finally:
        os.close(fd)
