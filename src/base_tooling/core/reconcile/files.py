"""Thin I/O shell around the pure content reconcilers.

reconcile_file() reads a file (empty if missing), runs a pure transform over
its content and writes the result back only when it differs. Writes go
through a temporary sibling that is renamed into place, so an interrupted run
never leaves a half-written rc file behind. A symlinked file is written
through to its target; the link itself stays.
"""

import logging
import os
from collections.abc import Callable
from pathlib import Path

from base_tooling.cli.output import user_output
from base_tooling.integrations.accounts.abc import Account

logger = logging.getLogger(__name__)


def _should_chown(owner: Account | None) -> bool:
    return owner is not None and os.geteuid() == 0 and owner.uid != 0


def hand_over(path: Path, owner: Account | None) -> None:
    """Chown `path` to `owner` when running as root on that account's behalf."""
    if owner is not None and _should_chown(owner):
        os.chown(path, owner.uid, owner.gid)


def ensure_parent_dirs(path: Path, owner: Account | None) -> None:
    """Create missing parent directories, handing new ones to `owner` when running as root.

    Directories that already exist keep their ownership.
    """
    missing: list[Path] = []
    parent = path.parent
    while not parent.exists():
        missing.append(parent)
        parent = parent.parent

    for directory in reversed(missing):
        directory.mkdir()
        hand_over(directory, owner)


def write_text_atomic(path: Path, content: str, *, owner: Account | None = None) -> None:
    """Write `content` to `path` via a temp file and rename.

    The mode of an existing file is preserved. When running as root on behalf
    of another account the file is chowned to that account. If `path` is a
    symlink the temp file sits next to the link target and replaces that.
    """
    if path.is_symlink():
        path = path.resolve()
    ensure_parent_dirs(path, owner)
    temp_path = path.with_name(f".{path.name}.base-tooling.tmp")
    mode = path.stat().st_mode & 0o7777 if path.exists() else 0o644

    with temp_path.open("w", encoding="utf-8") as f:
        f.write(content)
    os.chmod(temp_path, mode)
    hand_over(temp_path, owner)

    temp_path.replace(path)


def reconcile_file(
    path: Path,
    transform: Callable[[str], str],
    *,
    owner: Account | None,
    dry_run: bool,
) -> bool:
    """Bring `path` to the state `transform` describes.

    Args:
        path: File to reconcile (created when missing)
        transform: Pure function from current content to desired content
        owner: Account that should own created/rewritten files
        dry_run: Compute the change but only report it

    Returns:
        True if the file changed (or would change in a dry run)
    """
    exists = path.exists()
    current = path.read_text(encoding="utf-8") if exists else ""
    desired = transform(current)

    if exists and desired == current:
        logger.debug("%s already up to date", path)
        return False

    if dry_run:
        action = "update" if exists else "create"
        user_output(f"[dry-run] would {action} {path}")
        return True

    write_text_atomic(path, desired, owner=owner)
    logger.debug("Wrote %s", path)
    return True
