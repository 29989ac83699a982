"""Production Git implementation using subprocess.

This module provides the real Git implementation that executes actual git
commands via subprocess.
"""

import subprocess
from pathlib import Path

from base_tooling.core.subprocess import describe_failure, run_subprocess_with_context
from base_tooling.integrations.git.abc import Git


class RealGit(Git):
    """Production implementation using subprocess.

    All git operations execute actual git commands via subprocess.
    """

    def is_checkout(self, path: Path) -> bool:
        if not path.is_dir():
            return False
        result = subprocess.run(
            ["git", "-C", str(path), "rev-parse", "--show-toplevel"],
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return False
        return Path(result.stdout.strip()).resolve() == path.resolve()

    def is_worktree_clean(self, repo_root: Path) -> bool:
        result = run_subprocess_with_context(
            ["git", "-C", str(repo_root), "status", "--porcelain", "--untracked-files=no"],
            operation_context=f"check working tree status of {repo_root}",
        )
        return result.stdout.strip() == ""

    def clone(self, url: str, destination: Path) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        run_subprocess_with_context(
            ["git", "clone", url, str(destination)],
            operation_context=f"clone {url}",
            capture_output=False,
        )

    def fetch(self, repo_root: Path) -> None:
        run_subprocess_with_context(
            ["git", "-C", str(repo_root), "fetch", "--prune"],
            operation_context=f"fetch updates for {repo_root}",
            capture_output=False,
        )

    def fast_forward(self, repo_root: Path) -> bool:
        result = subprocess.run(
            ["git", "-C", str(repo_root), "merge", "--ff-only", "@{u}"],
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode == 0:
            return True
        # merge --ff-only also fails when no upstream is configured; surface that as an error
        if "Not possible to fast-forward" in result.stderr or "diverg" in result.stderr:
            return False
        error = subprocess.CalledProcessError(
            result.returncode, result.args, output=result.stdout, stderr=result.stderr
        )
        raise RuntimeError(describe_failure(f"fast-forward {repo_root}", result.args, error))

    def get_head_commit(self, repo_root: Path) -> str | None:
        result = subprocess.run(
            ["git", "-C", str(repo_root), "rev-parse", "HEAD"],
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None
        return result.stdout.strip()
