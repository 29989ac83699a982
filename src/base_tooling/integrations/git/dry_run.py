"""No-op wrapper for git operations."""

from pathlib import Path

from base_tooling.cli.output import user_output
from base_tooling.integrations.git.abc import Git


class DryRunGit(Git):
    """No-op wrapper for git operations.

    Read operations are delegated to the wrapped implementation.
    Write operations print what would run and return without executing.
    """

    def __init__(self, wrapped: Git) -> None:
        """Initialize dry-run wrapper with a real implementation.

        Args:
            wrapped: The real git operations implementation to wrap
        """
        self._wrapped = wrapped

    def is_checkout(self, path: Path) -> bool:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.is_checkout(path)

    def is_worktree_clean(self, repo_root: Path) -> bool:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.is_worktree_clean(repo_root)

    def clone(self, url: str, destination: Path) -> None:
        """Print instead of cloning."""
        user_output(f"[dry-run] would run: git clone {url} {destination}")

    def fetch(self, repo_root: Path) -> None:
        """Print instead of fetching."""
        user_output(f"[dry-run] would run: git -C {repo_root} fetch --prune")

    def fast_forward(self, repo_root: Path) -> bool:
        """Print instead of merging; reports success."""
        user_output(f"[dry-run] would run: git -C {repo_root} merge --ff-only @{{u}}")
        return True

    def get_head_commit(self, repo_root: Path) -> str | None:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.get_head_commit(repo_root)
