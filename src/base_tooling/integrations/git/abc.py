"""High-level git operations interface.

This module provides a clean abstraction over the handful of git subprocess
calls the repository synchronizer needs, making it testable with fakes.

Architecture:
- Git: Abstract base class defining the interface
- RealGit: Production implementation using subprocess
- DryRunGit: Wrapper that delegates reads and prints writes
"""

from abc import ABC, abstractmethod
from pathlib import Path


class Git(ABC):
    """Abstract interface for git operations.

    All implementations (real and fake) must implement this interface.
    This interface contains ONLY runtime operations - no test setup methods.
    """

    @abstractmethod
    def is_checkout(self, path: Path) -> bool:
        """Return True if `path` is the top level of a git working tree."""
        ...

    @abstractmethod
    def is_worktree_clean(self, repo_root: Path) -> bool:
        """Return True if tracked files have no staged or unstaged modifications.

        Untracked files are ignored: they cannot be clobbered by a fast-forward.
        """
        ...

    @abstractmethod
    def clone(self, url: str, destination: Path) -> None:
        """Clone `url` into `destination` (full clone)."""
        ...

    @abstractmethod
    def fetch(self, repo_root: Path) -> None:
        """Fetch from the default remote, pruning deleted branches."""
        ...

    @abstractmethod
    def fast_forward(self, repo_root: Path) -> bool:
        """Fast-forward the current branch to its upstream.

        Returns:
            True on success, False if histories have diverged (nothing changed)
        """
        ...

    @abstractmethod
    def get_head_commit(self, repo_root: Path) -> str | None:
        """Return the commit SHA of HEAD, or None if it cannot be resolved."""
        ...
