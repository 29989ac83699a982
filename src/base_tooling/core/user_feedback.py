"""User-facing diagnostic output with mode awareness."""

from abc import ABC, abstractmethod

import click

from base_tooling.cli.output import user_output


class UserFeedback(ABC):
    """Provides user-facing progress output that's mode-aware.

    Pipeline steps call ctx.feedback methods instead of printing directly, so
    `--format json` runs can silence progress chatter without threading a flag
    through every function.

    Two modes:
    - Interactive: show everything (`==> step` lines, warnings, errors)
    - Suppressed: only warnings and errors
    """

    @abstractmethod
    def info(self, message: str) -> None:
        """Show a progress message (suppressed in JSON mode)."""

    @abstractmethod
    def success(self, message: str) -> None:
        """Show a success message (suppressed in JSON mode)."""

    @abstractmethod
    def warn(self, message: str) -> None:
        """Show a warning (always shown)."""

    @abstractmethod
    def error(self, message: str) -> None:
        """Show an error message (always shown)."""


class InteractiveFeedback(UserFeedback):
    """Feedback shown in interactive mode (all messages)."""

    def info(self, message: str) -> None:
        user_output(f"==> {message}")

    def success(self, message: str) -> None:
        user_output(click.style(message, fg="green"))

    def warn(self, message: str) -> None:
        user_output(click.style(f"WARN: {message}", fg="yellow"))

    def error(self, message: str) -> None:
        user_output(click.style(message, fg="red"))


class SuppressedFeedback(UserFeedback):
    """Feedback for machine-readable runs (only warnings and errors shown)."""

    def info(self, message: str) -> None:
        pass

    def success(self, message: str) -> None:
        pass

    def warn(self, message: str) -> None:
        user_output(click.style(f"WARN: {message}", fg="yellow"))

    def error(self, message: str) -> None:
        user_output(click.style(message, fg="red"))
