"""Subprocess execution with rich error context.

All integrations run external commands through run_subprocess_with_context so
that a failure surfaces with the operation being attempted, the command line,
its exit code and whatever it printed.
"""

import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path


def _decoded(stream: str | bytes | None) -> str:
    if stream is None:
        return ""
    if isinstance(stream, bytes):
        stream = stream.decode("utf-8", errors="replace")
    return stream.strip()


def describe_failure(
    operation_context: str, cmd: Sequence[str], error: subprocess.CalledProcessError
) -> str:
    """Render a failed command as the multi-line message the error boundary prints."""
    lines = [
        f"Failed to {operation_context}",
        f"Command: {' '.join(cmd)}",
        f"Exit code: {error.returncode}",
    ]
    for label, stream in (("stdout", error.stdout), ("stderr", error.stderr)):
        text = _decoded(stream)
        if text:
            lines.append(f"{label}: {text}")
    return "\n".join(lines)


def run_subprocess_with_context(
    cmd: Sequence[str],
    operation_context: str,
    *,
    cwd: Path | None = None,
    capture_output: bool = True,
    env: Mapping[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run ``cmd`` and raise RuntimeError with context when it fails.

    Args:
        cmd: Command and arguments to execute
        operation_context: What the command does, phrased to follow "Failed to"
        cwd: Working directory for the command
        capture_output: Capture stdout/stderr as text. Installers, sudo prompts
            and activation pass False so their output reaches the terminal.
        env: Full environment for the child process (default: inherit)

    Raises:
        RuntimeError: The command exited non-zero or its binary is missing
    """
    argv = [str(arg) for arg in cmd]
    try:
        return subprocess.run(
            argv,
            cwd=cwd,
            capture_output=capture_output,
            text=True,
            encoding="utf-8",
            check=True,
            env=dict(env) if env is not None else None,
        )
    except subprocess.CalledProcessError as e:
        raise RuntimeError(describe_failure(operation_context, argv, e)) from e
    except FileNotFoundError as e:
        raise RuntimeError(
            f"Command not found while trying to {operation_context}: {argv[0]}"
            f"\nFull command: {' '.join(argv)}"
        ) from e
