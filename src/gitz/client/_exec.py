"""Execution of git as a subprocess.

Commands are always passed to git as an argument list, never through a
shell, so arguments such as commit messages need no quoting.
"""

import os
import shlex
import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path

# Default timeout in milliseconds
DEFAULT_TIMEOUT_MS: int = 30000  # 30 seconds


@dataclass(frozen=True, slots=True)
class GitCommand:
    """A single git invocation.

    Attributes:
        args: Arguments following the git binary, e.g. ``("log", "-1")``.
        binary: Name or path of the git executable.
        cwd: Working directory for execution.
        env: Additional environment variables to set.
        timeout_ms: Execution timeout in milliseconds.
    """

    args: tuple[str, ...]
    binary: str = "git"
    cwd: str | Path | None = None
    env: dict[str, str] = field(default_factory=dict)
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    @property
    def argv(self) -> list[str]:
        return [self.binary, *self.args]

    def __str__(self) -> str:
        return shlex.join(self.argv)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result from a git invocation.

    Attributes:
        success: Whether git ran and exited with status 0.
        exit_code: Process exit code, or None if git could not be run.
        stdout: Standard output.
        stderr: Standard error.
        error: Error message if execution failed (timeout, not found, etc.).
        timed_out: Whether the command timed out.
        command_not_found: Whether the git binary was not found.
        duration_ms: Wall clock time spent running the command.
    """

    success: bool
    exit_code: int | None = None
    stdout: str = ""
    stderr: str = ""
    error: str | None = None
    timed_out: bool = False
    command_not_found: bool = False
    duration_ms: float = 0.0

    @property
    def output(self) -> str:
        """Combined stdout and stderr, in that order."""
        if self.stdout and self.stderr:
            return f"{self.stdout}\n{self.stderr}"
        return self.stdout or self.stderr or self.error or ""


def run_git(command: GitCommand) -> CommandResult:
    """Execute a git command.

    Handles timeouts and a missing git binary, and captures stdout/stderr.
    Output is decoded as UTF-8 with undecodable bytes replaced.

    Args:
        command: The command to run.

    Returns:
        CommandResult with execution outcome.
    """
    env = {**os.environ, **command.env}
    cwd = str(command.cwd) if command.cwd else None
    timeout_seconds = command.timeout_ms / 1000.0

    start = time.perf_counter()
    try:
        result = subprocess.run(  # noqa: S603
            command.argv,
            env=env,
            cwd=cwd,
            capture_output=True,
            timeout=timeout_seconds,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return CommandResult(
            success=False,
            error=f"Command timed out after {timeout_seconds}s",
            timed_out=True,
            duration_ms=_elapsed_ms(start),
        )
    except FileNotFoundError as e:
        return CommandResult(
            success=False,
            error=str(e),
            command_not_found=True,
            duration_ms=_elapsed_ms(start),
        )

    return CommandResult(
        success=result.returncode == 0,
        exit_code=result.returncode,
        stdout=result.stdout.decode("utf-8", errors="replace"),
        stderr=result.stderr.decode("utf-8", errors="replace"),
        duration_ms=_elapsed_ms(start),
    )


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0
