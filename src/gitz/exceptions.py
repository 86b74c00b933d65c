"""gitz exceptions."""

from pathlib import Path
from typing import Any


class GitzError(Exception):
    """Base exception for gitz errors."""


class GitMissingError(GitzError):
    """Raised when no git binary can be found on the PATH.

    Attributes:
        path_env: Value of the PATH environment variable at lookup time.
    """

    def __init__(self, message: str = "", *, path_env: str = "") -> None:
        """Initialize with error message and the searched PATH.

        Args:
            message: Human-readable error message. A default is derived
                from ``path_env`` when empty.
            path_env: Value of the PATH environment variable.
        """
        if not message:
            message = (
                "git is not installed under the PATH environment variable. "
                f"PATH resolves to {path_env}"
            )
        super().__init__(message)
        self.path_env: str = path_env


class GitExecCommandError(GitzError):
    """Raised when a git command exits with an error.

    Attributes:
        cmd: The command line that failed.
        out: Raw output captured from git.
    """

    def __init__(self, *, cmd: str, out: str) -> None:
        """Initialize with the failing command and its output."""
        super().__init__(f"failed to execute git command: {cmd}\n\n{out}")
        self.cmd: str = cmd
        self.out: str = out


class NonRelativePathError(GitzError):
    """Raised when a path resolves outside of the repository work tree.

    Attributes:
        root_dir: Root directory of the work tree.
        target_path: The path that was resolved.
        relative_path: The resolved relative path that escaped the root.
    """

    def __init__(self, *, root_dir: str, target_path: str, relative_path: str) -> None:
        """Initialize with the root, the target and the escaping path."""
        super().__init__(
            f"{target_path} is not relative to the git repository working "
            f"directory {root_dir} as it produces path {relative_path}"
        )
        self.root_dir: str = root_dir
        self.target_path: str = target_path
        self.relative_path: str = relative_path


class DiffParseError(GitzError, ValueError):
    """Raised when unified diff text does not have the expected shape.

    Attributes:
        block: The per-file diff block that could not be parsed.
    """

    def __init__(self, message: str, *, block: str = "") -> None:
        """Initialize with error message and the offending block.

        Args:
            message: Human-readable error message.
            block: The diff block being parsed when the error occurred.
        """
        super().__init__(message)
        self.block: str = block


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(GitzError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected


class ConfigPathError(ConfigError, ValueError):
    """Raised when a git config key is not a valid ``section.name`` path.

    Attributes:
        path: The rejected config path.
    """

    def __init__(self, message: str, *, path: str) -> None:
        """Initialize with error message and the rejected path."""
        super().__init__(message)
        self.path: str = path
