"""Configuration models.

This module provides the Pydantic models for gitz configuration and the
factory methods that build them from dictionaries, TOML files and the
environment.
"""

from enum import StrEnum
from pathlib import Path
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gitz.config._defaults import DEFAULT_CONFIG
from gitz.config._loader import deep_merge, parse_env_vars, read_toml_file
from gitz.exceptions import ConfigValidationError


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty logs to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    file: str = ""


class GitzConfig(BaseModel):
    """Client configuration.

    Attributes:
        default_branch: Name of the trunk branch, used when classifying log
            decorations.
        git_binary: Name or path of the git executable.
        timeout_ms: Timeout applied to every git invocation.
        logging: Logging configuration section.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    default_branch: str = Field(default="main", min_length=1)
    git_binary: str = Field(default="git", min_length=1)
    timeout_ms: int = Field(default=30000, gt=0)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:  # pyright: ignore[reportExplicitAny]
        """Create configuration from a dictionary merged over the defaults.

        Raises:
            ConfigValidationError: If a value has the wrong type or range.
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        try:
            return cls.model_validate(merged)
        except ValidationError as e:
            error = e.errors()[0]
            key = ".".join(str(part) for part in error["loc"])
            msg = f"Invalid configuration value for {key}: {error['msg']}"
            raise ConfigValidationError(
                msg,
                key=key,
                value=error.get("input"),
                expected=error["type"],
            ) from e

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Load configuration from a TOML file merged over the defaults.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails.
        """
        return cls.from_dict(read_toml_file(path))

    @classmethod
    def load(cls, path: Path | None = None, *, include_env: bool = True) -> Self:
        """Load configuration from all sources.

        Precedence, highest first: ``GITZ_*`` environment variables, the
        TOML file at ``path``, built-in defaults.

        Args:
            path: Optional TOML file. Missing files are skipped.
            include_env: Whether to read ``GITZ_*`` environment variables.

        Returns:
            The merged configuration.
        """
        data: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]
        if path is not None and path.exists():
            data = read_toml_file(path)
        if include_env:
            data = deep_merge(data, parse_env_vars())
        return cls.from_dict(data)


def load_config(path: Path | None = None) -> GitzConfig:
    """Load configuration from defaults, an optional file and the environment."""
    return GitzConfig.load(path)
