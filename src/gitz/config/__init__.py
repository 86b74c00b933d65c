"""gitz configuration.

Example:
    >>> from gitz.config import load_config
    >>> config = load_config()
    >>> config.default_branch
    'main'
"""

from gitz.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

from ._defaults import DEFAULT_CONFIG, ENV_PREFIX
from ._loader import (
    copy_value,
    deep_merge,
    parse_env_vars,
    parse_string_value,
    read_toml_file,
    set_nested_key,
)
from ._models import GitzConfig, LogFormat, LoggingConfig, LogLevel, load_config

__all__ = [
    "DEFAULT_CONFIG",
    "ENV_PREFIX",
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "GitzConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "copy_value",
    "deep_merge",
    "load_config",
    "parse_env_vars",
    "parse_string_value",
    "read_toml_file",
    "set_nested_key",
]
