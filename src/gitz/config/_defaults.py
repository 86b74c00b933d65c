"""Default configuration values.

This module defines the built-in default configuration values that are used
when no other configuration sources provide values.

Note: DEFAULT_CONFIG is a plain dict for type compatibility with deep_merge,
which always returns copies.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "default_branch": "main",
    "git_binary": "git",
    "timeout_ms": 30000,
    "logging": {
        "level": "info",
        "format": "json",
        "file": "",
    },
}

ENV_PREFIX = "GITZ_"
