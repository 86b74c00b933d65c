"""gitz: a git client built on text parsing.

The ``gitz.parse`` package turns raw git output (unified diffs, decorated
logs, porcelain status, shown objects, signature verification) into typed
records. The ``gitz.client`` package runs git and feeds its output to those
parsers.

Example:
    >>> from gitz import parse_diffs
    >>> diffs = parse_diffs("diff --git a/a.txt b/a.txt\\n@@ -3 +3,2 @@\\n-old\\n+new\\n+newer")
    >>> diffs[0].chunks[0].added
    DiffChange(line_no=3, count=2, text='new\\nnewer')
"""

from gitz.client import Client, Repository, TagSortKey
from gitz.config import GitzConfig, load_config
from gitz.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigPathError,
    ConfigValidationError,
    DiffParseError,
    GitExecCommandError,
    GitMissingError,
    GitzError,
    NonRelativePathError,
)
from gitz.parse import (
    Author,
    BlobDetails,
    CommitDetails,
    CommitVerification,
    DiffChange,
    DiffChunk,
    FileDiff,
    FileStatus,
    FileStatusIndicator,
    LogEntry,
    Signature,
    TagAnnotation,
    TagDetails,
    TagVerification,
    TreeDetails,
    format_diff,
    format_diffs,
    format_log,
    format_log_entry,
    parse_diff,
    parse_diffs,
    parse_log,
    parse_log_entry,
    parse_porcelain_v1,
)

__all__ = [
    "Author",
    "BlobDetails",
    "Client",
    "CommitDetails",
    "CommitVerification",
    "ConfigError",
    "ConfigLoadError",
    "ConfigPathError",
    "ConfigValidationError",
    "DiffChange",
    "DiffChunk",
    "DiffParseError",
    "FileDiff",
    "FileStatus",
    "FileStatusIndicator",
    "GitExecCommandError",
    "GitMissingError",
    "GitzConfig",
    "GitzError",
    "LogEntry",
    "NonRelativePathError",
    "Repository",
    "Signature",
    "TagAnnotation",
    "TagDetails",
    "TagSortKey",
    "TagVerification",
    "TreeDetails",
    "format_diff",
    "format_diffs",
    "format_log",
    "format_log_entry",
    "load_config",
    "parse_diff",
    "parse_diffs",
    "parse_log",
    "parse_log_entry",
    "parse_porcelain_v1",
]
