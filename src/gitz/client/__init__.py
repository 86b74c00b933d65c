"""Git client.

This package runs the installed git binary and parses its output.

Classes:
    Client: Fluent access to git operations on a working directory.
    Repository: Snapshot of the state of a working directory.
    TagSortKey: Sort keys for listing tags.

Functions:
    trim, trim_and_prefix, trim_and_remove: Option value normalisers.
    valid_config_path: Check a git config key.

Example:
    >>> from gitz.client import Client, TagSortKey
    >>> client = Client()
    >>> client.tags(sort_by=[TagSortKey.VERSION_DESC], count=1)
    ['v1.2.0']
"""

from gitz.client._client import GIT_ENV, LOG_FORMAT, LOG_RECORD_MARKER, Client
from gitz.client._exec import CommandResult, GitCommand, run_git
from gitz.client._models import HEAD_REF, RELATIVE_AT_ROOT, Repository, TagFilter, TagSortKey
from gitz.client._options import trim, trim_and_prefix, trim_and_remove, valid_config_path

__all__ = [
    "GIT_ENV",
    "HEAD_REF",
    "LOG_FORMAT",
    "LOG_RECORD_MARKER",
    "RELATIVE_AT_ROOT",
    "Client",
    "CommandResult",
    "GitCommand",
    "Repository",
    "TagFilter",
    "TagSortKey",
    "run_git",
    "trim",
    "trim_and_prefix",
    "trim_and_remove",
    "valid_config_path",
]
