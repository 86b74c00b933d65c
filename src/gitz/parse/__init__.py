"""Text parsing for git output.

This package turns the plain-text output of git commands into typed
records. It is built on a small set of parser combinators and a block
scanner that splits streamed output into independently parsed blocks.
"""

from gitz.parse._combinators import (
    Combinator,
    Parser,
    is_alphanumeric,
    is_line_ending,
    is_not_digit,
    literal,
    one_line,
    pair,
    split_lines,
    take_until,
    until,
    whitespace,
)
from gitz.parse._diff import (
    DiffChange,
    DiffChunk,
    FileDiff,
    format_diff,
    format_diffs,
    normalize_count,
    parse_diff,
    parse_diffs,
)
from gitz.parse._log import (
    DEFAULT_BRANCH,
    LogEntry,
    find_head_pointer_ref,
    format_log,
    format_log_entry,
    parse_log,
    parse_log_entry,
)
from gitz.parse._scan import (
    DIFF_MARKER,
    BlockScanner,
    diff_scanner,
    scan_blocks,
    scan_diff_blocks,
)
from gitz.parse._show import (
    COMMIT_HEADER,
    TAG_HEADER,
    TREE_HEADER,
    BlobDetails,
    CommitDetails,
    TagAnnotation,
    TagDetails,
    TreeDetails,
    parse_commit_details,
    parse_show_date,
    parse_tag_details,
    parse_tree_details,
)
from gitz.parse._status import FileStatus, FileStatusIndicator, parse_porcelain_v1
from gitz.parse._verify import (
    Author,
    CommitVerification,
    Signature,
    TagVerification,
    parse_author,
    parse_commit_verification,
    parse_signature,
    parse_tag_verification,
)

__all__ = [
    "COMMIT_HEADER",
    "DEFAULT_BRANCH",
    "DIFF_MARKER",
    "TAG_HEADER",
    "TREE_HEADER",
    "Author",
    "BlobDetails",
    "BlockScanner",
    "Combinator",
    "CommitDetails",
    "CommitVerification",
    "DiffChange",
    "DiffChunk",
    "FileDiff",
    "FileStatus",
    "FileStatusIndicator",
    "LogEntry",
    "Parser",
    "Signature",
    "TagAnnotation",
    "TagDetails",
    "TagVerification",
    "TreeDetails",
    "diff_scanner",
    "find_head_pointer_ref",
    "format_diff",
    "format_diffs",
    "format_log",
    "format_log_entry",
    "is_alphanumeric",
    "is_line_ending",
    "is_not_digit",
    "literal",
    "normalize_count",
    "one_line",
    "pair",
    "parse_author",
    "parse_commit_details",
    "parse_commit_verification",
    "parse_diff",
    "parse_diffs",
    "parse_log",
    "parse_log_entry",
    "parse_porcelain_v1",
    "parse_show_date",
    "parse_signature",
    "parse_tag_details",
    "parse_tag_verification",
    "parse_tree_details",
    "scan_blocks",
    "scan_diff_blocks",
    "split_lines",
    "take_until",
    "until",
    "whitespace",
]
