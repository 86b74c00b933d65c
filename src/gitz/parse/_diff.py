"""Unified diff parsing.

Parses the output of ``git diff -U0 --no-color`` into per-file change
records. Diff text is machine generated, so anything that does not have
the expected shape raises a DiffParseError rather than being skipped.
"""

from dataclasses import dataclass, field

from gitz.exceptions import DiffParseError
from gitz.parse._combinators import (
    Combinator,
    is_not_digit,
    literal,
    one_line,
    pair,
    take_until,
    until,
)
from gitz.parse._scan import DIFF_MARKER, diff_scanner

# @@ -<removed> +<added> @@
HUNK_DELIMITER = "@@"
ADDED_PREFIX = "+"
REMOVED_PREFIX = "-"
NO_NEWLINE_PREFIX = "\\"

_FILE_HEADER = DIFF_MARKER + " "
_HUNK_HEADER = HUNK_DELIMITER + " "
_MIN_COUNT = 1


@dataclass(frozen=True, slots=True)
class DiffChange:
    """One side of a hunk.

    Attributes:
        line_no: 1-based line number the change starts at.
        count: Number of lines covered by the change, never less than 1.
        text: Changed lines joined by newlines with their +/- markers
            removed. Empty when the side has no lines.
    """

    line_no: int
    count: int = _MIN_COUNT
    text: str = ""


@dataclass(frozen=True, slots=True)
class DiffChunk:
    """A single hunk, split into its removed and added sides."""

    removed: DiffChange
    added: DiffChange


@dataclass(frozen=True, slots=True)
class FileDiff:
    """All hunks for one file, in the order they appear in the diff."""

    path: str
    chunks: tuple[DiffChunk, ...] = field(default_factory=tuple)


def normalize_count(count: int) -> int:
    """Coerce a hunk line count to at least one.

    Git omits the count for single line ranges and reports 0 for empty
    ranges. Both are recorded as 1.
    """
    return max(count, _MIN_COUNT)


def parse_diffs(text: str) -> list[FileDiff]:
    """Parse a complete unified diff into one FileDiff per file.

    Args:
        text: Raw ``git diff -U0`` output.

    Returns:
        FileDiff records in source order. Empty input yields an empty list.

    Raises:
        DiffParseError: If any per-file block is malformed. No partial
            results are returned.
    """
    return [parse_diff(block) for block in diff_scanner().scan([text])]


def parse_diff(block: str) -> FileDiff:
    """Parse a single per-file diff block.

    Args:
        block: Text starting with ``diff --git``.

    Returns:
        The parsed FileDiff.

    Raises:
        DiffParseError: If the file header, the first hunk header or any
            subsequent hunk header is missing or malformed.
    """
    rem, path = _parse_path(block)

    # header lines such as "--- a/x@@y" may contain the delimiter themselves
    while rem and not rem.startswith(_HUNK_HEADER):
        rem, _ = one_line()(rem)
    if not rem:
        msg = f"No hunk header found in diff of {path}"
        raise DiffParseError(msg, block=block)

    chunks: list[DiffChunk] = []
    while rem.startswith(HUNK_DELIMITER):
        rem, chunk = _parse_chunk(rem, block)
        chunks.append(chunk)

    return FileDiff(path=path, chunks=tuple(chunks))


def _parse_path(block: str) -> tuple[str, str]:
    rem, marker = literal(_FILE_HEADER)(block)
    if not marker:
        msg = f"Diff block does not start with {_FILE_HEADER!r}"
        raise DiffParseError(msg, block=block)

    if " " not in rem:
        msg = "Diff header does not contain both sides of the path"
        raise DiffParseError(msg, block=block)
    rem, token = until(" ")(rem)

    # drop the a/ side marker
    path = token[token.find("/") + 1 :]
    rem, _ = one_line()(rem)
    return rem, path


def _parse_chunk(s: str, block: str) -> tuple[str, DiffChunk]:
    rem, _ = literal(_HUNK_HEADER)(s)
    rem, ranges = pair(
        _range_combinator(REMOVED_PREFIX), literal(" "), _range_combinator(ADDED_PREFIX)
    )(rem)

    removed_start, removed_count = _parse_range(ranges[0], REMOVED_PREFIX, block)
    added_start, added_count = _parse_range(ranges[1], ADDED_PREFIX, block)

    rem, closing = literal(" " + HUNK_DELIMITER)(rem)
    if not closing:
        msg = f"Hunk header is not closed by {HUNK_DELIMITER!r}"
        raise DiffParseError(msg, block=block)
    rem, _ = one_line()(rem)

    rem, removed = _collect_lines(rem, REMOVED_PREFIX)
    rem, added = _collect_lines(rem, ADDED_PREFIX)

    return rem, DiffChunk(
        removed=DiffChange(
            line_no=removed_start,
            count=normalize_count(removed_count),
            text=removed,
        ),
        added=DiffChange(
            line_no=added_start,
            count=normalize_count(added_count),
            text=added,
        ),
    )


def _range_combinator(prefix: str) -> Combinator:
    """Capture ``<prefix><start>[,<count>]`` verbatim, including the prefix."""

    def _range(s: str) -> tuple[str, str]:
        rem, marker = literal(prefix)(s)
        if not marker:
            return s, ""

        rem, _ = take_until(is_not_digit)(rem)
        rem, comma = literal(",")(rem)
        if comma:
            rem, _ = take_until(is_not_digit)(rem)
        return rem, s[: len(s) - len(rem)]

    return _range


def _parse_range(token: str, prefix: str, block: str) -> tuple[int, int]:
    start, _, count = token.removeprefix(prefix).partition(",")
    if not token.startswith(prefix) or not start.isdigit():
        msg = f"Malformed hunk range {token!r}, expected {prefix}<start>[,<count>]"
        raise DiffParseError(msg, block=block)

    if not count:
        return int(start), _MIN_COUNT
    if not count.isdigit():
        msg = f"Malformed hunk count in range {token!r}"
        raise DiffParseError(msg, block=block)
    return int(start), int(count)


def _collect_lines(s: str, prefix: str) -> tuple[str, str]:
    lines: list[str] = []
    rem = s
    while rem:
        if rem.startswith(NO_NEWLINE_PREFIX):
            rem, _ = one_line()(rem)
            continue

        rest, marker = literal(prefix)(rem)
        if not marker:
            break
        rem, line = one_line()(rest)
        lines.append(line)

    return rem, "\n".join(lines)


def format_diff(diff: FileDiff) -> str:
    """Render a FileDiff back into ``git diff -U0`` form.

    Only the parts the parser reads are reproduced: the file header and
    each hunk with its changed lines.
    """
    lines = [f"{_FILE_HEADER}a/{diff.path} b/{diff.path}"]
    for chunk in diff.chunks:
        removed, added = chunk.removed, chunk.added
        lines.append(
            f"{HUNK_DELIMITER} -{removed.line_no},{removed.count} "
            f"+{added.line_no},{added.count} {HUNK_DELIMITER}"
        )
        if removed.text:
            lines.extend(REMOVED_PREFIX + line for line in removed.text.split("\n"))
        if added.text:
            lines.extend(ADDED_PREFIX + line for line in added.text.split("\n"))
    return "\n".join(lines)


def format_diffs(diffs: list[FileDiff]) -> str:
    return "\n".join(format_diff(diff) for diff in diffs)
