"""Decorated commit log parsing.

Each log record has the shape ``(<decorations>) <message>`` or is a bare
message. Decorations are a comma separated list of ``tag: <name>`` entries,
branch names and a ``HEAD -> <branch>`` pointer.

Log text is cosmetic, so parsing never fails: a record that cannot be
split into decorations and message is kept whole as the message.
"""

import dataclasses
from dataclasses import dataclass, field

from gitz.parse._combinators import literal, split_lines, until, whitespace
from gitz.parse._scan import BlockScanner

DEFAULT_BRANCH = "main"
TAG_PREFIX = "tag: "
HEAD_POINTER_PREFIXES = ("HEAD ->", "HEAD->")

_DECORATION_OPEN = "("
_DECORATION_CLOSE = ") "
_POINTER = "->"


@dataclass(frozen=True, slots=True)
class LogEntry:
    """A single commit from a decorated log.

    Attributes:
        message: Commit message with surrounding whitespace removed. Multi-line
            bodies keep their internal newlines.
        tags: Tag names decorating the commit, in source order.
        branches: Local and remote branches decorating the commit, in source
            order, including any ``HEAD -> <branch>`` pointer verbatim.
        is_trunk: Whether one of the branches is the default branch.
        head_pointer_ref: Branch HEAD points to. Only ever set on the first
            entry of a parsed log, empty otherwise.
    """

    message: str
    tags: tuple[str, ...] = field(default_factory=tuple)
    branches: tuple[str, ...] = field(default_factory=tuple)
    is_trunk: bool = False
    head_pointer_ref: str = ""

    @property
    def tag(self) -> str:
        """The first tag, or an empty string if the commit is not tagged."""
        return self.tags[0] if self.tags else ""


def parse_log(
    text: str,
    *,
    default_branch: str = DEFAULT_BRANCH,
    marker: str | None = None,
) -> list[LogEntry]:
    """Parse decorated log text into log entries.

    Args:
        text: The raw log.
        default_branch: Name of the trunk branch.
        marker: Optional record marker. When given, records are the blocks
            starting with it, which keeps multi-line messages together.
            Otherwise every line is a record.

    Returns:
        One entry per record, in source order.
    """
    records = BlockScanner(marker).scan([text]) if marker else split_lines(text)

    entries = [parse_log_entry(record, default_branch=default_branch) for record in records]
    if entries:
        ref = find_head_pointer_ref(entries[0].branches, default_branch=default_branch)
        entries[0] = dataclasses.replace(entries[0], head_pointer_ref=ref)
    return entries


def parse_log_entry(record: str, *, default_branch: str = DEFAULT_BRANCH) -> LogEntry:
    """Parse a single log record.

    The decoration list ends at the first ``") "``. A record starting with
    ``(`` that has no such delimiter is treated as an undecorated message.
    """
    line = record.strip()

    rem, opening = literal(_DECORATION_OPEN)(line)
    if not opening:
        return LogEntry(message=line)

    rem, decorations = until(_DECORATION_CLOSE)(rem)
    if not rem.startswith(_DECORATION_CLOSE):
        return LogEntry(message=line)
    message = rem.removeprefix(_DECORATION_CLOSE).strip()

    tags: list[str] = []
    branches: list[str] = []
    is_trunk = False
    for decoration in decorations.split(","):
        ref = decoration.strip()
        if not ref:
            continue

        name, tag = literal(TAG_PREFIX)(ref)
        if tag:
            tags.append(name)
            continue

        branches.append(ref)
        if ref == default_branch:
            is_trunk = True

    return LogEntry(
        message=message,
        tags=tuple(tags),
        branches=tuple(branches),
        is_trunk=is_trunk,
    )


def find_head_pointer_ref(
    branches: tuple[str, ...], *, default_branch: str = DEFAULT_BRANCH
) -> str:
    """Extract the branch HEAD points to from a decoration list.

    A trailing occurrence of the default branch name is removed, so HEAD
    pointing at trunk yields an empty string.

    Returns:
        The branch name, or an empty string if there is no HEAD pointer.
    """
    for branch in branches:
        if not branch.startswith(HEAD_POINTER_PREFIXES):
            continue

        rem, _ = until(_POINTER)(branch)
        rem, _ = literal(_POINTER)(rem)
        ref, _ = whitespace()(rem)
        return ref.strip().removesuffix(default_branch).strip()
    return ""


def format_log_entry(entry: LogEntry) -> str:
    """Render an entry back into decorated log form."""
    decorations = [TAG_PREFIX + tag for tag in entry.tags] + list(entry.branches)
    if not decorations:
        return entry.message
    return f"{_DECORATION_OPEN}{', '.join(decorations)}{_DECORATION_CLOSE}{entry.message}"


def format_log(entries: list[LogEntry], *, marker: str | None = None) -> str:
    """Render entries back into a decorated log.

    Args:
        entries: Entries to render.
        marker: Optional record marker placed at the start of every record.

    Returns:
        The log text, one record per line (or per marker).
    """
    prefix = marker or ""
    return "\n".join(prefix + format_log_entry(entry) for entry in entries)
