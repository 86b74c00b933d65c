"""Porcelain v1 status parsing.

See https://git-scm.com/docs/git-status#_short_format for the format.
"""

from dataclasses import dataclass
from enum import StrEnum

from gitz.parse._combinators import one_line

# "XY <path>"
_MIN_LINE_LENGTH = 4
RENAME_SEPARATOR = " -> "


class FileStatusIndicator(StrEnum):
    """Single character status of a file in the index or work tree."""

    ADDED = "A"
    COPIED = "C"
    DELETED = "D"
    IGNORED = "!"
    MODIFIED = "M"
    RENAMED = "R"
    TYPE_CHANGED = "T"
    UPDATED = "U"
    UNMODIFIED = " "
    UNTRACKED = "?"


@dataclass(frozen=True, slots=True)
class FileStatus:
    """Status of a single file within a repository.

    Attributes:
        indicators: Index and work tree status, e.g. ``("?", "?")`` for an
            untracked file or ``("M", " ")`` for a staged modification.
        path: Path relative to the repository root. Renames keep git's
            ``<from> -> <to>`` form.
    """

    indicators: tuple[FileStatusIndicator, FileStatusIndicator]
    path: str

    def __str__(self) -> str:
        return f"{self.indicators[0]}{self.indicators[1]} {self.path}"

    @property
    def untracked(self) -> bool:
        return self.indicators == (
            FileStatusIndicator.UNTRACKED,
            FileStatusIndicator.UNTRACKED,
        )

    @property
    def modified(self) -> bool:
        """Whether the file is modified in the index or the work tree."""
        return FileStatusIndicator.MODIFIED in self.indicators

    @property
    def renamed(self) -> bool:
        return self.indicators[0] == FileStatusIndicator.RENAMED

    @property
    def rename_paths(self) -> tuple[str, str]:
        """The original and new path of a rename.

        Paths that are not renames are returned as both.
        """
        original, separator, renamed = self.path.partition(RENAME_SEPARATOR)
        if not separator:
            return self.path, self.path
        return original, renamed


def parse_porcelain_v1(text: str) -> list[FileStatus]:
    """Parse ``git status --porcelain`` output.

    Args:
        text: Raw porcelain v1 output.

    Returns:
        One FileStatus per non-empty line.

    Raises:
        ValueError: If a line carries an unknown status indicator.
    """
    statuses: list[FileStatus] = []

    rem = text
    while rem:
        rem, line = one_line()(rem)
        if len(line) < _MIN_LINE_LENGTH:
            continue

        statuses.append(
            FileStatus(
                indicators=(FileStatusIndicator(line[0]), FileStatusIndicator(line[1])),
                path=line[3:],
            )
        )

    return statuses
