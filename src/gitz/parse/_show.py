"""``git show`` output parsing.

Commits are shown with ``--format=fuller``, which lays out the author and
committer over four labelled header lines followed by the indented
message::

    commit 3b1f9a0c5e2d7f41b8a6c0d9e3f2a1b4c5d6e7f8
    Author:     batman <batman@dc.com>
    AuthorDate: Thu Oct 5 14:03:01 2023 +0100
    Commit:     batman <batman@dc.com>
    CommitDate: Thu Oct 5 14:03:01 2023 +0100

        feat: a commit message

Annotated tags put a ``tag`` section with the tagger and the annotation in
front of the commit. Trees list one entry per line below a ``tree`` header.
"""

from dataclasses import dataclass, field
from datetime import datetime

from gitz.parse._combinators import literal, one_line, split_lines
from gitz.parse._verify import Author, Signature, parse_author, parse_signature

COMMIT_HEADER = "commit "
TAG_HEADER = "tag "
TREE_HEADER = "tree "
GPG_PREFIX = "gpg:"
PGP_SIGNATURE_START = "-----BEGIN PGP SIGNATURE-----"

# git's default date format, e.g. "Thu Oct 5 14:03:01 2023 +0100"
DATE_FORMAT = "%a %b %d %H:%M:%S %Y %z"
MESSAGE_INDENT = "    "

_AUTHOR = "Author"
_AUTHOR_DATE = "AuthorDate"
_COMMITTER = "Commit"
_COMMITTER_DATE = "CommitDate"
_TAGGER = "Tagger"
_TAGGER_DATE = "TaggerDate"


@dataclass(frozen=True, slots=True)
class BlobDetails:
    """Contents of a blob."""

    ref: str
    content: str = ""


@dataclass(frozen=True, slots=True)
class CommitDetails:
    """A commit as reported by ``git show --format=fuller``.

    Attributes:
        ref: The ref that was shown.
        sha: Full object name of the commit.
        author: Who originally wrote the change.
        author_date: When the change was written, or None if git reported
            the date in an unexpected format.
        committer: Who committed the change.
        committer_date: When the change was committed.
        message: Commit message with its indentation removed.
        signature: GPG signature details, or None for an unsigned commit.
    """

    ref: str = ""
    sha: str = ""
    author: Author = field(default_factory=Author)
    author_date: datetime | None = None
    committer: Author = field(default_factory=Author)
    committer_date: datetime | None = None
    message: str = ""
    signature: Signature | None = None


@dataclass(frozen=True, slots=True)
class TagAnnotation:
    """Tagger and message of an annotated tag."""

    tagger: Author
    tagger_date: datetime | None = None
    message: str = ""
    signature: Signature | None = None


@dataclass(frozen=True, slots=True)
class TagDetails:
    """A tag and the commit it points to.

    Attributes:
        ref: The tag that was shown.
        commit: The tagged commit, or None if the tag points to another
            kind of object.
        annotation: Tagger and message, or None for a lightweight tag.
    """

    ref: str
    commit: CommitDetails | None = None
    annotation: TagAnnotation | None = None


@dataclass(frozen=True, slots=True)
class TreeDetails:
    """Entries of a tree. Subtrees carry a trailing ``/``."""

    ref: str
    entries: tuple[str, ...] = ()


def parse_show_date(value: str) -> datetime | None:
    """Parse a date in git's default format.

    Returns:
        A timezone aware datetime, or None if the value has another format.
    """
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT)
    except ValueError:
        return None


def parse_commit_details(text: str, *, ref: str = "") -> CommitDetails:
    """Parse a commit shown with ``--format=fuller``.

    Args:
        text: Output starting with the ``commit <sha>`` line.
        ref: The ref that was shown, recorded on the result.

    Returns:
        The commit details. Missing header fields are left empty.
    """
    rem, header = one_line()(text)
    sha, _ = literal(COMMIT_HEADER)(header)

    rem, fields, gpg = _read_header(rem)
    message = "\n".join(line.removeprefix(MESSAGE_INDENT) for line in split_lines(rem))
    return CommitDetails(
        ref=ref,
        sha=sha.partition(" ")[0],
        author=parse_author(fields.get(_AUTHOR, "")),
        author_date=parse_show_date(fields.get(_AUTHOR_DATE, "")),
        committer=parse_author(fields.get(_COMMITTER, "")),
        committer_date=parse_show_date(fields.get(_COMMITTER_DATE, "")),
        message=message.strip(),
        signature=parse_signature(gpg) if gpg else None,
    )


def parse_tag_details(ref: str, text: str) -> TagDetails:
    """Parse a tag shown with ``--format=fuller``.

    A lightweight tag is shown as its commit. An annotated tag is shown as
    a ``tag`` section followed by the commit.

    Args:
        ref: The tag that was shown.
        text: Output of ``git show`` for the tag.

    Returns:
        The tag details.
    """
    if text.startswith(COMMIT_HEADER):
        return TagDetails(ref=ref, commit=parse_commit_details(text, ref=ref))

    # commit messages are indented, so only the commit header starts a line with it
    section, separator, commit = text.rpartition("\n" + COMMIT_HEADER)
    if not separator:
        section, commit = text, ""

    rem, _ = one_line()(section)
    body, fields, _ = _read_header(rem)
    message, _, _ = body.partition(PGP_SIGNATURE_START)
    gpg = "\n".join(line for line in split_lines(section) if line.startswith(GPG_PREFIX))

    annotation = TagAnnotation(
        tagger=parse_author(fields.get(_TAGGER, "")),
        tagger_date=parse_show_date(fields.get(_TAGGER_DATE, "")),
        message="\n".join(
            line for line in split_lines(message) if not line.startswith(GPG_PREFIX)
        ).strip(),
        signature=parse_signature(gpg) if gpg else None,
    )
    return TagDetails(
        ref=ref,
        commit=parse_commit_details(COMMIT_HEADER + commit, ref=ref) if commit else None,
        annotation=annotation,
    )


def parse_tree_details(ref: str, text: str) -> TreeDetails:
    """Parse a tree shown by ``git show``.

    Args:
        ref: The tree that was shown.
        text: Output starting with the ``tree <ref>`` line.

    Returns:
        The tree entries in the order git lists them.
    """
    rem, _ = one_line()(text)
    return TreeDetails(ref=ref, entries=tuple(line for line in split_lines(rem) if line))


def _read_header(s: str) -> tuple[str, dict[str, str], str]:
    """Read ``Label: value`` lines up to the first blank line.

    Returns:
        The text after the blank line, the header fields by label and any
        gpg report lines joined by newlines.
    """
    fields: dict[str, str] = {}
    gpg: list[str] = []

    rem = s
    while rem:
        rem, line = one_line()(rem)
        if not line:
            break
        if line.startswith(GPG_PREFIX):
            gpg.append(line)
            continue

        label, separator, value = line.partition(":")
        if separator:
            fields[label] = value.strip()

    return rem, fields, "\n".join(gpg)
