"""GPG verification output parsing.

Parses the output of ``git tag -v`` and ``git verify-commit -v``. Both
commands print the raw object (tagger, author, committer lines) followed by
gpg's report on the signature.
"""

from dataclasses import dataclass

from gitz.parse._combinators import is_line_ending, literal, take_until, until

TAGGER_PREFIX = "tagger "
AUTHOR_PREFIX = "author "
COMMITTER_PREFIX = "committer "
FINGERPRINT_PREFIX = "using RSA key "
SIGNED_BY_PREFIX = 'Good signature from "'

_EMAIL_END = ">"


@dataclass(frozen=True, slots=True)
class Author:
    """A person identified by name and email address."""

    name: str = ""
    email: str = ""


@dataclass(frozen=True, slots=True)
class Signature:
    """GPG signature details reported alongside a commit or tag.

    Attributes:
        fingerprint: Fingerprint of the signing key.
        signed_by: Owner of the signing key, or None if gpg could not
            identify it.
    """

    fingerprint: str = ""
    signed_by: Author | None = None


@dataclass(frozen=True, slots=True)
class TagVerification:
    """Details of a GPG signed tag.

    Attributes:
        ref: The tag that was verified.
        tagger: Who created the tag.
        fingerprint: Fingerprint of the signing key.
        signed_by: Owner of the signing key, or None if gpg could not
            identify it (e.g. the public key is missing).
    """

    ref: str
    tagger: Author
    fingerprint: str
    signed_by: Author | None = None


@dataclass(frozen=True, slots=True)
class CommitVerification:
    """Details of a GPG signed commit."""

    sha: str
    author: Author
    committer: Author
    fingerprint: str
    signed_by: Author | None = None


def parse_author(text: str) -> Author:
    """Parse ``Name <email>`` into an Author.

    Anything following the closing ``>`` is ignored. Text without an opening
    ``<`` yields an empty Author.
    """
    rem, name = until("<")(text)
    rem, opening = literal("<")(rem)
    if not opening:
        return Author()

    closing, email = until(_EMAIL_END)(rem)
    if not closing.startswith(_EMAIL_END):
        email = rem
    return Author(name=name.removesuffix(" "), email=email)


def parse_tag_verification(ref: str, output: str) -> TagVerification:
    """Parse ``git tag -v`` output.

    Args:
        ref: The verified tag.
        output: Combined stdout and stderr of the command.

    Returns:
        The extracted verification details.
    """
    return TagVerification(
        ref=ref,
        tagger=parse_author(_field(output, TAGGER_PREFIX)),
        fingerprint=_field(output, FINGERPRINT_PREFIX),
        signed_by=_signed_by(output),
    )


def parse_commit_verification(sha: str, output: str) -> CommitVerification:
    """Parse ``git verify-commit -v`` output."""
    return CommitVerification(
        sha=sha,
        author=parse_author(_field(output, AUTHOR_PREFIX)),
        committer=parse_author(_field(output, COMMITTER_PREFIX)),
        fingerprint=_field(output, FINGERPRINT_PREFIX),
        signed_by=_signed_by(output),
    )


def parse_signature(output: str) -> Signature:
    """Parse the gpg report printed by ``--show-signature``."""
    return Signature(
        fingerprint=_field(output, FINGERPRINT_PREFIX),
        signed_by=_signed_by(output),
    )


def _field(output: str, prefix: str) -> str:
    """Return the rest of the line following the first ``prefix``."""
    if prefix not in output:
        return ""

    rem, _ = until(prefix)(output)
    rem, _ = literal(prefix)(rem)
    _, value = take_until(is_line_ending)(rem)
    return value


def _signed_by(output: str) -> Author | None:
    if SIGNED_BY_PREFIX not in output:
        return None

    rem, _ = until(SIGNED_BY_PREFIX)(output)
    rem, _ = literal(SIGNED_BY_PREFIX)(rem)
    _, signer = until('"')(rem)
    return parse_author(signer)
