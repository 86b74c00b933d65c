"""Parser combinator primitives.

Every combinator is a pure function taking the remaining input and
returning a ``(remainder, match)`` tuple. A combinator that does not match
returns the original input together with an empty match. Combinators never
raise; callers that need strictness check the match themselves.
"""

from collections.abc import Callable

type Combinator = Callable[[str], tuple[str, str]]
type Parser = Callable[[str], tuple[str, list[str]]]
type Predicate = Callable[[str], bool]


def literal(tag: str) -> Combinator:
    """Match an exact prefix.

    Args:
        tag: The literal text the input must start with.

    Returns:
        A combinator yielding ``tag`` as its match when the input starts
        with it.
    """

    def _literal(s: str) -> tuple[str, str]:
        if s.startswith(tag):
            return s[len(tag) :], tag
        return s, ""

    return _literal


def whitespace() -> Combinator:
    """Consume the leading run of whitespace, which may be empty."""

    def _whitespace(s: str) -> tuple[str, str]:
        rest = s.lstrip()
        return rest, s[: len(s) - len(rest)]

    return _whitespace


def until(delimiter: str) -> Combinator:
    """Consume everything up to, but not including, ``delimiter``.

    Args:
        delimiter: Literal text that ends the match.

    Returns:
        A combinator that leaves the delimiter at the start of the
        remainder, or returns the input untouched if the delimiter is absent.
    """

    def _until(s: str) -> tuple[str, str]:
        if (i := s.find(delimiter)) > -1:
            return s[i:], s[:i]
        return s, ""

    return _until


def one_line() -> Combinator:
    """Consume a single line terminated by ``\\n`` or ``\\r\\n``.

    The terminator is consumed but not included in the match. Input that
    has no terminator is returned whole as the final line.
    """

    def _one_line(s: str) -> tuple[str, str]:
        i = s.find("\n")
        if i == -1:
            return "", s

        line = s[:i]
        if line.endswith("\r"):
            line = line[:-1]
        return s[i + 1 :], line

    return _one_line


def split_lines(s: str) -> list[str]:
    """Split text into lines the way ``one_line`` reads them.

    Only ``\\n`` and ``\\r\\n`` end a line, unlike ``str.splitlines``. A
    trailing terminator does not produce an empty final line.
    """
    lines: list[str] = []
    rem = s
    while rem:
        rem, line = one_line()(rem)
        lines.append(line)
    return lines


def take_until(predicate: Predicate) -> Combinator:
    """Consume characters up to the first one satisfying ``predicate``.

    When no character satisfies the predicate the entire input is returned
    both as the match and as the unchanged remainder, which lets callers
    carry on on a best-effort basis.

    Args:
        predicate: Test applied to each character in turn.

    Returns:
        The combinator.
    """

    def _take_until(s: str) -> tuple[str, str]:
        for i, c in enumerate(s):
            if predicate(c):
                return s[i:], s[:i]
        return s, s

    return _take_until


def pair(first: Combinator, separator: Combinator, second: Combinator) -> Parser:
    """Sequence two combinators around a separator.

    The separator's match is discarded.

    Returns:
        A parser yielding a two element list of the first and second matches.
    """

    def _pair(s: str) -> tuple[str, list[str]]:
        rem, left = first(s)
        rem, _ = separator(rem)
        rem, right = second(rem)
        return rem, [left, right]

    return _pair


def is_alphanumeric(c: str) -> bool:
    return c.isalpha() or c.isnumeric()


def is_line_ending(c: str) -> bool:
    return c in "\r\n"


def is_not_digit(c: str) -> bool:
    # ASCII only, int() rejects digits from other scripts
    return not "0" <= c <= "9"
